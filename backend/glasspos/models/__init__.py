from .auth import User, USER_PUBLIC_COLUMNS
from .catalog import Category, Supplier, Product
from .customers import Customer
from .sales import Sale, SaleItem
from .operations import Expense, Shift

# Creation order used by the schema bootstrapper
SCHEMA_MODELS = (User, Category, Supplier, Product, Customer, Sale, SaleItem, Expense, Shift)

SCHEMA_TABLES = tuple(model.__table__ for model in SCHEMA_MODELS)

__all__ = [
    'User', 'USER_PUBLIC_COLUMNS',
    'Category', 'Supplier', 'Product',
    'Customer',
    'Sale', 'SaleItem',
    'Expense', 'Shift',
    'SCHEMA_MODELS', 'SCHEMA_TABLES',
]
