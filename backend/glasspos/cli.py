# Overview: Flask CLI command groups for bootstrap, inspection, and maintenance.

# backend/glasspos/cli.py
# Commands Legend:
# - Use: flask --app glasspos <group> <command> [options]
#
# System bootstrap:
# - flask system init
#   Idempotent: create missing tables, then seed the admin user and "General" category.
# - flask system tables
#   List the tables present in the store file.
#
# Users:
# - flask users list
#   List users with role and active status.
# - flask users create --id u-002 --username jane --full-name "Jane Doe" --role cashier
#   Create a user (prompts for the password if omitted).
# - flask users hash-password [PASSWORD]
#   Print a bcrypt hash (defaults to the documented admin password).
#
# Data:
# - flask data export [--out backup.json]
# - flask data import backup.json --yes
#   Replaces the contents of every table named in the file.
#
# Printers:
# - flask printers list

import click
from flask import current_app
from flask.cli import with_appcontext

from .store import StoreError, get_store
from .services import auth_service, backup_service
from .services.auth_service import PasswordHashError
from .services.printer_service import PrinterError
from .services.schema_service import BootstrapError, existing_tables, initialize_database
from .services.seed_service import DEFAULT_ADMIN_PASSWORD
from .validation import ValidationError


@click.group('system')
def system_group():
    """System bootstrap and inspection commands."""


@system_group.command('init')
@with_appcontext
def init_system():
    """
    Create any missing tables and seed default data.

    Safe to run repeatedly. Default admin login: admin / admin123.

    SECURITY: Change the admin password immediately in production!
    """
    click.echo("START Initializing database...")
    try:
        outcome = initialize_database(get_store())
    except BootstrapError as e:
        raise click.ClickException(str(e))

    for step, error in outcome.items():
        if error:
            click.echo(f"WARN Seed step '{step}' failed: {error}", err=True)
        else:
            click.echo(f"PASS Seed step '{step}' ok")
    click.echo("DONE Database ready")


@system_group.command('tables')
@with_appcontext
def list_tables():
    """List tables in the store file."""
    for name in existing_tables(get_store()):
        click.echo(name)


@click.group('users')
def users_group():
    """User inspection and creation commands."""


@users_group.command('list')
@with_appcontext
def list_users():
    """List all users with role and active status."""
    users = auth_service.list_users(get_store())
    if not users:
        click.echo("No users found.")
        return

    click.echo(f"{'ID':<16} {'Username':<20} {'Role':<10} {'Active':<7} Full name")
    click.echo("-" * 72)
    for user in users:
        active = "yes" if auth_service.is_active_flag(user["is_active"]) else "no"
        click.echo(f"{user['id']:<16} {user['username']:<20} {user['role']:<10} {active:<7} {user['full_name']}")


@users_group.command('create')
@click.option('--id', 'user_id', required=True, help='User ID (opaque string)')
@click.option('--username', prompt=True, help='Username')
@click.option('--full-name', prompt=True, help='Full name')
@click.option('--password', prompt=True, hide_input=True, confirmation_prompt=True, help='Password')
@click.option('--role', type=click.Choice(['admin', 'manager', 'cashier']), default='cashier', show_default=True, help='Role')
@with_appcontext
def create_user_cli(user_id, username, full_name, password, role):
    """Create a user with a bcrypt-hashed password."""
    try:
        user = auth_service.create_user(get_store(), {
            "id": user_id,
            "username": username,
            "password": password,
            "full_name": full_name,
            "role": role,
        })
    except (ValidationError, StoreError, PasswordHashError) as e:
        raise click.ClickException(str(e))

    click.echo(f"PASS Created user {user['username']} ({user['id']}) with role {user['role']}")


@users_group.command('hash-password')
@click.argument('password', default=DEFAULT_ADMIN_PASSWORD)
@with_appcontext
def hash_password_cli(password):
    """Print a bcrypt hash for PASSWORD."""
    try:
        click.echo(auth_service.hash_password(password))
    except PasswordHashError as e:
        raise click.ClickException(str(e))


@click.group('data')
def data_group():
    """Backup export and import."""


@data_group.command('export')
@click.option('--out', 'out_path', type=click.Path(dir_okay=False, writable=True), help='Write to file instead of stdout')
@with_appcontext
def export_cli(out_path):
    """Export every table as JSON."""
    document = backup_service.export_data(get_store())
    if out_path:
        with open(out_path, "w", encoding="utf-8") as fh:
            fh.write(document)
        click.echo(f"PASS Exported to {out_path}")
    else:
        click.echo(document)


@data_group.command('import')
@click.argument('path', type=click.Path(exists=True, dir_okay=False))
@click.option('--yes', is_flag=True, help='Skip confirmation')
@with_appcontext
def import_cli(path, yes):
    """Replace table contents with a JSON export."""
    if not yes:
        click.confirm("This replaces existing rows in every table in the file. Continue?", abort=True)

    with open(path, encoding="utf-8") as fh:
        document = fh.read()

    try:
        count = backup_service.import_data(get_store(), document)
    except (ValidationError, StoreError) as e:
        raise click.ClickException(str(e))

    click.echo(f"PASS Imported {count} rows")


@click.group('printers')
def printers_group():
    """Printer inspection."""


@printers_group.command('list')
@with_appcontext
def list_printers_cli():
    """List printers known to the configured backend."""
    try:
        names = current_app.extensions["pos_printer"].list_printers()
    except PrinterError as e:
        raise click.ClickException(str(e))

    if not names:
        click.echo("No printers found.")
    for name in names:
        click.echo(name)


def register_commands(app):
    app.cli.add_command(system_group)
    app.cli.add_command(users_group)
    app.cli.add_command(data_group)
    app.cli.add_command(printers_group)
