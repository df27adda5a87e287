# Overview: Flask extension instance for table metadata and the shared engine.

from flask_sqlalchemy import SQLAlchemy

db = SQLAlchemy()
