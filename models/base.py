"""
Database Base Module

Holds the shared SQLAlchemy instance so models, the catalog repository and
the application factory can import it without circular imports.
"""

from flask_sqlalchemy import SQLAlchemy

# Bound to an application in create_app() via db.init_app(app)
db = SQLAlchemy()
