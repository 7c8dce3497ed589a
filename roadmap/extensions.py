"""
Flask Extensions

The admin flag in the signed session is only a hint; Flask-Login's
`current_user` is what the server-side verification call trusts.
"""

from flask_sqlalchemy import SQLAlchemy
from flask_login import LoginManager

# Database instance
db = SQLAlchemy()

# Login manager for admin accounts
login_manager = LoginManager()
