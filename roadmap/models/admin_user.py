"""
Admin User Model
"""

from flask_login import UserMixin
from werkzeug.security import generate_password_hash, check_password_hash
from roadmap.extensions import db

ADMIN_ROLE = 'ADMIN'


class AdminUser(UserMixin, db.Model):
    """Account that can sign in to the admin area"""
    __tablename__ = 'users'

    id = db.Column(db.Integer, primary_key=True)
    email = db.Column(db.String(255), unique=True, nullable=False)
    name = db.Column(db.String(120))
    password_hash = db.Column(db.String(255), nullable=False)
    role = db.Column(db.String(20), nullable=False, default='USER')
    active = db.Column(db.Boolean, nullable=False, default=True)

    @property
    def is_active(self):
        return bool(self.active)

    @property
    def is_admin(self):
        return self.role == ADMIN_ROLE

    def set_password(self, password):
        self.password_hash = generate_password_hash(password, method='pbkdf2:sha256')

    def check_password(self, password):
        return check_password_hash(self.password_hash, password)

    @classmethod
    def create_or_promote(cls, email, password=None, name=None):
        """Return the account for `email` with the admin role, creating it if needed.

        The caller commits. `password` is only set when given.
        """
        email = email.strip().lower()
        user = cls.query.filter_by(email=email).first()
        if user is None:
            if not password:
                raise ValueError('a password is required for a new admin account')
            user = cls(email=email, name=name or email)
            db.session.add(user)
        user.role = ADMIN_ROLE
        user.active = True
        if password:
            user.set_password(password)
        return user

    def __repr__(self):
        return f'<AdminUser {self.email} role:{self.role}>'
