"""
Application Setting Model
"""

from roadmap.extensions import db
from roadmap.models.category import _new_id


class AppSetting(db.Model):
    """Key/value application setting, looked up by `key`"""
    __tablename__ = 'settings'

    id = db.Column(db.String(36), primary_key=True, default=_new_id)
    key = db.Column(db.String(100), unique=True, nullable=False)
    value = db.Column(db.Text, nullable=False)
    description = db.Column(db.String(255), nullable=False, default='')

    def to_dict(self):
        return {
            'id': self.id,
            'key': self.key,
            'value': self.value,
            'description': self.description,
        }

    def __repr__(self):
        return f'<AppSetting {self.key}>'
