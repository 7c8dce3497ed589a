"""
Category Model
"""

import uuid
from roadmap.extensions import db


def _new_id():
    return uuid.uuid4().hex


class Category(db.Model):
    """Roadmap category shown as a colored tag with an icon"""
    __tablename__ = 'categories'

    id = db.Column(db.String(36), primary_key=True, default=_new_id)
    name = db.Column(db.String(100), nullable=False)
    color = db.Column(db.String(20), nullable=False)
    icon = db.Column(db.String(60), nullable=False)
    parent_id = db.Column(db.String(36), db.ForeignKey('categories.id'))

    def to_dict(self):
        return {
            'id': self.id,
            'name': self.name,
            'color': self.color,
            'icon': self.icon,
            'parent_id': self.parent_id,
            'is_subcategory': self.parent_id is not None,
        }

    def __repr__(self):
        return f'<Category {self.name}>'
