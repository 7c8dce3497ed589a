"""
Field Type Model
"""

from roadmap.extensions import db
from roadmap.models.category import _new_id


class FieldType(db.Model):
    """Kind of project field (process, technology, ...); `type` is unique"""
    __tablename__ = 'field_types'

    id = db.Column(db.String(36), primary_key=True, default=_new_id)
    name = db.Column(db.String(100), nullable=False)
    type = db.Column(db.String(50), unique=True, nullable=False)
    description = db.Column(db.String(255), nullable=False, default='')

    def to_dict(self):
        return {
            'id': self.id,
            'name': self.name,
            'type': self.type,
            'description': self.description,
        }

    def __repr__(self):
        return f'<FieldType {self.type}>'
