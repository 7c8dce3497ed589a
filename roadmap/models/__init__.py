"""
Models Package

Exports all models for easy importing.
"""

from roadmap.models.admin_user import AdminUser, ADMIN_ROLE
from roadmap.models.category import Category
from roadmap.models.field_type import FieldType
from roadmap.models.setting import AppSetting

__all__ = ['AdminUser', 'ADMIN_ROLE', 'Category', 'FieldType', 'AppSetting']
