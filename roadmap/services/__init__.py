"""
Services Package

Exports the resource access service and its error taxonomy.
"""

from flask import current_app

from roadmap.services.errors import (
    AuthorizationFailure,
    BackendError,
    NotFound,
    ResourceError,
    Unauthorized,
    ValidationError,
)
from roadmap.services.resources import (
    CATEGORY,
    FIELD_TYPE,
    KINDS,
    SETTING,
    ResourceKind,
    ResourceService,
    Result,
)


def get_resource_service():
    """Return the resource service bound to the current app."""
    return current_app.extensions['resources']


__all__ = [
    'AuthorizationFailure',
    'BackendError',
    'NotFound',
    'ResourceError',
    'Unauthorized',
    'ValidationError',
    'CATEGORY',
    'FIELD_TYPE',
    'KINDS',
    'SETTING',
    'ResourceKind',
    'ResourceService',
    'Result',
    'get_resource_service',
]
