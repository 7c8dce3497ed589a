"""
API Blueprint

JSON endpoints over the resource access service.
"""

from flask import Blueprint

api_bp = Blueprint('api', __name__)

from roadmap.api import routes  # noqa: E402, F401
