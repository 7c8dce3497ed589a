"""
Admin Blueprint

Login, dashboard and the forms for creating roadmap resources.
"""

from flask import Blueprint

admin_bp = Blueprint('admin', __name__, template_folder='../templates/admin')

from roadmap.admin import routes  # noqa: E402, F401
