"""
Resource API Routes

Each resource kind gets a collection endpoint (GET list, POST create) and an
item endpoint (GET by key). Verbs outside that set are answered with 405 and
the exact list of supported verbs.
"""

import logging

from flask import current_app, jsonify, request
from werkzeug.exceptions import HTTPException

from roadmap.api import api_bp
from roadmap.services import CATEGORY, FIELD_TYPE, SETTING, get_resource_service

logger = logging.getLogger(__name__)

# Verbs routed to the views, so unsupported ones get the JSON 405 below
ROUTED_METHODS = ['GET', 'POST', 'PUT', 'PATCH', 'DELETE']
COLLECTION_VERBS = ['GET', 'POST']
ITEM_VERBS = ['GET']

# endpoint -> verbs it supports
SUPPORTED_VERBS = {}


def resource_route(rule, verbs):
    """Register a resource view and the verbs it answers."""
    def decorator(f):
        SUPPORTED_VERBS[f'{api_bp.name}.{f.__name__}'] = list(verbs)
        return api_bp.route(rule, methods=ROUTED_METHODS, provide_automatic_options=False)(f)
    return decorator


def method_not_allowed(allowed):
    response = jsonify(error={
        'code': 'METHOD_NOT_ALLOWED',
        'message': f'Method {request.method} Not Allowed',
        'allowed': list(allowed),
    })
    response.status_code = 405
    response.headers['Allow'] = ', '.join(allowed)
    return response


def _respond(result):
    payload, status = result.to_response()
    return jsonify(payload), status


def collection_view(kind):
    """GET lists every resource of `kind`; POST creates one."""
    service = get_resource_service()
    if request.method == 'GET':
        return _respond(service.list_all(kind))
    if request.method == 'POST':
        fields = request.get_json(silent=True)
        if fields is None:
            fields = request.form.to_dict()
        if not isinstance(fields, dict):
            fields = {}
        return _respond(service.create(kind, fields))
    return method_not_allowed(COLLECTION_VERBS)


def item_view(kind, key):
    """GET returns the resource of `kind` whose key field equals `key`."""
    if request.method != 'GET':
        return method_not_allowed(ITEM_VERBS)
    return _respond(get_resource_service().get_by_key(kind, key))


@resource_route('/categories', COLLECTION_VERBS)
def categories():
    return collection_view(CATEGORY)


@resource_route('/categories/<key>', ITEM_VERBS)
def category(key):
    return item_view(CATEGORY, key)


@resource_route('/fieldTypes', COLLECTION_VERBS)
def field_types():
    return collection_view(FIELD_TYPE)


@resource_route('/fieldTypes/<key>', ITEM_VERBS)
def field_type(key):
    return item_view(FIELD_TYPE, key)


@resource_route('/settings', COLLECTION_VERBS)
def settings():
    return collection_view(SETTING)


@resource_route('/settings/key/<key>', ITEM_VERBS)
def setting_by_key(key):
    # Public: read by the roadmap page without an admin session
    return item_view(SETTING, key)


def _verbs_for_path():
    """Supported verbs of the resource route matching the current path."""
    adapter = current_app.url_map.bind_to_environ(request.environ)
    try:
        rule, _ = adapter.match(method='GET', return_rule=True)
    except HTTPException:
        return []
    return SUPPORTED_VERBS.get(rule.endpoint, [])


@api_bp.app_errorhandler(405)
def unsupported_verb(error):
    if request.path.startswith('/api/'):
        return method_not_allowed(_verbs_for_path())
    return error


@api_bp.app_errorhandler(404)
def not_found(error):
    if request.path.startswith('/api/'):
        return jsonify(error={'code': 'NOT_FOUND', 'message': 'Not found'}), 404
    return error


@api_bp.app_errorhandler(500)
def internal_error(error):
    logger.error('Unhandled error on %s: %s', request.path, error)
    if request.path.startswith('/api/'):
        return jsonify(error={'code': 'INTERNAL_ERROR', 'message': 'Internal server error'}), 500
    return error
