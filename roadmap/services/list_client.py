"""
Remote List Service Client

Reads and writes items of a SharePoint-style REST list with `requests`.
Used as the storage path for settings when `SETTINGS_SERVICE_URL` is set.
"""

import logging
import requests

from roadmap.services.errors import BackendError

logger = logging.getLogger(__name__)

ACCEPT_JSON = 'application/json;odata=nometadata'

# resource field -> list column
SETTING_COLUMNS = {
    'key': 'Title',
    'value': 'Value',
    'description': 'Description',
}


def _quote(value):
    """Quote a value for an OData $filter expression."""
    return "'" + str(value).replace("'", "''") + "'"


class ListServiceClient:
    """Store contract over one remote list."""

    def __init__(self, base_url, list_title, columns, key_field='key',
                 timeout=6, http=None):
        self.base_url = base_url.rstrip('/')
        self.list_title = list_title
        self.columns = dict(columns)
        self.key_field = key_field
        self.timeout = timeout
        self.http = http or requests

    @property
    def items_url(self):
        return f"{self.base_url}/_api/web/lists/getByTitle('{self.list_title}')/items"

    def _select(self):
        return ','.join(['Id'] + list(self.columns.values()))

    def _to_resource(self, item):
        resource = {'id': str(item.get('Id'))}
        for field, column in self.columns.items():
            value = item.get(column)
            resource[field] = value if value is not None else ''
        return resource

    def _request(self, method, params=None, json=None, headers=None):
        all_headers = {'Accept': ACCEPT_JSON}
        all_headers.update(headers or {})
        try:
            resp = self.http.request(method, self.items_url, params=params, json=json,
                                     headers=all_headers, timeout=self.timeout)
        except requests.exceptions.Timeout:
            logger.error('List service %s timed out', self.list_title)
            raise BackendError('Settings service timed out')
        except requests.exceptions.RequestException:
            logger.exception('List service %s request failed', self.list_title)
            raise BackendError('Settings service unavailable')

        if resp.status_code not in (200, 201):
            logger.error('List service %s returned %s: %s',
                         self.list_title, resp.status_code, resp.text[:200])
            raise BackendError('Settings service error')

        try:
            return resp.json()
        except ValueError:
            logger.exception('List service %s returned invalid JSON', self.list_title)
            raise BackendError('Settings service error')

    def _query(self, field=None, value=None, top=None):
        params = {'$select': self._select()}
        if field is not None:
            params['$filter'] = f'{self.columns[field]} eq {_quote(value)}'
        if top is not None:
            params['$top'] = top
        data = self._request('GET', params=params)
        items = data.get('value', []) if isinstance(data, dict) else None
        if not isinstance(items, list) or not all(isinstance(item, dict) for item in items):
            logger.error('List service %s returned an unexpected payload', self.list_title)
            raise BackendError('Settings service error')
        return [self._to_resource(item) for item in items]

    def list_all(self):
        return self._query()

    def get(self, key):
        items = self._query(self.key_field, key, top=1)
        return items[0] if items else None

    def exists(self, field, value):
        return bool(self._query(field, value, top=1))

    def create(self, fields):
        body = {'__metadata': {'type': f'SP.Data.{self.list_title}ListItem'}}
        for field, value in fields.items():
            column = self.columns.get(field)
            if column is None:
                logger.debug('Ignoring field %r without a list column', field)
                continue
            body[column] = value
        item = self._request('POST', json=body,
                             headers={'Content-Type': 'application/json;odata=verbose'})
        if not isinstance(item, dict) or 'Id' not in item:
            logger.error('List service %s returned no created item', self.list_title)
            raise BackendError('Settings service error')
        return self._to_resource(item)
