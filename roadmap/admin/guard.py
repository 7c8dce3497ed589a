"""
Admin Session Guard

Admin-only views are wrapped with `admin_required`. Every request builds a
fresh `AdminGuard` that runs a two-phase check:

1. the `is_admin` flag in the signed session cookie is read as a hint;
   without it the request is sent to the login page straight away;
2. with it, the server-side verification (`has_admin_access`) decides.
   A negative answer or an error clears the hint and redirects.

The hint alone never lets a wrapped view run.
"""

import enum
import logging
from functools import wraps

from flask import redirect, session, url_for
from flask_login import current_user

from roadmap.extensions import db
from roadmap.models import AdminUser
from roadmap.services.errors import AuthorizationFailure

logger = logging.getLogger(__name__)

LOGIN_ENDPOINT = 'admin.login'
SESSION_KEY = 'is_admin'


class GuardState(enum.Enum):
    CHECKING = 'checking'
    AUTHORIZED = 'authorized'
    REDIRECTING = 'redirecting'


class SessionCache:
    """Client-held admin hint stored in the Flask session."""

    def __init__(self, store=None, key=SESSION_KEY):
        self._store = store
        self.key = key

    @property
    def store(self):
        return session if self._store is None else self._store

    def read(self):
        return bool(self.store.get(self.key))

    def write(self, is_admin):
        self.store[self.key] = bool(is_admin)

    def clear(self):
        self.store.pop(self.key, None)


def has_admin_access():
    """Authoritative admin check against the database.

    The logged-in account must still exist, be active and carry the admin
    role. Shared by the guard and the resource service.
    """
    if not current_user.is_authenticated:
        return False
    user = db.session.get(AdminUser, current_user.id)
    return user is not None and user.is_active and user.is_admin


def redirect_to_login():
    return redirect(url_for(LOGIN_ENDPOINT))


class AdminGuard:
    """Per-request admin check: CHECKING -> AUTHORIZED | REDIRECTING."""

    def __init__(self, cache, verify=has_admin_access, navigate=redirect_to_login):
        self.cache = cache
        self.verify = verify
        self.navigate = navigate
        self.state = GuardState.CHECKING
        self.response = None
        self.failure = None
        self.abandoned = False
        self._started = False

    def abandon(self):
        """The view went away; later results must not touch anything."""
        self.abandoned = True

    def _redirect(self, reason, clear_cache):
        if self.abandoned:
            return self.state
        if clear_cache:
            self.cache.clear()
        self.failure = AuthorizationFailure(reason)
        self.state = GuardState.REDIRECTING
        self.response = self.navigate()
        return self.state

    def run(self):
        if self._started:
            raise RuntimeError('AdminGuard.run() may only be called once')
        self._started = True

        if not self.cache.read():
            return self._redirect('no admin session', clear_cache=False)

        try:
            has_access = self.verify()
        except Exception:
            logger.exception('Admin verification failed')
            return self._redirect('verification error', clear_cache=True)

        if not has_access:
            logger.info('Admin verification denied; clearing session hint')
            return self._redirect('verification denied', clear_cache=True)

        if self.abandoned:
            return self.state
        self.state = GuardState.AUTHORIZED
        return self.state


def admin_required(f):
    """Decorator gating a view behind the admin session guard.

    The wrapped view keeps its signature and receives its arguments
    untouched. It runs only when the guard reaches AUTHORIZED.
    """
    @wraps(f)
    def wrapper(*args, **kwargs):
        guard = AdminGuard(SessionCache())
        if guard.run() is not GuardState.AUTHORIZED:
            return guard.response
        return f(*args, **kwargs)
    return wrapper
