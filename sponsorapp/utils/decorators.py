"""
sponsorapp/utils/decorators.py - Authentication and authorization decorators

Contains:
- login_required: resolve the session identity and load g.caller once
- permission_required: gate a page on the permission table
"""

from functools import wraps
from flask import flash, redirect, url_for, g

from ..auth import authorize, load_caller
from ..backend import get_backend


def current_caller():
    """Caller for this request, loaded on first use."""
    if 'caller' not in g:
        backend = get_backend()
        identity = backend.current_identity()
        g.caller = load_caller(backend, identity) if identity else None
    return g.caller


def login_required(f):
    """
    Decorator: Require a signed-in identity.
    Redirects to login page if there is none.
    """
    @wraps(f)
    def decorated_function(*args, **kwargs):
        if current_caller() is None:
            flash('Please log in first', 'warning')
            return redirect(url_for('auth.login'))
        return f(*args, **kwargs)
    return decorated_function


def permission_required(action):
    """
    Decorator: Require the caller to pass the permission table for action.

    Usage:
        @permission_required(Action.VIEW_LISTINGS)   # any approved user
        @permission_required(Action.WRITE_TIER)      # approved admins only
    """
    def decorator(f):
        @wraps(f)
        @login_required
        def decorated_function(*args, **kwargs):
            decision = authorize(g.caller, action)
            if not decision.ok:
                return redirect(url_for(decision.endpoint))
            return f(*args, **kwargs)
        return decorated_function
    return decorator
