"""
sponsorapp/backend.py - Data service contract

Every page and action talks to storage through a DataService instance
registered on the app (see init_backend). Nothing outside the adapters
builds SQL.

Filters used by select/single/update/delete:
- where:   {column: value}  equality; a list/tuple/set value means "IN"
- exclude: {column: value}  inequality
- any_of:  {column: value}  OR of equalities
"""

from flask import current_app, session

# Tables the application is allowed to touch
TABLES = ('user_profiles', 'tiers', 'sponsors', 'events', 'event_sponsors')


class BackendError(Exception):
    """Raised when the data service fails to complete a call."""


class DataService:
    """Interface implemented by every data service adapter."""

    # ---- rows ----------------------------------------------------------

    def select(self, table, columns='*', where=None, exclude=None,
               any_of=None, order_by=None, limit=None):
        """Return a list of dict rows. order_by is a list of (column, ascending)."""
        raise NotImplementedError

    def single(self, table, columns='*', where=None, exclude=None, any_of=None):
        """Return the first matching row or None."""
        rows = self.select(table, columns, where=where, exclude=exclude,
                           any_of=any_of, limit=1)
        return rows[0] if rows else None

    def insert(self, table, values):
        """Insert a row, skipping it on a unique conflict. Returns the row or None."""
        raise NotImplementedError

    def update(self, table, values, where):
        """Update matching rows and return how many changed."""
        raise NotImplementedError

    def delete(self, table, where):
        """Delete matching rows and return how many were removed."""
        raise NotImplementedError

    # ---- identity ------------------------------------------------------

    def get_identity(self, user_id):
        raise NotImplementedError

    def current_identity(self):
        """Identity record of the signed-in caller, or None."""
        user_id = session.get('user_id')
        if not user_id:
            return None
        return self.get_identity(user_id)

    def sign_in(self, email, password):
        raise NotImplementedError

    def sign_up(self, email, password, full_name):
        raise NotImplementedError

    def update_identity_email(self, user_id, email):
        """Change the sign-in e-mail (stored lowercased). Returns 0 when it is taken."""
        raise NotImplementedError

    def delete_identity(self, user_id):
        raise NotImplementedError


def init_backend(app, backend=None):
    """
    Register the data service on the app.
    Without an explicit backend the PostgreSQL adapter is created from config.
    """
    if backend is None:
        from .db import PostgresDataService
        backend = PostgresDataService.from_config(app.config)
        app.teardown_appcontext(backend.release)

    app.extensions['backend'] = backend
    return backend


def get_backend():
    """Data service of the current app."""
    return current_app.extensions['backend']
