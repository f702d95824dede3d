"""
In-memory DataService used by the tests.

Mirrors the PostgreSQL schema's unique constraints and the sign-up trigger
so actions behave as they would against the real database.
"""

import copy
import uuid
from datetime import datetime, timedelta, timezone

from sponsorapp.backend import DataService, BackendError, TABLES

UNIQUE = {
    'tiers': (('name',), ('level',)),
    'event_sponsors': (('event_id', 'sponsor_id'),),
    'user_profiles': (('user_id',),),
}

KEYS = {'user_profiles': 'user_id'}

# ON DELETE CASCADE foreign keys: parent table -> [(child table, column)]
CASCADES = {
    'events': [('event_sponsors', 'event_id')],
    'sponsors': [('event_sponsors', 'sponsor_id')],
}


def _matches(row, where=None, exclude=None, any_of=None):
    for column, value in (where or {}).items():
        if isinstance(value, (list, tuple, set)):
            if row.get(column) not in value:
                return False
        elif row.get(column) != value:
            return False
    for column, value in (exclude or {}).items():
        if row.get(column) == value:
            return False
    if any_of and not any(row.get(column) == value for column, value in any_of.items()):
        return False
    return True


class MemoryDataService(DataService):

    def __init__(self):
        self.tables = {name: [] for name in TABLES}
        self.identities = {}
        self.fail_on = set()
        self._clock = datetime(2025, 1, 1, tzinfo=timezone.utc)

    def _check(self, operation):
        if operation in self.fail_on:
            raise BackendError(f"simulated failure in {operation}")

    def _now(self):
        self._clock += timedelta(seconds=1)
        return self._clock

    # ---- rows ----------------------------------------------------------

    def select(self, table, columns='*', where=None, exclude=None,
               any_of=None, order_by=None, limit=None):
        self._check('select')
        rows = [r for r in self.tables[table] if _matches(r, where, exclude, any_of)]

        for column, ascending in reversed(order_by or []):
            rows.sort(key=lambda r: (r.get(column) is None, r.get(column)), reverse=not ascending)
        if limit is not None:
            rows = rows[:limit]

        if columns != '*':
            names = [c.strip() for c in columns.split(',')]
            rows = [{name: r.get(name) for name in names} for r in rows]
        return copy.deepcopy(rows)

    def insert(self, table, values):
        self._check('insert')
        row = dict(values)
        key = KEYS.get(table, 'id')
        row.setdefault(key, str(uuid.uuid4()))
        row.setdefault('created_at', self._now())

        for columns in UNIQUE.get(table, ()):
            for existing in self.tables[table]:
                if all(existing.get(c) == row.get(c) for c in columns):
                    return None

        self.tables[table].append(row)
        return copy.deepcopy(row)

    def update(self, table, values, where):
        self._check('update')
        count = 0
        for row in self.tables[table]:
            if _matches(row, where):
                row.update(values)
                count += 1
        return count

    def delete(self, table, where):
        self._check('delete')
        removed = [r for r in self.tables[table] if _matches(r, where)]
        self.tables[table] = [r for r in self.tables[table] if not _matches(r, where)]
        for child, column in CASCADES.get(table, ()):
            keys = {r['id'] for r in removed}
            self.tables[child] = [r for r in self.tables[child] if r[column] not in keys]
        return len(removed)

    # ---- identity ------------------------------------------------------

    def get_identity(self, user_id):
        identity = self.identities.get(user_id)
        if identity is None:
            return None
        return {k: identity[k] for k in ('id', 'email', 'full_name')}

    def sign_in(self, email, password):
        self._check('sign_in')
        for identity in self.identities.values():
            if identity['email'] == email.lower() and identity['password'] == password:
                return self.get_identity(identity['id'])
        return None

    def sign_up(self, email, password, full_name):
        self._check('sign_up')
        email = email.lower()
        if self._email_taken(email):
            return None
        user_id = str(uuid.uuid4())
        self.identities[user_id] = {'id': user_id, 'email': email,
                                    'full_name': full_name, 'password': password}
        # what the on_auth_user_created trigger does
        now = self._now()
        self.tables['user_profiles'].append({
            'user_id': user_id, 'full_name': full_name, 'email': email,
            'role': 'user', 'is_approved': False, 'created_at': now, 'updated_at': now,
        })
        return self.get_identity(user_id)

    def update_identity_email(self, user_id, email):
        self._check('update_identity_email')
        email = email.lower()
        if user_id not in self.identities or self._email_taken(email, user_id):
            return 0
        self.identities[user_id]['email'] = email
        return 1

    def delete_identity(self, user_id):
        self._check('delete_identity')
        if self.identities.pop(user_id, None) is None:
            return 0
        # user_profiles.user_id is ON DELETE CASCADE
        self.tables['user_profiles'] = [r for r in self.tables['user_profiles'] if r['user_id'] != user_id]
        return 1

    def _email_taken(self, email, user_id=None):
        return any(i['email'] == email and i['id'] != user_id for i in self.identities.values())

    # ---- seeding -------------------------------------------------------

    def add_user(self, email, role='user', is_approved=True, password='password123', full_name=None):
        identity = self.sign_up(email, password, full_name or email.split('@')[0].title())
        self.update('user_profiles', {'role': role, 'is_approved': is_approved},
                    where={'user_id': identity['id']})
        return identity['id']

    def rows(self, table, **where):
        return [r for r in self.tables[table] if _matches(r, where)]
