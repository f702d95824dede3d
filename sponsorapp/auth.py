"""
sponsorapp/auth.py - Caller context and the permission table

Contains:
- Caller: identity + profile of the signed-in user, loaded once per request
- PERMISSIONS: static (roles, requires approval) rule for every action
- check_access / authorize: pure permission decisions
"""

from dataclasses import dataclass
from enum import Enum

from .results import Denied, DeniedReason


class Role(str, Enum):
    USER = 'user'
    MANAGER = 'manager'
    ADMIN = 'admin'


class Action(Enum):
    WRITE_EVENT = 'write_event'
    WRITE_SPONSOR = 'write_sponsor'
    LINK_SPONSOR_EVENT = 'link_sponsor_event'
    WRITE_TIER = 'write_tier'
    REVIEW_SIGNUP = 'review_signup'
    CHANGE_ROLE = 'change_role'
    VIEW_PROFILE = 'view_profile'
    VIEW_LISTINGS = 'view_listings'


@dataclass(frozen=True)
class Rule:
    roles: frozenset
    require_approved: bool


STAFF = frozenset({Role.MANAGER.value, Role.ADMIN.value})
ADMINS = frozenset({Role.ADMIN.value})
ANYONE = frozenset()

PERMISSIONS = {
    Action.WRITE_EVENT: Rule(STAFF, True),
    Action.WRITE_SPONSOR: Rule(STAFF, True),
    Action.LINK_SPONSOR_EVENT: Rule(STAFF, True),
    Action.WRITE_TIER: Rule(ADMINS, True),
    Action.REVIEW_SIGNUP: Rule(STAFF, True),
    Action.CHANGE_ROLE: Rule(ADMINS, True),
    Action.VIEW_PROFILE: Rule(ANYONE, False),
    Action.VIEW_LISTINGS: Rule(ANYONE, True),
}


class Allowed:
    ok = True

    def __repr__(self):
        return 'Allowed'


ALLOWED = Allowed()


@dataclass(frozen=True)
class Caller:
    """The signed-in user. profile is None when no profile row exists."""
    user_id: str
    email: str = None
    profile: dict = None

    @property
    def role(self):
        return self.profile['role'] if self.profile else None

    @property
    def is_approved(self):
        return bool(self.profile and self.profile['is_approved'])

    @property
    def full_name(self):
        if self.profile and self.profile.get('full_name'):
            return self.profile['full_name']
        return self.email

    def can(self, action):
        return authorize(self, action).ok


def load_caller(backend, identity):
    """Build the Caller for an identity record with a single profile fetch."""
    profile = backend.single('user_profiles', where={'user_id': identity['id']})
    return Caller(user_id=identity['id'], email=identity.get('email'), profile=profile)


def check_access(profile, roles, require_approved):
    """
    Decide access for a profile row.

    Returns None when allowed, otherwise the reason text.
    """
    if not profile:
        return 'no profile'
    if require_approved and not profile.get('is_approved'):
        return 'account pending approval'
    if roles and profile.get('role') not in roles:
        return 'role not permitted'
    return None


def authorize(caller, action):
    if caller is None:
        return Denied(DeniedReason.UNAUTHENTICATED)

    rule = PERMISSIONS[action]
    # Any signed-in identity may see its own profile, row or not
    if not rule.roles and not rule.require_approved:
        return ALLOWED

    reason = check_access(caller.profile, rule.roles, rule.require_approved)
    if reason:
        return Denied(DeniedReason.UNAUTHORIZED, reason)
    return ALLOWED
