"""
sponsorapp/results.py - Outcomes returned by every mutating action

Actions never redirect themselves. They return a Redirect on the success
path (including the silent soft-conflict paths) or a Denied with a reason,
and the route layer turns either one into an HTTP redirect.
"""

from dataclasses import dataclass, field
from enum import Enum


class DeniedReason(Enum):
    UNAUTHENTICATED = 'unauthenticated'
    UNAUTHORIZED = 'unauthorized'
    INVALID_INPUT = 'invalid_input'
    NOT_FOUND = 'not_found'
    BACKEND_ERROR = 'backend_error'


# Where each denial sends the browser
DENIAL_ENDPOINTS = {
    DeniedReason.UNAUTHENTICATED: 'auth.login',
    DeniedReason.UNAUTHORIZED: 'main.unauthorized',
    DeniedReason.INVALID_INPUT: 'main.error',
    DeniedReason.NOT_FOUND: 'main.error',
    DeniedReason.BACKEND_ERROR: 'main.error',
}


@dataclass(frozen=True)
class Redirect:
    endpoint: str
    values: dict = field(default_factory=dict)
    message: str = None

    ok = True


@dataclass(frozen=True)
class Denied:
    reason: DeniedReason
    detail: str = ''

    ok = False

    @property
    def endpoint(self):
        return DENIAL_ENDPOINTS[self.reason]
