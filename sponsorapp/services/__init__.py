"""
sponsorapp/services - Mutating actions

Every action takes (backend, caller, form) and returns a Redirect or a
Denied from sponsorapp.results. Sequence: authorize the caller, validate
the form, check referenced rows, write once, invalidate views, redirect.
"""

from ..auth import authorize


def gate(caller, action):
    """Denied result when the caller may not perform action, else None."""
    decision = authorize(caller, action)
    return None if decision.ok else decision
