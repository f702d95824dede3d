"""
sponsorapp/services/users.py - Sign-up review and manager role changes

Every operation authorizes the caller, refuses to act on the caller's own
account and checks the target's current state before writing:

    approve / reject   target pending (is_approved = false)
    promote            target approved with role 'user'
    demote             target approved with role 'manager'
"""

import logging

from ..auth import Action, Role
from ..backend import BackendError
from ..invalidation import invalidate
from ..results import Redirect, Denied, DeniedReason
from ..utils.helpers import required_text, utc_now
from . import gate

logger = logging.getLogger(__name__)

APPROVALS_PAGE = 'manage.user_approvals'
ROLES_PAGE = 'manage.user_roles'


def _target(caller, form, action):
    """(target_user_id, None) or (None, Denied)."""
    denied = gate(caller, action)
    if denied:
        return None, denied

    target_id = required_text(form, 'user_id')
    if not target_id:
        return None, Denied(DeniedReason.INVALID_INPUT, 'user_id is required')
    if target_id == str(caller.user_id):
        return None, Denied(DeniedReason.INVALID_INPUT, 'cannot act on your own account')
    return target_id, None


def _find(backend, target_id, **state):
    return backend.single('user_profiles', 'user_id, role, is_approved',
                          where=dict(user_id=target_id, **state))


def approve_user(backend, caller, form):
    target_id, denied = _target(caller, form, Action.REVIEW_SIGNUP)
    if denied:
        return denied

    try:
        if _find(backend, target_id, is_approved=False) is None:
            logger.warning("Approve: user %s not found or already approved", target_id)
            return Denied(DeniedReason.NOT_FOUND, 'user not pending')
        backend.update('user_profiles', {'is_approved': True, 'updated_at': utc_now()},
                       where={'user_id': target_id})
    except BackendError as e:
        logger.error("Error approving user %s: %s", target_id, e)
        return Denied(DeniedReason.BACKEND_ERROR)

    logger.info("User %s approved by %s", target_id, caller.user_id)
    invalidate('user_approval')
    return Redirect(APPROVALS_PAGE, message='User approved')


def reject_user(backend, caller, form):
    """Remove a pending sign-up: the profile, then (best effort) the identity."""
    target_id, denied = _target(caller, form, Action.REVIEW_SIGNUP)
    if denied:
        return denied

    try:
        if _find(backend, target_id, is_approved=False) is None:
            logger.warning("Reject: user %s not found or already processed", target_id)
            return Denied(DeniedReason.NOT_FOUND, 'user not pending')
        backend.delete('user_profiles', where={'user_id': target_id})
    except BackendError as e:
        logger.error("Error rejecting user %s: %s", target_id, e)
        return Denied(DeniedReason.BACKEND_ERROR)

    try:
        backend.delete_identity(target_id)
    except BackendError as e:
        # Profile is already gone; the identity row is left for cleanup
        logger.error("Error deleting identity %s after rejection: %s", target_id, e)

    logger.info("User %s rejected by %s", target_id, caller.user_id)
    invalidate('user_approval')
    return Redirect(APPROVALS_PAGE, message='User rejected')


def _change_role(backend, caller, form, current, new, verb):
    target_id, denied = _target(caller, form, Action.CHANGE_ROLE)
    if denied:
        return denied

    try:
        if _find(backend, target_id, is_approved=True, role=current.value) is None:
            logger.warning("%s: user %s not eligible", verb.capitalize(), target_id)
            return Denied(DeniedReason.NOT_FOUND, f'user not eligible to {verb}')
        backend.update('user_profiles', {'role': new.value, 'updated_at': utc_now()},
                       where={'user_id': target_id})
    except BackendError as e:
        logger.error("Error trying to %s user %s: %s", verb, target_id, e)
        return Denied(DeniedReason.BACKEND_ERROR)

    logger.info("User %s changed from %s to %s by %s",
                target_id, current.value, new.value, caller.user_id)
    invalidate('user_role')
    return Redirect(ROLES_PAGE, message=f'Role changed to {new.value}')


def promote_user(backend, caller, form):
    return _change_role(backend, caller, form, Role.USER, Role.MANAGER, 'promote')


def demote_user(backend, caller, form):
    return _change_role(backend, caller, form, Role.MANAGER, Role.USER, 'demote')
