# sponsorapp/services/account.py

import logging

from ..auth import Action
from ..backend import BackendError
from ..results import Redirect, Denied, DeniedReason
from ..utils.helpers import clean, required_text, utc_now
from . import gate

logger = logging.getLogger(__name__)


def update_profile(backend, caller, form):
    """Update the caller's own name and e-mail."""
    denied = gate(caller, Action.VIEW_PROFILE)
    if denied:
        return denied

    email = required_text(form, 'email')
    if not email:
        return Denied(DeniedReason.INVALID_INPUT, 'email is required')
    email = email.lower()
    full_name = clean(form.get('full_name'))

    try:
        if email != caller.email and not backend.update_identity_email(caller.user_id, email):
            return Denied(DeniedReason.INVALID_INPUT, 'email already registered')
        backend.update('user_profiles',
                       {'full_name': full_name, 'email': email, 'updated_at': utc_now()},
                       where={'user_id': caller.user_id})
    except BackendError as e:
        logger.error("Error updating profile %s: %s", caller.user_id, e)
        return Denied(DeniedReason.BACKEND_ERROR)

    return Redirect('user.profile', message='Profile updated successfully')
