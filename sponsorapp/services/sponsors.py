# sponsorapp/services/sponsors.py

import logging

from ..auth import Action
from ..backend import BackendError
from ..invalidation import invalidate
from ..results import Redirect, Denied, DeniedReason
from ..utils.helpers import clean, required_text, flag, utc_now
from . import gate

logger = logging.getLogger(__name__)

OPTIONAL_FIELDS = (
    'address',
    'contact_name',
    'contact_email',
    'contact_phone',
    'logo_url',
    'sponsorship_agreement_url',
    'receipt_url',
)


def _sponsor_fields(form):
    name = required_text(form, 'name')
    tier_id = required_text(form, 'tier_id')
    if not name or not tier_id:
        return None

    fields = {'name': name, 'tier_id': tier_id, 'fulfilled': flag(form, 'fulfilled')}
    for column in OPTIONAL_FIELDS:
        fields[column] = clean(form.get(column))
    return fields


def create_sponsor(backend, caller, form):
    """Create a sponsor under an existing tier, then go to the sponsors listing."""
    denied = gate(caller, Action.WRITE_SPONSOR)
    if denied:
        return denied

    fields = _sponsor_fields(form)
    if fields is None:
        return Denied(DeniedReason.INVALID_INPUT, 'name and tier are required')

    try:
        if backend.single('tiers', 'id', where={'id': fields['tier_id']}) is None:
            return Denied(DeniedReason.NOT_FOUND, 'tier not found')
        backend.insert('sponsors', fields)
    except BackendError as e:
        logger.error("Error creating sponsor: %s", e)
        return Denied(DeniedReason.BACKEND_ERROR)

    invalidate('sponsor')
    return Redirect('sponsors.list_sponsors', message='Sponsor created successfully')


def update_sponsor(backend, caller, form):
    """Update a sponsor, then go to its detail page."""
    denied = gate(caller, Action.WRITE_SPONSOR)
    if denied:
        return denied

    sponsor_id = required_text(form, 'id')
    fields = _sponsor_fields(form)
    if not sponsor_id or fields is None:
        return Denied(DeniedReason.INVALID_INPUT, 'id, name and tier are required')

    try:
        if backend.single('tiers', 'id', where={'id': fields['tier_id']}) is None:
            return Denied(DeniedReason.NOT_FOUND, 'tier not found')
        if backend.single('sponsors', 'id', where={'id': sponsor_id}) is None:
            return Denied(DeniedReason.NOT_FOUND, 'sponsor not found')

        fields['updated_at'] = utc_now()
        backend.update('sponsors', fields, where={'id': sponsor_id})
    except BackendError as e:
        logger.error("Error updating sponsor %s: %s", sponsor_id, e)
        return Denied(DeniedReason.BACKEND_ERROR)

    invalidate('sponsor', sponsor_id=sponsor_id)
    return Redirect('sponsors.detail', {'sponsor_id': sponsor_id}, 'Sponsor updated successfully')


def delete_sponsor(backend, caller, form):
    """Delete a sponsor; its event links go with it (ON DELETE CASCADE)."""
    denied = gate(caller, Action.WRITE_SPONSOR)
    if denied:
        return denied

    sponsor_id = required_text(form, 'id')
    if not sponsor_id:
        return Denied(DeniedReason.INVALID_INPUT, 'id is required')

    try:
        if backend.single('sponsors', 'id', where={'id': sponsor_id}) is None:
            return Denied(DeniedReason.NOT_FOUND, 'sponsor not found')
        backend.delete('sponsors', where={'id': sponsor_id})
    except BackendError as e:
        logger.error("Error deleting sponsor %s: %s", sponsor_id, e)
        return Denied(DeniedReason.BACKEND_ERROR)

    invalidate('sponsor', sponsor_id=sponsor_id)
    return Redirect('sponsors.list_sponsors', message='Sponsor deleted')
