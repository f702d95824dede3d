"""
sponsorapp/services/tiers.py - Tier administration (admins only)

Name or level clashes and deleting a tier still used by a sponsor are soft
conflicts: the action returns to the tier page without writing anything.
"""

import logging

from ..auth import Action
from ..backend import BackendError
from ..invalidation import invalidate
from ..results import Redirect, Denied, DeniedReason
from ..utils.helpers import clean, required_text, parse_level
from . import gate

logger = logging.getLogger(__name__)

TIERS_PAGE = 'manage.tiers'


def _tier_fields(form):
    name = required_text(form, 'name')
    level = parse_level(form.get('level'))
    if not name or level is None:
        return None
    return {'name': name, 'level': level, 'description': clean(form.get('description'))}


def _clashing_tier(backend, fields, exclude_id=None):
    """Any other tier with the same name OR the same level."""
    exclude = {'id': exclude_id} if exclude_id else None
    return backend.single(
        'tiers', 'id',
        exclude=exclude,
        any_of={'name': fields['name'], 'level': fields['level']},
    )


def create_tier(backend, caller, form):
    denied = gate(caller, Action.WRITE_TIER)
    if denied:
        return denied

    fields = _tier_fields(form)
    if fields is None:
        return Denied(DeniedReason.INVALID_INPUT, 'name and a level >= 1 are required')

    try:
        if _clashing_tier(backend, fields):
            return Redirect(TIERS_PAGE)
        backend.insert('tiers', fields)
    except BackendError as e:
        logger.error("Error creating tier: %s", e)
        return Denied(DeniedReason.BACKEND_ERROR)

    invalidate('tier')
    return Redirect(TIERS_PAGE, message='Tier created')


def update_tier(backend, caller, form):
    denied = gate(caller, Action.WRITE_TIER)
    if denied:
        return denied

    tier_id = required_text(form, 'id')
    fields = _tier_fields(form)
    if not tier_id or fields is None:
        return Denied(DeniedReason.INVALID_INPUT, 'id, name and a level >= 1 are required')

    try:
        if backend.single('tiers', 'id', where={'id': tier_id}) is None:
            return Denied(DeniedReason.NOT_FOUND, 'tier not found')
        if _clashing_tier(backend, fields, exclude_id=tier_id):
            return Redirect(TIERS_PAGE)
        backend.update('tiers', fields, where={'id': tier_id})
    except BackendError as e:
        logger.error("Error updating tier %s: %s", tier_id, e)
        return Denied(DeniedReason.BACKEND_ERROR)

    invalidate('tier')
    return Redirect(TIERS_PAGE, message='Tier updated')


def delete_tier(backend, caller, form):
    denied = gate(caller, Action.WRITE_TIER)
    if denied:
        return denied

    tier_id = required_text(form, 'id')
    if not tier_id:
        return Denied(DeniedReason.INVALID_INPUT, 'id is required')

    try:
        if backend.single('tiers', 'id', where={'id': tier_id}) is None:
            return Denied(DeniedReason.NOT_FOUND, 'tier not found')

        in_use = backend.select('sponsors', 'id', where={'tier_id': tier_id}, limit=1)
        if in_use:
            return Redirect(TIERS_PAGE)

        backend.delete('tiers', where={'id': tier_id})
    except BackendError as e:
        logger.error("Error deleting tier %s: %s", tier_id, e)
        return Denied(DeniedReason.BACKEND_ERROR)

    invalidate('tier')
    return Redirect(TIERS_PAGE, message='Tier deleted')
