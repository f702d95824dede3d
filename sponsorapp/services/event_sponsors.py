"""
sponsorapp/services/event_sponsors.py - Sponsor <-> event links

Assigning an existing pair and removing a missing pair both succeed.
"""

import logging

from ..auth import Action
from ..backend import BackendError
from ..invalidation import invalidate
from ..results import Redirect, Denied, DeniedReason
from ..utils.helpers import required_text
from . import gate

logger = logging.getLogger(__name__)

MANAGE_PAGE = 'manage.event_sponsors'


def _pair(form):
    return required_text(form, 'event_id'), required_text(form, 'sponsor_id')


def assign_sponsor(backend, caller, form):
    denied = gate(caller, Action.LINK_SPONSOR_EVENT)
    if denied:
        return denied

    event_id, sponsor_id = _pair(form)
    if not event_id or not sponsor_id:
        return Denied(DeniedReason.INVALID_INPUT, 'event and sponsor are required')

    try:
        # Both lookups always run; either miss is the same outcome
        event = backend.single('events', 'id', where={'id': event_id})
        sponsor = backend.single('sponsors', 'id', where={'id': sponsor_id})
        if event is None or sponsor is None:
            logger.warning("Event or sponsor not found: event=%s sponsor=%s", event_id, sponsor_id)
            return Denied(DeniedReason.NOT_FOUND, 'event or sponsor not found')

        existing = backend.single('event_sponsors', 'id',
                                  where={'event_id': event_id, 'sponsor_id': sponsor_id})
        if existing is None:
            backend.insert('event_sponsors', {'event_id': event_id, 'sponsor_id': sponsor_id})
    except BackendError as e:
        logger.error("Error linking sponsor %s to event %s: %s", sponsor_id, event_id, e)
        return Denied(DeniedReason.BACKEND_ERROR)

    invalidate('event_sponsor', event_id=event_id, sponsor_id=sponsor_id)
    return Redirect(MANAGE_PAGE, message='Sponsor assigned to event')


def remove_sponsor(backend, caller, form):
    denied = gate(caller, Action.LINK_SPONSOR_EVENT)
    if denied:
        return denied

    event_id, sponsor_id = _pair(form)
    if not event_id or not sponsor_id:
        return Denied(DeniedReason.INVALID_INPUT, 'event and sponsor are required')

    try:
        backend.delete('event_sponsors', where={'event_id': event_id, 'sponsor_id': sponsor_id})
    except BackendError as e:
        logger.error("Error unlinking sponsor %s from event %s: %s", sponsor_id, event_id, e)
        return Denied(DeniedReason.BACKEND_ERROR)

    invalidate('event_sponsor', event_id=event_id, sponsor_id=sponsor_id)
    return Redirect(MANAGE_PAGE, message='Sponsor removed from event')
