# sponsorapp/services/events.py

import logging

from ..auth import Action
from ..backend import BackendError
from ..invalidation import invalidate
from ..results import Redirect, Denied, DeniedReason
from ..utils.helpers import clean, required_text, parse_date
from . import gate

logger = logging.getLogger(__name__)


def _event_fields(form):
    title = required_text(form, 'title')
    event_date = parse_date(form.get('date'))
    if not title or not event_date:
        return None
    return {
        'title': title,
        'date': event_date.isoformat(),
        'details': clean(form.get('details')),
    }


def create_event(backend, caller, form):
    """Create an event, then go to the events listing."""
    denied = gate(caller, Action.WRITE_EVENT)
    if denied:
        return denied

    fields = _event_fields(form)
    if fields is None:
        return Denied(DeniedReason.INVALID_INPUT, 'title and a valid date are required')

    try:
        backend.insert('events', fields)
    except BackendError as e:
        logger.error("Error creating event: %s", e)
        return Denied(DeniedReason.BACKEND_ERROR)

    invalidate('event')
    return Redirect('events.list_events', message='Event created successfully')


def update_event(backend, caller, form):
    """Update an event, then go to its detail page."""
    denied = gate(caller, Action.WRITE_EVENT)
    if denied:
        return denied

    event_id = required_text(form, 'id')
    fields = _event_fields(form)
    if not event_id or fields is None:
        return Denied(DeniedReason.INVALID_INPUT, 'id, title and a valid date are required')

    try:
        if backend.single('events', 'id', where={'id': event_id}) is None:
            return Denied(DeniedReason.NOT_FOUND, 'event not found')
        backend.update('events', fields, where={'id': event_id})
    except BackendError as e:
        logger.error("Error updating event %s: %s", event_id, e)
        return Denied(DeniedReason.BACKEND_ERROR)

    invalidate('event', event_id=event_id)
    return Redirect('events.detail', {'event_id': event_id}, 'Event updated successfully')


def delete_event(backend, caller, form):
    """Delete an event; its sponsor links go with it (ON DELETE CASCADE)."""
    denied = gate(caller, Action.WRITE_EVENT)
    if denied:
        return denied

    event_id = required_text(form, 'id')
    if not event_id:
        return Denied(DeniedReason.INVALID_INPUT, 'id is required')

    try:
        if backend.single('events', 'id', where={'id': event_id}) is None:
            return Denied(DeniedReason.NOT_FOUND, 'event not found')
        backend.delete('events', where={'id': event_id})
    except BackendError as e:
        logger.error("Error deleting event %s: %s", event_id, e)
        return Denied(DeniedReason.BACKEND_ERROR)

    invalidate('event', event_id=event_id)
    return Redirect('events.list_events', message='Event deleted')
