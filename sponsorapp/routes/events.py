# sponsorapp/routes/events.py

from flask import Blueprint, render_template, request, g, abort

from .. import queries
from ..auth import Action
from ..backend import get_backend
from ..services import gate
from ..services import events as actions
from ..utils.decorators import login_required, permission_required
from ..utils.helpers import is_uuid
from ..utils.responses import respond

events_bp = Blueprint('events', __name__)


@events_bp.route('/events')
@permission_required(Action.VIEW_LISTINGS)
def list_events():
    """All events, newest first, with their sponsors"""
    events = queries.events_with_sponsors(get_backend())
    return render_template('events.html', events=events)


@events_bp.route('/event/<event_id>')
@permission_required(Action.VIEW_LISTINGS)
def detail(event_id):
    if not is_uuid(event_id):
        abort(404)
    event = queries.event_detail(get_backend(), event_id)
    if event is None:
        abort(404)
    return render_template('event_detail.html', event=event)


@events_bp.route('/events/add', methods=['GET', 'POST'])
@login_required
def add_event():
    if request.method == 'POST':
        return respond(actions.create_event(get_backend(), g.caller, request.form))

    denied = gate(g.caller, Action.WRITE_EVENT)
    if denied:
        return respond(denied)
    return render_template('event_form.html', event=None)


@events_bp.route('/events/edit/<event_id>', methods=['GET', 'POST'])
@login_required
def edit_event(event_id):
    if not is_uuid(event_id):
        abort(404)
    if request.method == 'POST':
        form = request.form.to_dict()
        form['id'] = event_id
        return respond(actions.update_event(get_backend(), g.caller, form))

    denied = gate(g.caller, Action.WRITE_EVENT)
    if denied:
        return respond(denied)

    event = get_backend().single('events', where={'id': event_id})
    if event is None:
        abort(404)
    return render_template('event_form.html', event=event)


@events_bp.route('/events/delete', methods=['POST'])
@login_required
def delete_event():
    return respond(actions.delete_event(get_backend(), g.caller, request.form))
