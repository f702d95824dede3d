# sponsorapp/routes/sponsors.py

from flask import Blueprint, render_template, request, g, abort

from .. import queries
from ..auth import Action
from ..backend import get_backend
from ..services import gate
from ..services import sponsors as actions
from ..utils.decorators import login_required, permission_required
from ..utils.helpers import clean, is_uuid
from ..utils.responses import respond

sponsors_bp = Blueprint('sponsors', __name__)


@sponsors_bp.route('/sponsors')
@permission_required(Action.VIEW_LISTINGS)
def list_sponsors():
    """Sponsors with tier, optional filters: tier, fulfilled, q (name search)"""
    tier_id = clean(request.args.get('tier'))
    fulfilled = {'true': True, 'false': False}.get(request.args.get('fulfilled', ''))
    search = clean(request.args.get('q'))

    backend = get_backend()
    sponsors = queries.sponsors_with_tiers(backend, tier_id=tier_id, fulfilled=fulfilled, search=search)

    return render_template('sponsors.html',
                           sponsors=sponsors,
                           tiers=queries.tiers_by_level(backend),
                           search=search or '',
                           selected_tier=tier_id,
                           selected_fulfilled=request.args.get('fulfilled', ''))


@sponsors_bp.route('/sponsors-tiers')
@permission_required(Action.VIEW_LISTINGS)
def sponsors_tiers():
    groups = queries.sponsors_grouped_by_tier(get_backend())
    return render_template('sponsors_tiers.html', groups=groups)


@sponsors_bp.route('/sponsor/<sponsor_id>')
@permission_required(Action.VIEW_LISTINGS)
def detail(sponsor_id):
    if not is_uuid(sponsor_id):
        abort(404)
    sponsor = queries.sponsor_detail(get_backend(), sponsor_id)
    if sponsor is None:
        abort(404)
    return render_template('sponsor_detail.html', sponsor=sponsor)


@sponsors_bp.route('/sponsors/add', methods=['GET', 'POST'])
@login_required
def add_sponsor():
    backend = get_backend()
    if request.method == 'POST':
        return respond(actions.create_sponsor(backend, g.caller, request.form))

    denied = gate(g.caller, Action.WRITE_SPONSOR)
    if denied:
        return respond(denied)
    return render_template('sponsor_form.html', sponsor=None, tiers=queries.tiers_by_level(backend))


@sponsors_bp.route('/sponsors/edit/<sponsor_id>', methods=['GET', 'POST'])
@login_required
def edit_sponsor(sponsor_id):
    if not is_uuid(sponsor_id):
        abort(404)
    backend = get_backend()
    if request.method == 'POST':
        form = request.form.to_dict()
        form['id'] = sponsor_id
        return respond(actions.update_sponsor(backend, g.caller, form))

    denied = gate(g.caller, Action.WRITE_SPONSOR)
    if denied:
        return respond(denied)

    sponsor = backend.single('sponsors', where={'id': sponsor_id})
    if sponsor is None:
        abort(404)
    return render_template('sponsor_form.html', sponsor=sponsor, tiers=queries.tiers_by_level(backend))


@sponsors_bp.route('/sponsors/delete', methods=['POST'])
@login_required
def delete_sponsor():
    return respond(actions.delete_sponsor(get_backend(), g.caller, request.form))
