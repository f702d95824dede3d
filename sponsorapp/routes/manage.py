# sponsorapp/routes/manage.py

from flask import Blueprint, render_template, request, g

from .. import queries
from ..auth import Action
from ..backend import get_backend
from ..services import tiers, event_sponsors, users
from ..utils.decorators import login_required, permission_required
from ..utils.responses import respond

manage_bp = Blueprint('manage', __name__, url_prefix='/manage')


def _run(action):
    return respond(action(get_backend(), g.caller, request.form))


# ────────────────────────────────────────────────
# TIERS (admin)
# ────────────────────────────────────────────────
@manage_bp.route('/tiers', endpoint='tiers')
@permission_required(Action.WRITE_TIER)
def tiers_page():
    return render_template('manage_tiers.html', tiers=queries.tier_overview(get_backend()))


@manage_bp.route('/tiers/create', methods=['POST'])
@login_required
def create_tier():
    return _run(tiers.create_tier)


@manage_bp.route('/tiers/update', methods=['POST'])
@login_required
def update_tier():
    return _run(tiers.update_tier)


@manage_bp.route('/tiers/delete', methods=['POST'])
@login_required
def delete_tier():
    return _run(tiers.delete_tier)


# ────────────────────────────────────────────────
# EVENT SPONSORS (manager / admin)
# ────────────────────────────────────────────────
@manage_bp.route('/event-sponsors', endpoint='event_sponsors')
@permission_required(Action.LINK_SPONSOR_EVENT)
def event_sponsors_page():
    data = queries.event_sponsor_management(get_backend())
    return render_template('manage_event_sponsors.html', **data)


@manage_bp.route('/event-sponsors/assign', methods=['POST'])
@login_required
def assign_sponsor():
    return _run(event_sponsors.assign_sponsor)


@manage_bp.route('/event-sponsors/remove', methods=['POST'])
@login_required
def remove_sponsor():
    return _run(event_sponsors.remove_sponsor)


# ────────────────────────────────────────────────
# USER APPROVALS (manager / admin)
# ────────────────────────────────────────────────
@manage_bp.route('/user-approvals', endpoint='user_approvals')
@permission_required(Action.REVIEW_SIGNUP)
def user_approvals_page():
    backend = get_backend()
    return render_template('user_approvals.html',
                           pending=queries.pending_users(backend),
                           approved_count=queries.approved_user_count(backend))


@manage_bp.route('/user-approvals/approve', methods=['POST'])
@login_required
def approve_user():
    return _run(users.approve_user)


@manage_bp.route('/user-approvals/reject', methods=['POST'])
@login_required
def reject_user():
    return _run(users.reject_user)


# ────────────────────────────────────────────────
# USER ROLES (admin)
# ────────────────────────────────────────────────
@manage_bp.route('/user-roles', endpoint='user_roles')
@permission_required(Action.CHANGE_ROLE)
def user_roles_page():
    candidates = queries.role_candidates(get_backend(), g.caller.user_id)
    return render_template('user_roles.html', users=candidates)


@manage_bp.route('/user-roles/promote', methods=['POST'])
@login_required
def promote_user():
    return _run(users.promote_user)


@manage_bp.route('/user-roles/demote', methods=['POST'])
@login_required
def demote_user():
    return _run(users.demote_user)


# ────────────────────────────────────────────────
# USERS OVERVIEW (manager / admin)
# ────────────────────────────────────────────────
@manage_bp.route('/users', endpoint='users')
@permission_required(Action.REVIEW_SIGNUP)
def users_page():
    return render_template('users.html', users=queries.all_users(get_backend()))
