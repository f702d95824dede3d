# sponsorapp/routes/user.py

from flask import Blueprint, render_template, request, g

from ..backend import get_backend
from ..services.account import update_profile
from ..utils.decorators import login_required
from ..utils.responses import respond

user_bp = Blueprint('user', __name__)

# Shown when the sign-up trigger has not created a profile row yet
DEFAULT_PROFILE = {'role': 'user', 'is_approved': False, 'full_name': None}


def _profile():
    profile = dict(DEFAULT_PROFILE, email=g.caller.email, user_id=g.caller.user_id)
    if g.caller.profile:
        profile.update(g.caller.profile)
    return profile


@user_bp.route('/profile')
@login_required
def profile():
    """View own profile (no approval needed)"""
    return render_template('profile.html', profile=_profile())


@user_bp.route('/profile/edit', methods=['GET', 'POST'])
@login_required
def edit_profile():
    if request.method == 'POST':
        return respond(update_profile(get_backend(), g.caller, request.form))
    return render_template('profile_edit.html', profile=_profile())
