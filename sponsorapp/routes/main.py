# sponsorapp/routes/main.py

from flask import Blueprint, render_template, redirect, url_for, g, current_app

from .. import queries
from ..auth import Action
from ..backend import get_backend
from ..utils.decorators import login_required

main_bp = Blueprint('main', __name__)


@main_bp.route('/')
@login_required
def dashboard():
    """Overview for approved users; pending accounts land on their profile"""
    if not g.caller.can(Action.VIEW_LISTINGS):
        return redirect(url_for('user.profile'))

    stats, upcoming = queries.dashboard(get_backend(), g.caller,
                                        current_app.config['DASHBOARD_UPCOMING_LIMIT'])
    return render_template('dashboard.html', stats=stats, upcoming=upcoming)


@main_bp.route('/error')
def error():
    return render_template('error.html')


@main_bp.route('/unauthorized')
def unauthorized():
    return render_template('unauthorized.html')
