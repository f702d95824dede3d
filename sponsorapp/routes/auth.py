# sponsorapp/routes/auth.py

from flask import Blueprint, render_template, request, redirect, url_for, flash, session, current_app

from ..backend import BackendError, get_backend
from ..utils.helpers import clean

auth_bp = Blueprint('auth', __name__)


@auth_bp.route('/login', methods=['GET', 'POST'])
def login():
    """Sign in with e-mail and password"""
    if request.method == 'POST':
        email = clean(request.form.get('email'))
        password = request.form.get('password') or ''

        identity = None
        if email and password:
            try:
                identity = get_backend().sign_in(email, password)
            except BackendError as e:
                current_app.logger.error("Sign-in failed for %s: %s", email, e)
                return redirect(url_for('main.error'))

        if identity:
            session.clear()
            session['user_id'] = str(identity['id'])
            session.permanent = True
            flash('Login successful!', 'success')
            return redirect(url_for('main.dashboard'))

        flash('Invalid email or password', 'danger')

    return render_template('login.html')


@auth_bp.route('/signup', methods=['GET', 'POST'])
def signup():
    """Create an account; it stays pending until a manager approves it"""
    if request.method == 'POST':
        full_name = clean(request.form.get('full_name'))
        email = clean(request.form.get('email'))
        password = request.form.get('password') or ''
        confirm_password = request.form.get('confirm_password') or ''

        if not full_name or not email or not password:
            flash('Name, email and password are required', 'danger')
            return redirect(url_for('auth.signup'))

        if password != confirm_password:
            flash('Passwords do not match', 'danger')
            return redirect(url_for('auth.signup'))

        if len(password) < current_app.config['MIN_PASSWORD_LENGTH']:
            flash(f"Password must be at least {current_app.config['MIN_PASSWORD_LENGTH']} characters",
                  'danger')
            return redirect(url_for('auth.signup'))

        try:
            identity = get_backend().sign_up(email, password, full_name)
        except BackendError as e:
            current_app.logger.error("Sign-up failed for %s: %s", email, e)
            return redirect(url_for('main.error'))

        if identity is None:
            flash('Email already registered', 'danger')
            return redirect(url_for('auth.signup'))

        flash('Registration successful! Your account is pending approval. Please log in.', 'success')
        return redirect(url_for('auth.login'))

    return render_template('signup.html')


@auth_bp.route('/logout', methods=['GET', 'POST'])
def logout():
    session.clear()
    flash('You have been logged out successfully', 'info')
    return redirect(url_for('auth.login'))
