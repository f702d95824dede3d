"""
sponsorapp/utils/responses.py - Turn action results into HTTP redirects
"""

from flask import current_app, flash, redirect, url_for

from ..results import DeniedReason


def respond(result):
    """Redirect for a Redirect or Denied result. Mutating routes always end here."""
    if result.ok:
        if result.message:
            flash(result.message, 'success')
        return redirect(url_for(result.endpoint, **result.values))

    current_app.logger.info("Action denied: %s %s", result.reason.value, result.detail)
    if result.reason is DeniedReason.UNAUTHENTICATED:
        flash('Please log in first', 'warning')
    return redirect(url_for(result.endpoint))
