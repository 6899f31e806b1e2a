"""Decorators for the auth blueprint."""

from functools import wraps

from flask import flash, redirect, session, url_for


def login_required(f=None, admin_required=False):
    """Redirect to the public site if the visitor is not a signed-in admin.

    Usage:
    @login_required
    def protected_view():
        ...

    @login_required(admin_required=True)
    def admin_view():
        ...
    """

    def decorator(func):
        @wraps(func)
        def decorated_function(*args, **kwargs):
            if "user_id" not in session:
                flash("Please sign in to continue.", "warning")
                return redirect(url_for("navetane.view_navetane"))
            if admin_required and not session.get("is_admin"):
                flash("You are not authorized to view this page.", "danger")
                return redirect(url_for("navetane.view_navetane"))
            return func(*args, **kwargs)

        return decorated_function

    if f:
        return decorator(f)
    return decorator
