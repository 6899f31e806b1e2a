"""Shared helpers for admin routes."""

from flask import current_app, flash

STORE_ERROR_MESSAGE = "An error occurred while talking to the database. Please try again."


def flash_form_errors(form):
    """Flash every validation error of a submitted form."""
    for field_name, errors in form.errors.items():
        label = getattr(form, field_name).label.text if hasattr(form, field_name) else field_name
        for error in errors:
            flash(f"{label}: {error}", "warning")


def flash_store_error(action, error):
    """Log a failed store call and show the admin a generic notification."""
    current_app.logger.error(f"Error while {action}: {error}")
    flash(STORE_ERROR_MESSAGE, "danger")
