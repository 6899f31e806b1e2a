"""Routes for sponsors."""

from firebase_admin import firestore
from flask import flash, jsonify, redirect, render_template, url_for

from portail.auth.decorators import login_required
from portail.errors import AppError
from portail.utils import flash_form_errors, flash_store_error

from . import admin_bp, bp
from .forms import SponsorForm
from .services import SponsorService, get_public_sponsors, publish_sponsors


@bp.route("/sponsors.json", methods=["GET"])
def public_sponsors():
    """Serve the published sponsors."""
    db = firestore.client()
    return jsonify({"sponsors": get_public_sponsors(db)})


@admin_bp.route("/", methods=["GET"])
@login_required(admin_required=True)
def manage_sponsors():
    db = firestore.client()
    sponsors = SponsorService.list_sponsors(db)
    return render_template("admin/sponsors.html", sponsors=sponsors, form=SponsorForm())


@admin_bp.route("/", methods=["POST"])
@login_required(admin_required=True)
def create_sponsor():
    """Add a sponsor."""
    form = SponsorForm()
    if not form.validate_on_submit():
        flash_form_errors(form)
        return redirect(url_for(".manage_sponsors"))
    db = firestore.client()
    try:
        SponsorService.create_sponsor(
            db, form.name.data, form.logo_url.data, form.website_url.data
        )
        flash("Sponsor added.", "success")
    except AppError as e:
        flash(e.message, e.flash_category)
    except Exception as e:
        flash_store_error("creating a sponsor", e)
    return redirect(url_for(".manage_sponsors"))


@admin_bp.route("/<string:sponsor_id>/delete", methods=["POST"])
@login_required(admin_required=True)
def delete_sponsor(sponsor_id):
    """Delete a sponsor."""
    db = firestore.client()
    try:
        SponsorService.delete_sponsor(db, sponsor_id)
        flash("Sponsor deleted.", "success")
    except Exception as e:
        flash_store_error("deleting a sponsor", e)
    return redirect(url_for(".manage_sponsors"))


@admin_bp.route("/publish", methods=["POST"])
@login_required(admin_required=True)
def publish():
    """Publish the sponsors list."""
    db = firestore.client()
    try:
        publish_sponsors(db)
        flash("Sponsors published.", "success")
    except Exception as e:
        flash_store_error("publishing sponsors", e)
    return redirect(url_for(".manage_sponsors"))
