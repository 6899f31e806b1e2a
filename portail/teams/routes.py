"""Routes for the team registry admin."""

from firebase_admin import firestore
from flask import flash, redirect, render_template, url_for

from portail.auth.decorators import login_required
from portail.errors import AppError
from portail.extensions import get_cache
from portail.utils import flash_form_errors, flash_store_error

from . import bp
from .forms import TeamForm
from .models import TeamPatch
from .services import TEAMS_VIEW, TeamService


@bp.route("/", methods=["GET"])
@login_required(admin_required=True)
def manage_teams():
    """List the registry with a creation form."""
    db = firestore.client()
    teams = TeamService.list_teams(db, cache=get_cache("teams"))
    return render_template("admin/teams.html", teams=teams, form=TeamForm())


@bp.route("/", methods=["POST"])
@login_required(admin_required=True)
def create_team():
    """Create a team from the submitted form."""
    form = TeamForm()
    if not form.validate_on_submit():
        flash_form_errors(form)
        return redirect(url_for(".manage_teams"))
    db = firestore.client()
    try:
        TeamService.create_team(
            db, form.name.data, form.logo_url.data, cache=get_cache("teams")
        )
        flash(f'Team "{form.name.data}" created.', "success")
    except AppError as e:
        flash(e.message, e.flash_category)
    except Exception as e:
        flash_store_error("creating a team", e)
    return redirect(url_for(".manage_teams"))


@bp.route("/<string:team_id>/edit", methods=["POST"])
@login_required(admin_required=True)
def edit_team(team_id):
    """Update a team's name and logo."""
    form = TeamForm()
    if not form.validate_on_submit():
        flash_form_errors(form)
        return redirect(url_for(".manage_teams"))
    db = firestore.client()
    try:
        TeamService.update_team(
            db,
            team_id,
            TeamPatch(name=form.name.data, logo_url=form.logo_url.data),
            cache=get_cache("teams"),
        )
        flash(f'Team "{form.name.data}" updated.', "success")
    except AppError as e:
        flash(e.message, e.flash_category)
    except Exception as e:
        flash_store_error("updating a team", e)
    return redirect(url_for(".manage_teams"))


@bp.route("/<string:team_id>/delete", methods=["POST"])
@login_required(admin_required=True)
def delete_team(team_id):
    """Delete a team from the registry."""
    db = firestore.client()
    try:
        TeamService.delete_team(db, team_id, cache=get_cache("teams"))
        flash("Team deleted.", "success")
    except Exception as e:
        flash_store_error("deleting a team", e)
    return redirect(url_for(".manage_teams"))


@bp.route("/publish", methods=["POST"])
@login_required(admin_required=True)
def publish_teams():
    """Publish the registry to the public teams view."""
    db = firestore.client()
    try:
        TEAMS_VIEW.publish(db)
        flash("Teams published.", "success")
    except Exception as e:
        flash_store_error("publishing teams", e)
    return redirect(url_for(".manage_teams"))
