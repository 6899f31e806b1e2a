"""Admin routes for the finals brackets."""

from firebase_admin import firestore
from flask import flash, redirect, render_template, url_for

from portail.auth.decorators import login_required
from portail.core.constants import BRACKET_STAGES, COMPETITIONS
from portail.errors import AppError
from portail.extensions import get_cache
from portail.teams.services import TeamService
from portail.utils import flash_form_errors, flash_store_error

from . import bp
from .forms import BracketMatchForm
from .models import BracketMatchPatch
from .services import FINALS_VIEW, FinalsService

STAGE_TITLES = {"quarters": "Quarterfinals", "semis": "Semifinals", "final": "Final"}


@bp.route("/", methods=["GET"])
@login_required(admin_required=True)
def manage_finals():
    """Show both draft brackets with one editor per match."""
    db = firestore.client()
    finals = FinalsService.get_admin_finals(db)
    teams = TeamService.list_teams(db, cache=get_cache("teams"))
    form = BracketMatchForm()
    form.set_team_choices(teams)
    return render_template(
        "admin/finals.html",
        finals=finals,
        teams=teams,
        form=form,
        competitions=COMPETITIONS,
        stages=BRACKET_STAGES,
        stage_titles=STAGE_TITLES,
    )


@bp.route("/<string:competition>/<string:stage>/add", methods=["POST"])
@login_required(admin_required=True)
def add_match(competition, stage):
    """Append an empty match to a stage."""
    db = firestore.client()
    try:
        FinalsService.add_match(db, competition, stage)
        flash("Match added.", "success")
    except AppError as e:
        flash(e.message, e.flash_category)
    except Exception as e:
        flash_store_error("adding a bracket match", e)
    return redirect(url_for(".manage_finals"))


@bp.route("/<string:competition>/<string:stage>/<string:match_id>/edit", methods=["POST"])
@login_required(admin_required=True)
def edit_match(competition, stage, match_id):
    """Save the teams, scores, date and status of a match."""
    form = BracketMatchForm()
    if not form.validate_on_submit():
        flash_form_errors(form)
        return redirect(url_for(".manage_finals"))
    db = firestore.client()
    patch = BracketMatchPatch(
        teamAId=form.team_a_id.data or None,
        teamBId=form.team_b_id.data or None,
        scoreA=form.score_a.data,
        scoreB=form.score_b.data,
        date=form.date.data or None,
        status=form.status.data,
    )
    try:
        FinalsService.update_match(db, competition, stage, match_id, patch)
        flash("Match saved.", "success")
    except AppError as e:
        flash(e.message, e.flash_category)
    except Exception as e:
        flash_store_error("saving a bracket match", e)
    return redirect(url_for(".manage_finals"))


@bp.route("/<string:competition>/<string:stage>/<string:match_id>/delete", methods=["POST"])
@login_required(admin_required=True)
def delete_match(competition, stage, match_id):
    """Remove a match from a stage."""
    db = firestore.client()
    try:
        FinalsService.remove_match(db, competition, stage, match_id)
        flash("Match removed.", "success")
    except AppError as e:
        flash(e.message, e.flash_category)
    except Exception as e:
        flash_store_error("removing a bracket match", e)
    return redirect(url_for(".manage_finals"))


@bp.route("/publish", methods=["POST"])
@login_required(admin_required=True)
def publish_finals():
    """Publish both brackets to the public page."""
    db = firestore.client()
    try:
        FINALS_VIEW.publish(db)
        flash("Finals published.", "success")
    except Exception as e:
        flash_store_error("publishing the finals", e)
    return redirect(url_for(".manage_finals"))
