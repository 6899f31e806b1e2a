"""Routes for the Navetane league: the public page and the admin console."""

from firebase_admin import firestore
from flask import current_app, flash, jsonify, redirect, render_template, url_for

from portail.auth.decorators import login_required
from portail.errors import AppError
from portail.extensions import get_cache
from portail.teams.services import TeamService
from portail.utils import flash_form_errors, flash_store_error

from . import admin_bp, bp
from .forms import CoupeMatchForm, PouleForm, PouleTeamForm, PreliminaryMatchForm
from .models import CoupeMatchPatch, PoulePatch, PreliminaryMatchPatch
from .services import (
    NavetaneService,
    get_home_preview,
    get_navetane_page_data,
    publish_navetane,
)
from .standings import poule_standings


def _default_qualified():
    return current_app.config.get("NAVETANE_DEFAULT_QUALIFIED_COUNT")


# --- Public ---


@bp.route("/", methods=["GET"])
def view_navetane():
    """Render the published league: tables, cup, preliminary match and brackets."""
    db = firestore.client()
    data = get_navetane_page_data(db, _default_qualified())
    return render_template("navetane/public.html", **data)


@bp.route("/data.json", methods=["GET"])
def navetane_data():
    """Serve the published league as JSON."""
    db = firestore.client()
    return jsonify(get_navetane_page_data(db, _default_qualified()))


@bp.route("/preview.json", methods=["GET"])
def navetane_preview():
    """Serve the top of each published table for the home page card."""
    db = firestore.client()
    return jsonify({"poules": get_home_preview(db, _default_qualified())})


# --- Admin ---


@admin_bp.route("/", methods=["GET"])
@login_required(admin_required=True)
def manage_navetane():
    """Show the draft league with its editing forms."""
    db = firestore.client()
    poules = NavetaneService.list_poules(db)
    teams = TeamService.list_teams(db, cache=get_cache("teams"))
    team_form = PouleTeamForm()
    team_form.set_team_choices(teams)
    return render_template(
        "admin/navetane.html",
        poules=[poule_standings(p, _default_qualified()) for p in poules],
        explicit_counts={p["id"]: p.get("qualifiedCount") for p in poules},
        coupe_matches=NavetaneService.list_coupe_matches(db),
        preliminary_match=NavetaneService.get_preliminary_match(db),
        teams=teams,
        poule_form=PouleForm(),
        team_form=team_form,
        coupe_form=CoupeMatchForm(),
        preliminary_form=PreliminaryMatchForm(),
    )


@admin_bp.route("/poules", methods=["POST"])
@login_required(admin_required=True)
def create_poule():
    """Create a poule."""
    form = PouleForm()
    if not form.validate_on_submit():
        flash_form_errors(form)
        return redirect(url_for(".manage_navetane"))
    db = firestore.client()
    try:
        NavetaneService.create_poule(db, form.name.data, form.qualified_count.data)
        flash("Poule added.", "success")
    except AppError as e:
        flash(e.message, e.flash_category)
    except Exception as e:
        flash_store_error("creating a poule", e)
    return redirect(url_for(".manage_navetane"))


@admin_bp.route("/poules/<string:poule_id>/edit", methods=["POST"])
@login_required(admin_required=True)
def edit_poule(poule_id):
    """Rename a poule or change its number of qualifiers.

    A blank number of qualifiers returns the poule to the default rule.
    """
    form = PouleForm()
    if not form.validate_on_submit():
        flash_form_errors(form)
        return redirect(url_for(".manage_navetane"))
    db = firestore.client()
    try:
        NavetaneService.update_poule(
            db,
            poule_id,
            PoulePatch(name=form.name.data, qualified_count=form.qualified_count.data),
        )
        flash("Poule updated.", "success")
    except AppError as e:
        flash(e.message, e.flash_category)
    except Exception as e:
        flash_store_error("updating a poule", e)
    return redirect(url_for(".manage_navetane"))


@admin_bp.route("/poules/<string:poule_id>/delete", methods=["POST"])
@login_required(admin_required=True)
def delete_poule(poule_id):
    """Delete a poule and its table."""
    db = firestore.client()
    try:
        NavetaneService.delete_poule(db, poule_id)
        flash("Poule deleted.", "success")
    except Exception as e:
        flash_store_error("deleting a poule", e)
    return redirect(url_for(".manage_navetane"))


@admin_bp.route("/poules/<string:poule_id>/teams", methods=["POST"])
@login_required(admin_required=True)
def add_poule_team(poule_id):
    """Add a registry team to a poule."""
    form = PouleTeamForm()
    if not form.validate_on_submit():
        flash_form_errors(form)
        return redirect(url_for(".manage_navetane"))
    db = firestore.client()
    try:
        NavetaneService.add_team_to_poule(db, poule_id, form.team_id.data, form.to_stats())
        flash("Team added.", "success")
    except AppError as e:
        flash(e.message, e.flash_category)
    except Exception as e:
        flash_store_error("adding a team to a poule", e)
    return redirect(url_for(".manage_navetane"))


@admin_bp.route("/poules/<string:poule_id>/teams/<string:team_id>/edit", methods=["POST"])
@login_required(admin_required=True)
def edit_poule_team(poule_id, team_id):
    """Edit a team's line in a poule table."""
    form = PouleTeamForm()
    if not form.validate_on_submit():
        flash_form_errors(form)
        return redirect(url_for(".manage_navetane"))
    db = firestore.client()
    try:
        NavetaneService.update_team_in_poule(
            db, poule_id, team_id, form.to_stats(), new_team_id=form.team_id.data
        )
        flash("Team updated.", "success")
    except AppError as e:
        flash(e.message, e.flash_category)
    except Exception as e:
        flash_store_error("updating a team in a poule", e)
    return redirect(url_for(".manage_navetane"))


@admin_bp.route("/poules/<string:poule_id>/teams/<string:team_id>/delete", methods=["POST"])
@login_required(admin_required=True)
def remove_poule_team(poule_id, team_id):
    """Remove a team from a poule."""
    db = firestore.client()
    try:
        NavetaneService.remove_team_from_poule(db, poule_id, team_id)
        flash("Team removed.", "success")
    except AppError as e:
        flash(e.message, e.flash_category)
    except Exception as e:
        flash_store_error("removing a team from a poule", e)
    return redirect(url_for(".manage_navetane"))


@admin_bp.route("/coupe", methods=["POST"])
@login_required(admin_required=True)
def create_coupe_match():
    """Add a cup fixture."""
    form = CoupeMatchForm()
    if not form.validate_on_submit():
        flash_form_errors(form)
        return redirect(url_for(".manage_navetane"))
    db = firestore.client()
    try:
        NavetaneService.create_coupe_match(db, form.team_a.data, form.team_b.data)
        flash("Match added.", "success")
    except AppError as e:
        flash(e.message, e.flash_category)
    except Exception as e:
        flash_store_error("creating a cup match", e)
    return redirect(url_for(".manage_navetane"))


@admin_bp.route("/coupe/<string:match_id>/edit", methods=["POST"])
@login_required(admin_required=True)
def edit_coupe_match(match_id):
    """Edit a cup fixture."""
    form = CoupeMatchForm()
    if not form.validate_on_submit():
        flash_form_errors(form)
        return redirect(url_for(".manage_navetane"))
    db = firestore.client()
    try:
        NavetaneService.update_coupe_match(
            db, match_id, CoupeMatchPatch(team_a=form.team_a.data, team_b=form.team_b.data)
        )
        flash("Match updated.", "success")
    except AppError as e:
        flash(e.message, e.flash_category)
    except Exception as e:
        flash_store_error("updating a cup match", e)
    return redirect(url_for(".manage_navetane"))


@admin_bp.route("/coupe/<string:match_id>/delete", methods=["POST"])
@login_required(admin_required=True)
def delete_coupe_match(match_id):
    """Delete a cup fixture."""
    db = firestore.client()
    try:
        NavetaneService.delete_coupe_match(db, match_id)
        flash("Match deleted.", "success")
    except Exception as e:
        flash_store_error("deleting a cup match", e)
    return redirect(url_for(".manage_navetane"))


@admin_bp.route("/preliminary", methods=["POST"])
@login_required(admin_required=True)
def update_preliminary_match():
    """Save the preliminary match."""
    form = PreliminaryMatchForm()
    if not form.validate_on_submit():
        flash_form_errors(form)
        return redirect(url_for(".manage_navetane"))
    db = firestore.client()
    try:
        NavetaneService.update_preliminary_match(
            db,
            PreliminaryMatchPatch(
                team_a=form.team_a.data,
                team_b=form.team_b.data,
                winner_plays_against=form.winner_plays_against.data,
            ),
        )
        flash("Preliminary match updated.", "success")
    except AppError as e:
        flash(e.message, e.flash_category)
    except Exception as e:
        flash_store_error("updating the preliminary match", e)
    return redirect(url_for(".manage_navetane"))


@admin_bp.route("/publish", methods=["POST"])
@login_required(admin_required=True)
def publish():
    """Publish the draft league to the public page."""
    db = firestore.client()
    try:
        publish_navetane(db)
        flash("Navetane page published.", "success")
    except Exception as e:
        flash_store_error("publishing the Navetane page", e)
    return redirect(url_for(".manage_navetane"))
