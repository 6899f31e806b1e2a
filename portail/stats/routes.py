"""Routes for the Navetane statistics: the public page and the admin console."""

from firebase_admin import firestore
from flask import flash, jsonify, redirect, render_template, url_for

from portail.auth.decorators import login_required
from portail.core.constants import MATCH_LISTS, PLAYER_RANKINGS
from portail.errors import AppError
from portail.extensions import get_cache
from portail.teams.services import TeamService
from portail.utils import flash_form_errors, flash_store_error

from . import admin_bp, bp
from .forms import PlayerRankForm, StatsMatchForm
from .services import StatsService, get_stats_page_data, publish_stats

RANKING_TITLES = {
    "ballonDor": "Ballon d'Or",
    "goldenBoy": "Golden Boy (U20)",
    "topScorersChampionnat": "Top scorers (championnat)",
    "topScorersCoupe": "Top scorers (coupe)",
}
MATCH_LIST_TITLES = {"lastResults": "Last results", "upcomingMatches": "Upcoming matches"}


# --- Public ---


@bp.route("/", methods=["GET"])
def view_stats():
    """Render the published rankings, fixtures and preliminary match."""
    db = firestore.client()
    return render_template(
        "stats/public.html",
        stats=get_stats_page_data(db),
        ranking_titles=RANKING_TITLES,
        match_list_titles=MATCH_LIST_TITLES,
    )


@bp.route("/data.json", methods=["GET"])
def stats_data():
    """Serve the published statistics as JSON."""
    db = firestore.client()
    return jsonify(get_stats_page_data(db))


# --- Admin ---


@admin_bp.route("/", methods=["GET"])
@login_required(admin_required=True)
def manage_stats():
    """Show the draft rankings and fixture lists with their forms."""
    db = firestore.client()
    teams = TeamService.list_teams(db, cache=get_cache("teams"))
    player_form = PlayerRankForm()
    player_form.set_team_choices(teams)
    return render_template(
        "admin/stats.html",
        stats=StatsService.get_admin_stats(db),
        teams=teams,
        player_form=player_form,
        match_form=StatsMatchForm(),
        rankings=PLAYER_RANKINGS,
        match_lists=MATCH_LISTS,
        ranking_titles=RANKING_TITLES,
        match_list_titles=MATCH_LIST_TITLES,
    )


@admin_bp.route("/<string:ranking>/players", methods=["POST"])
@login_required(admin_required=True)
def add_player(ranking):
    """Append a player to a ranking."""
    form = PlayerRankForm()
    if not form.validate_on_submit():
        flash_form_errors(form)
        return redirect(url_for(".manage_stats"))
    db = firestore.client()
    try:
        StatsService.add_player(db, ranking, form.to_player())
        flash("Player added.", "success")
    except AppError as e:
        flash(e.message, e.flash_category)
    except Exception as e:
        flash_store_error("adding a player", e)
    return redirect(url_for(".manage_stats"))


@admin_bp.route("/<string:ranking>/players/<int:rank>/delete", methods=["POST"])
@login_required(admin_required=True)
def remove_player(ranking, rank):
    """Remove a player from a ranking."""
    db = firestore.client()
    try:
        StatsService.remove_player(db, ranking, rank)
        flash("Player removed.", "success")
    except AppError as e:
        flash(e.message, e.flash_category)
    except Exception as e:
        flash_store_error("removing a player", e)
    return redirect(url_for(".manage_stats"))


@admin_bp.route("/<string:section>/matches", methods=["POST"])
@login_required(admin_required=True)
def add_match(section):
    """Append a fixture to the last results or the upcoming matches."""
    form = StatsMatchForm()
    if not form.validate_on_submit():
        flash_form_errors(form)
        return redirect(url_for(".manage_stats"))
    db = firestore.client()
    try:
        StatsService.add_match(db, section, form.to_match())
        flash("Match added.", "success")
    except AppError as e:
        flash(e.message, e.flash_category)
    except Exception as e:
        flash_store_error("adding a match", e)
    return redirect(url_for(".manage_stats"))


@admin_bp.route("/<string:section>/matches/<int:index>/delete", methods=["POST"])
@login_required(admin_required=True)
def remove_match(section, index):
    """Remove a fixture from a list."""
    db = firestore.client()
    try:
        StatsService.remove_match(db, section, index)
        flash("Match removed.", "success")
    except AppError as e:
        flash(e.message, e.flash_category)
    except Exception as e:
        flash_store_error("removing a match", e)
    return redirect(url_for(".manage_stats"))


@admin_bp.route("/publish", methods=["POST"])
@login_required(admin_required=True)
def publish():
    """Publish the statistics to the public page."""
    db = firestore.client()
    try:
        publish_stats(db)
        flash("Statistics published.", "success")
    except Exception as e:
        flash_store_error("publishing the statistics", e)
    return redirect(url_for(".manage_stats"))
