"""Routes for articles and poll votes."""

from firebase_admin import firestore
from flask import current_app, flash, jsonify, redirect, render_template, request, url_for

from portail.auth.decorators import login_required
from portail.errors import AppError
from portail.utils import flash_form_errors, flash_store_error

from . import admin_bp, bp
from .forms import ArticleForm
from .services import ArticleService


@bp.route("/polls/<string:poll_id>/vote", methods=["POST"])
def vote(poll_id):
    """Count a vote and return the updated poll as JSON."""
    option_id = (request.get_json(silent=True) or {}).get("optionId") or request.form.get(
        "optionId"
    )
    db = firestore.client()
    try:
        poll = ArticleService.vote_on_poll(db, poll_id, option_id)
    except AppError as e:
        return jsonify(e.to_dict()), e.status_code
    except Exception as e:
        current_app.logger.error(f"Error recording vote on poll {poll_id}: {e}")
        return jsonify({"status": "error", "message": "Could not record the vote."}), 500
    return jsonify({"status": "success", "poll": poll})


@admin_bp.route("/", methods=["GET"])
@login_required(admin_required=True)
def manage_articles():
    db = firestore.client()
    articles = ArticleService.list_articles(db)
    return render_template("admin/articles.html", articles=articles, form=ArticleForm())


@admin_bp.route("/", methods=["POST"])
@login_required(admin_required=True)
def create_article():
    """Create an article from the submitted form."""
    form = ArticleForm()
    if not form.validate_on_submit():
        flash_form_errors(form)
        return redirect(url_for(".manage_articles"))
    db = firestore.client()
    try:
        ArticleService.create_article(
            db,
            form.title.data,
            form.content.data,
            author=form.author.data,
            excerpt=form.excerpt.data,
            poll_question=form.poll_question.data,
            poll_options=form.option_lines(),
        )
        flash("Article published.", "success")
    except AppError as e:
        flash(e.message, e.flash_category)
    except Exception as e:
        flash_store_error("creating an article", e)
    return redirect(url_for(".manage_articles"))


@admin_bp.route("/<string:article_id>/delete", methods=["POST"])
@login_required(admin_required=True)
def delete_article(article_id):
    """Delete an article together with its poll."""
    db = firestore.client()
    try:
        ArticleService.delete_article(db, article_id)
        flash("Article deleted.", "success")
    except Exception as e:
        flash_store_error("deleting an article", e)
    return redirect(url_for(".manage_articles"))
