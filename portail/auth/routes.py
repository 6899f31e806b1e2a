"""Session routes for admins signing in through Firebase Authentication."""

from firebase_admin import auth, firestore
from flask import current_app, flash, jsonify, redirect, request, session, url_for

from portail.core.constants import USERS_COLLECTION

from . import bp


@bp.route("/session_login", methods=["POST"])
def session_login():
    """
    Called by the client after a successful Firebase sign-in.
    It receives the ID token, verifies it, and creates a server-side session.
    """
    id_token = (request.get_json(silent=True) or {}).get("idToken")
    if not id_token:
        return jsonify({"status": "error", "message": "Missing ID token."}), 400
    try:
        decoded_token = auth.verify_id_token(id_token)
        uid = decoded_token["uid"]
        db = firestore.client()
        user_doc = db.collection(USERS_COLLECTION).document(uid).get()
        if not user_doc.exists:
            return jsonify({"status": "error", "message": "Account not found."}), 404
        user_info = user_doc.to_dict() or {}
        session["user_id"] = uid
        session["is_admin"] = bool(user_info.get("isAdmin", False))
        return jsonify({"status": "success", "isAdmin": session["is_admin"]})
    except Exception as e:
        current_app.logger.error(f"Error during session login: {e}")
        return jsonify({"status": "error", "message": "Invalid token or server error."}), 401


@bp.route("/logout")
def logout():
    """Clear the server-side session."""
    session.clear()
    flash("You have been signed out.", "info")
    return redirect(url_for("navetane.view_navetane"))
