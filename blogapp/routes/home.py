# blogapp/routes/home.py
from flask import Blueprint, jsonify, render_template

bp = Blueprint("home", __name__)


@bp.get("/")
def index():
    """Public home page with a link to the archive."""
    return render_template("home.html")


@bp.get("/health")
def health():
    """Simple health endpoint used by tests."""
    return jsonify({"status": "ok"})
