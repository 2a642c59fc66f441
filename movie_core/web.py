from flask import Blueprint, current_app, send_from_directory

web_bp = Blueprint("web", __name__)

@web_bp.get("/")
def html_index():
    # single-page client; it talks to the JSON routes in api.py
    return send_from_directory(current_app.static_folder, "index.html")
