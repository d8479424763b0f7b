"""
api - JSON API Blueprint

This blueprint exposes the conversion to scripts:
- Listing supported languages
- Converting text
"""

from flask import Blueprint

bp = Blueprint("api", __name__)

from main_app.api import routes  # Import routes after bp is created
