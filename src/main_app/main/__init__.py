"""
main - Main Blueprint

This blueprint handles the HTML routes:
- Conversion form (index)
- Clearing the form
- Health check
"""

from flask import Blueprint

bp = Blueprint("main", __name__)

from main_app.main import routes  # Import routes after bp is created
