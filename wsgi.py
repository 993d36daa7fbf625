"""WSGI entry point for the Tasklist service."""

import os

from tasklist import create_app

app = create_app(os.getenv("FLASK_ENV", "production"))
