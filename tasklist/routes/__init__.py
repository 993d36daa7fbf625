"""
Routes package for the Tasklist service.

This package contains route blueprints:
- api: REST API endpoints for programmatic access
"""
