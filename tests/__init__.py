"""
Test suite for the Tasklist service.

This package contains:
- unit/: model, store and configuration tests
- integration/: REST API tests through the Flask test client
- smoke/: checks against a running server using requests
- performance/: Locust load scenarios
"""
