"""
Test suite for the Task Manager application.

This package contains:
- unit/: model, controller and frontend-layer tests
- integration/: REST API tests through the Flask test client
"""
