"""
Routes package for the Task Manager application.

This package contains the route blueprint:
- api: REST API endpoints mounted at ``/v1``
"""
