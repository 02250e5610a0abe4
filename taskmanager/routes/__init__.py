"""
Routes package for the Task Manager service.

This package contains route blueprints:
- root: welcome message and health check at the site root
- api: JSON CRUD endpoints mounted at /tasks
"""
