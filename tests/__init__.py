"""
Test suite for the Task Manager service.

This package contains:
- unit/: model, gateway, config and HTTP client tests
- integration/: endpoint tests through the Flask test client
- security/: hostile payloads and mass-assignment checks
"""
