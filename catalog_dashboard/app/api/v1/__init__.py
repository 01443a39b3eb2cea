"""
Version 1 of the API.

Bundles the endpoints consumed by the dashboard.  Breaking changes
belong in a new version subpackage.
"""
