"""
Backend application package.

``main`` builds the FastAPI application; ``core`` holds configuration,
logging, the document store and the pagination helpers; ``services``
wraps each collection; ``api`` exposes the HTTP routes.

The application is not created on package import.  ``schemas`` is
shared with the dashboard client, which must be importable without
building the server; load ``catalog_dashboard.app.main`` to get
``app``.
"""
