"""
Top‑level package for the Catalog Dashboard.

The package has two halves.  ``app`` is the FastAPI backend that
proxies CRUD operations on the ``services``, ``prices`` and
``jactoUsers`` collections of the document database and applies
in‑memory filtering and pagination.  ``client`` is the dashboard side:
an HTTP client for that backend, a persistent TTL cache, the
application state container and the controller that drives the
tables, editors and confirmation prompt.

The package provides no public exports; import from the submodules.
"""

__all__ = []
