"""
Service layer.

Each module wraps one collection of the document database behind an
async class‑method API used by the endpoints.
"""
