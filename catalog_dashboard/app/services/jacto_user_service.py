"""
Service layer for the ``jactoUsers`` collection.

Users are created by other systems; the dashboard only lists, reads,
merges updates into and deletes them.
"""

from catalog_dashboard.app.services.document_service import DocumentService


class JactoUserService(DocumentService):
    collection = "jactoUsers"
    label = "jactoUser"
