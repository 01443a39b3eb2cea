"""
Pydantic schema definitions for API payloads.

``common`` holds the response envelopes shared by every resource
(pagination, mutation results, errors).  ``service`` and ``price``
describe the two managed record types.  Documents in the database are
schemaless, so the record models accept extra fields and are used to
build payloads rather than to validate stored data.
"""
