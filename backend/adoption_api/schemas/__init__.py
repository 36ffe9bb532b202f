"""
Pet Adoption API — Pydantic Schemas
====================================

What:  The API contract: stored record shapes, create/update payloads and the
       response envelopes. Repositories also return these record models, so
       the same types flow from the store gateway to the HTTP response.
"""
