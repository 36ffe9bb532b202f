"""
Pet Adoption API — Application Package Initializer
===================================================

What: Marks the `adoption_api` directory as a Python package.
Who:  Imported by uvicorn (`adoption_api.main:app`), Alembic, and pytest.

Architecture Note:
    The backend is layered, leaves first:

    ┌─────────────────────────────────────┐
    │        Routes (Request Surface)     │  ← HTTP concerns only
    ├─────────────────────────────────────┤
    │   Services (Application Workflow)   │  ← approval state machine
    ├─────────────────────────────────────┤
    │   Repositories (one per table)      │  ← per-table CRUD
    ├─────────────────────────────────────┤
    │     Record Store Gateway (store)    │  ← filtered reads/writes
    └─────────────────────────────────────┘

    Resource routes never talk to the store directly (/health only pings
    it). The application service is the only component that touches two
    aggregates (application + pet) in one operation.
"""

__version__ = "1.0.0"
