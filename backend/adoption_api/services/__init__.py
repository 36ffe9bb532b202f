# Services package init
"""
Pet Adoption API — Services Layer
==================================

What:  Business logic sitting between routes (HTTP) and repositories.

Service Inventory:
    - ApplicationService: application CRUD plus the approval workflow, the
      one operation that changes two aggregates (application + pet)
"""
