# Routes package init
"""
Pet Adoption API — API Routes Package
======================================

Route Inventory:
    - pets.py:             /api/pets, /api/pets/{id}, /api/pets/{id}/applications,
                           /api/pets/{id}/medical-records
    - applications.py:     /api/applications, /api/applications/{id},
                           /api/applications/{id}/approve
    - medical_records.py:  /api/medical-records, /api/medical-records/{id}
    - health.py:           GET / and GET /health

Routes are THIN: parse the request, call a repository or the application
service, wrap the result in {"status": "success", "data": ...}. They never
catch exceptions; the handlers registered in main.py build every error body.
"""
