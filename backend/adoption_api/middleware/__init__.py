"""
Pet Adoption API — Middleware Package
======================================

Middleware Chain:
    Request → [Request ID] → [Logging] → [GZip] → [CORS] → Route Handler

    - request_id.RequestIDMiddleware: correlation ID for logs and errors
    - logging.RequestLoggingMiddleware: one access-log line per request
    - GZip and CORS come from FastAPI/Starlette and are configured in main.py

    Responses travel the chain in reverse, so the request ID header is set
    and the access log line carries the final status and duration.
"""
