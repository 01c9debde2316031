"""API Layer — FastAPI routes, request dependencies and error handlers.

Invariants:
    - Routes registered explicitly in main.py (no auto-discovery)
    - Every route resolves the caller and checks permission before calling a service
    - All endpoints return structured JSON responses

Design Decisions:
    - Thin routes delegate to services (impure shell around the pure core)
"""
