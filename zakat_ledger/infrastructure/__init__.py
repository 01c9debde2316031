"""Infrastructure Layer — database engine, logging and token verification.

Invariants:
    - Infrastructure never imports from services/ or api/
    - Storage failures are mapped to typed errors from core/errors.py
"""
