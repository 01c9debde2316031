"""Pydantic Schemas — request/response contracts for the REST API.

Invariants:
    - Schemas check types only (UUID, date, Decimal); field rules live in core/validation
    - Responses are built from ORM rows (from_attributes)
    - Decimal amounts serialize as strings

Design Decisions:
    - Separate from models: schemas are API contracts, models are persistence
    - Enum-valued fields accepted as plain str so core validators report them
      with the same violation shape as every other rule
"""
