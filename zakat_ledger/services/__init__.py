"""Services Layer — reference checks, transactional writes, list queries and reports.

Invariants:
    - Services receive an AsyncSession; they never create engines or sessions
    - Every write runs inside unit_of_work.atomic (commit or full rollback)
    - Validation and reference checks complete before the first mutating statement

Design Decisions:
    - One service module per resource for locality; shared building blocks
      (reference_checks, query_filters, unit_of_work) kept separate
"""
