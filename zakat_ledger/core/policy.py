"""Authorization Policy — (role, operation) → allow table.

Invariants:
    - Unknown roles and unknown operations are denied
    - Every authenticated role can read; deletes and lookup-table writes are admin-only
    - The table is consulted by the API layer before any service call

Design Decisions:
    - Explicit table over role hierarchy: one place to audit who may do what
"""

from zakat_ledger.core.domain_types import Role

_ALL = frozenset({Role.ADMIN, Role.STAFF, Role.VIEWER})
_WRITERS = frozenset({Role.ADMIN, Role.STAFF})
_ADMIN = frozenset({Role.ADMIN})

PERMISSIONS: dict[str, frozenset[Role]] = {
    "read": _ALL,
    "donor:write": _WRITERS,
    "donor:delete": _ADMIN,
    "beneficiary:write": _WRITERS,
    "beneficiary:delete": _ADMIN,
    "receipt:write": _WRITERS,
    "receipt:delete": _ADMIN,
    "distribution:write": _WRITERS,
    "distribution:delete": _ADMIN,
    "category:write": _ADMIN,
    "category:delete": _ADMIN,
    "program:write": _ADMIN,
    "program:delete": _ADMIN,
    "user:read": _ADMIN,
    "user:write": _ADMIN,
}


def is_allowed(role: str, operation: str) -> bool:
    try:
        parsed = Role(role)
    except ValueError:
        return False
    return parsed in PERMISSIONS.get(operation, frozenset())
