"""Infrastructure Layer — backing stores, database sessions, logging.

Invariants:
    - Infrastructure implements core/ protocols, never core/ rules
    - Store failures mapped to core/errors.DatabaseError
"""
