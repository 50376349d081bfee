"""ORM Models — SQLAlchemy declarative models.

Invariants:
    - All models inherit from Base (db/base.py)

Design Decisions:
    - All models imported here so Base.metadata is complete before create_all
      or alembic autogenerate run
"""

from alias_registry.models.kv_entry import KvEntry  # noqa: F401
