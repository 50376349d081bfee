"""KvEntry ORM — one row per key of the flat byte-keyed store.

Invariants:
    - key is the full namespaced key (prefix included), primary key
    - value is the codec-encoded record, never NULL

Design Decisions:
    - Single table for every namespace: namespaces live in the key prefix,
      matching the flat-store model the core is written against
"""

from sqlalchemy import LargeBinary
from sqlalchemy.orm import Mapped, mapped_column

from alias_registry.db.base import Base


class KvEntry(Base):
    """A single key/value pair of the backing store."""
    __tablename__ = "kv_entries"

    key: Mapped[bytes] = mapped_column(LargeBinary, primary_key=True)
    value: Mapped[bytes] = mapped_column(LargeBinary, nullable=False)
