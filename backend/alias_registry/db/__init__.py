"""Database Infrastructure — SQLAlchemy Base shared by every ORM model.

Invariants:
    - Single engine per process (initialized via infrastructure/database.init_db)
    - Sessions are synchronous and transactional (one per command)
"""
