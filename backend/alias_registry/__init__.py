"""Alias Registry Package — claim, release and resolve human-readable aliases.

Invariants:
    - Package root holds only the version string (import side-effects prohibited)

Design Decisions:
    - Explicit imports only, no star exports
"""

__version__ = "1.0.0"
