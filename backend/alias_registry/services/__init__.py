"""Services Layer — command dispatch between transport and core.

Invariants:
    - Command -> core function mapping is explicit (no auto-discovery)
    - Services shape responses; core never sees schemas
"""
