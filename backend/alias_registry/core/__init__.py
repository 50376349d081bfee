"""Core Layer — alias domain logic, no framework, no async, no DB driver.

Invariants:
    - No module in core/ imports from services/, api/, infrastructure/, or db/
    - Storage reached only through the Protocols in repository_protocols.py

Design Decisions:
    - Functional core separated from imperative shell: the shell owns
      transactions, the core owns invariants
"""
