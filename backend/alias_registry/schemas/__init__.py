"""Pydantic Schemas — command/response validation for the alias registry surface.

Invariants:
    - Schemas validate at system boundary (commands in, responses out)
    - Domain types from core/ used for enum fields

Design Decisions:
    - Separate from models: schemas are API contracts, models are persistence
"""
