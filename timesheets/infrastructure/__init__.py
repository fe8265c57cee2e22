"""Infrastructure Layer — persistence adapters and cross-cutting concerns.

Invariants:
    - Storage failures surface as DatabaseError (core/errors.py)
    - Repository implementations satisfy core/repository_protocols.py

Design Decisions:
    - Adapters live here, the contracts they implement live in core/
"""
