"""Services Layer — one unit of work per command: load, operate, persist.

Invariants:
    - Services never decide legality themselves (the aggregate does)
    - Unknown timecard ids raise ResourceNotFoundError before any operation runs

Design Decisions:
    - Services depend on the TimecardRepository Protocol, not on SQLAlchemy
"""
