"""ORM Models — SQLAlchemy declarative models for persisted aggregates.

Invariants:
    - All models inherit from Base (db/base.py)
    - One row per timecard aggregate; lines and transitions live inside it

Design Decisions:
    - Models imported here so Base.metadata is complete before create_all / autogenerate
"""

from timesheets.models.timecard import TimecardRecord  # noqa: F401
