"""Core Layer — the timecard state machine: pure domain logic, no IO, no async, no DB.

Invariants:
    - No module in core/ imports from services/, api/, infrastructure/, models/ or db/
    - Timestamps come from an injected clock, never from callers

Design Decisions:
    - Functional core separated from imperative shell (load -> operate -> persist)
"""
