"""Core Layer — pure domain logic, no IO, no async, no DB.

Invariants:
    - No module in core/ imports from services/, api/, infrastructure/, or db/
    - All functions are pure; the clock is the only implicit input (and is injectable)

Design Decisions:
    - Functional core separated from imperative shell: validation and normalization
      are testable without a database or an HTTP request
"""
