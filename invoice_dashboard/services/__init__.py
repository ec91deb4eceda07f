"""Services Layer — orchestrates core logic around infrastructure collaborators.

Invariants:
    - Services receive collaborators via constructor injection

Design Decisions:
    - Impureim sandwich: pure validate/normalize in core, IO at the edges here
"""
