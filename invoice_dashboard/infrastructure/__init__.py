"""Infrastructure Layer — database, route cache, navigation and logging adapters.

Invariants:
    - Infrastructure implements the Protocols in core/repository_protocols.py
    - All SQLAlchemy exceptions leave this layer as core DatabaseError

Design Decisions:
    - Thin adapters over SQLAlchemy/Starlette: services never touch raw drivers
"""
