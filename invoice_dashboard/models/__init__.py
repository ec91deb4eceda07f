"""ORM Models — SQLAlchemy declarative models for dashboard entities.

Invariants:
    - All models inherit from Base (db/base.py)

Design Decisions:
    - All models imported here so Base.metadata is populated before create_all
      or alembic autogenerate runs
"""

from invoice_dashboard.models.invoice import Invoice  # noqa: F401
