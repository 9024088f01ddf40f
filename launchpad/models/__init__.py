"""ORM Models — SQLAlchemy declarative models for users and trips.

Invariants:
    - All models inherit from Base (db/base.py)
    - users and trips are independent tables (no foreign key between them)

Design Decisions:
    - One file per entity for locality
"""

from launchpad.models.user import User  # noqa: F401
from launchpad.models.trip import Trip  # noqa: F401
