"""Trip ORM — one booking linking a user to a launch.

Invariants:
    - (launch_id, user_id) is the composite primary key: at most one trip per pair
    - No surrogate id is exposed to callers

Design Decisions:
    - launch_id references the external launch catalogue, so it carries no FK
"""

from sqlalchemy import Integer
from sqlalchemy.orm import Mapped, mapped_column

from launchpad.db.base import Base


class Trip(Base):
    __tablename__ = "trips"

    launch_id: Mapped[int] = mapped_column(
        Integer, primary_key=True, autoincrement=False,
    )
    user_id: Mapped[int] = mapped_column(
        Integer, primary_key=True, autoincrement=False,
    )

    def __repr__(self) -> str:
        return f"Trip(user_id={self.user_id!r}, launch_id={self.launch_id!r})"
