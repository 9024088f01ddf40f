"""User ORM — a registered traveller, created lazily on first reference.

Invariants:
    - id is a store-assigned integer surrogate key
    - email is unique (enforced by the database, not the application)
    - Rows are never updated or deleted by the data-access core
"""

from sqlalchemy import Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from launchpad.db.base import Base


class User(Base):
    __tablename__ = "users"

    id: Mapped[int] = mapped_column(
        Integer, primary_key=True, autoincrement=True,
    )
    email: Mapped[str] = mapped_column(
        String(255), unique=True, nullable=False,
    )
    token: Mapped[str | None] = mapped_column(
        String(255), nullable=True,
    )

    def __repr__(self) -> str:
        return f"User(id={self.id!r}, email={self.email!r})"
