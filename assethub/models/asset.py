from sqlalchemy import Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from assethub.db.base import Base, TimestampMixin


class Asset(TimestampMixin, Base):
    __tablename__ = "assets"
    # SQLite otherwise reuses the highest rowid after a delete
    __table_args__ = {"sqlite_autoincrement": True}

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    name: Mapped[str | None] = mapped_column(String(255), nullable=True)
    name_short: Mapped[str | None] = mapped_column("nameshort", String(100), nullable=True)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    domain: Mapped[str | None] = mapped_column(String(100), nullable=True)
    last_modified_by: Mapped[str | None] = mapped_column("lastmodifiedby", String(255), nullable=True)
    status: Mapped[str | None] = mapped_column(String(50), nullable=True)
