from sqlalchemy import Integer, String
from sqlalchemy.orm import Mapped, mapped_column
from socialblog.db.database import Base

class Tag(Base):
    """Tag model, created on first use and never deleted"""
    __tablename__ = "tags"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(50), unique=True)  # tag name must be unique
