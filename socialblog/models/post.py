from sqlalchemy import Boolean, Column, DateTime, ForeignKey, Integer, String, Text
from sqlalchemy.orm import relationship
from socialblog.db.database import Base
from datetime import datetime, UTC
from enum import Enum as PyEnum

class Visibility(str, PyEnum):
    """Post visibility tier"""
    PUBLIC = "public"              # Visible to everyone
    PRIVATE = "private"            # Only visible to the author
    REQUEST_ONLY = "request_only"  # Stored, read as non-public

    @property
    def flags(self) -> tuple[bool, bool]:
        """(is_public, is_request_only) column pair for this tier"""
        return self is Visibility.PUBLIC, self is Visibility.REQUEST_ONLY

    @classmethod
    def from_flags(cls, is_public: bool, is_request_only: bool) -> "Visibility":
        if is_public:
            return cls.PUBLIC
        if is_request_only:
            return cls.REQUEST_ONLY
        return cls.PRIVATE

class Post(Base):
    """Post model"""
    __tablename__ = "posts"

    id = Column(Integer, primary_key=True, autoincrement=True)
    user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    title = Column(String(200), nullable=False)
    content = Column(Text, nullable=False)
    is_public = Column(Boolean, nullable=False, default=True)
    is_request_only = Column(Boolean, nullable=False, default=False)
    created_at = Column(DateTime(timezone=True), nullable=False, default=lambda: datetime.now(UTC))
    updated_at = Column(DateTime(timezone=True), nullable=False, default=lambda: datetime.now(UTC), onupdate=lambda: datetime.now(UTC))

    author = relationship("User", lazy="joined")
    comments = relationship("Comment", cascade="all, delete-orphan", passive_deletes=True)
    post_tags = relationship("PostTag", cascade="all, delete-orphan", passive_deletes=True)

    @property
    def visibility(self) -> Visibility:
        return Visibility.from_flags(self.is_public, self.is_request_only)

    @visibility.setter
    def visibility(self, value: Visibility) -> None:
        self.is_public, self.is_request_only = Visibility(value).flags
