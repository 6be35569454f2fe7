from datetime import datetime, UTC
from sqlalchemy import CheckConstraint, DateTime, ForeignKey, Integer
from sqlalchemy.orm import Mapped, mapped_column
from socialblog.db.database import Base

class Subscription(Base):
    """Directed follow edge, follower -> followed"""
    __tablename__ = "subscriptions"
    __table_args__ = (
        CheckConstraint("follower_id <> followed_id", name="ck_subscriptions_no_self_follow"),
    )

    follower_id: Mapped[int] = mapped_column(Integer, ForeignKey("users.id", ondelete="CASCADE"), primary_key=True)
    followed_id: Mapped[int] = mapped_column(Integer, ForeignKey("users.id", ondelete="CASCADE"), primary_key=True, index=True)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=lambda: datetime.now(UTC))
