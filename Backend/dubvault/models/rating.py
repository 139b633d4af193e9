import uuid
import datetime
from sqlalchemy import Integer, ForeignKey, DateTime, UniqueConstraint, Uuid
from sqlalchemy.orm import Mapped, mapped_column

from dubvault.services.database import Base
from dubvault.models.user import _utcnow

class Rating(Base):
    __tablename__ = "ratings"
    # One rating per listener per track; re-rating updates this row.
    __table_args__ = (
        UniqueConstraint("track_id", "user_id", name="uq_ratings_track_user"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    track_id: Mapped[int] = mapped_column(ForeignKey("tracks.id"), index=True)
    user_id: Mapped[uuid.UUID] = mapped_column(Uuid, ForeignKey("users.id"), index=True)
    value: Mapped[int] = mapped_column(Integer)

    created_at: Mapped[datetime.datetime] = mapped_column(DateTime(timezone=True), default=_utcnow)
    updated_at: Mapped[datetime.datetime] = mapped_column(DateTime(timezone=True), default=_utcnow, onupdate=_utcnow)
