import enum
from sqlalchemy import Column, String, Integer, DateTime, ForeignKey, Uuid

from dubvault.services.database import Base
from dubvault.models.user import _utcnow

class TrackStatus(str, enum.Enum):
    PENDING = "pending"
    APPROVED = "approved"
    REJECTED = "rejected"

class Track(Base):
    __tablename__ = "tracks"

    id = Column(Integer, primary_key=True, index=True)
    title = Column(String, nullable=False)
    artist = Column(String, nullable=False)
    genre = Column(String, nullable=True)
    file_path = Column(String, nullable=False)
    artwork_path = Column(String, nullable=True)

    # Stored for display only; nothing filters on it.
    expires_on = Column(DateTime(timezone=True), nullable=True)
    status = Column(String, default=TrackStatus.PENDING.value, nullable=False, index=True)

    # The uploading user. Legacy imports may have no owner.
    owner_id = Column(Uuid, ForeignKey("users.id"), nullable=True, index=True)
    created_at = Column(DateTime(timezone=True), default=_utcnow, nullable=False)
