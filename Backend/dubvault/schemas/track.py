from pydantic import AliasChoices, BaseModel, ConfigDict, Field
from typing import List, Optional
from uuid import UUID
from datetime import datetime

from dubvault.models.track import TrackStatus

# Clients read the derived score as "avgRating"
_AVG_RATING_ALIASES = AliasChoices("avg_rating", "avgRating")

class TrackBase(BaseModel):
    title: str
    artist: str
    genre: Optional[str] = None
    file_path: str
    artwork_path: Optional[str] = None

class TrackCreate(BaseModel):
    # Blank title/artist fall back to defaults in catalog.build_track
    title: Optional[str] = None
    artist: Optional[str] = None
    genre: Optional[str] = None
    file_path: str = Field(..., min_length=1)
    artwork_path: Optional[str] = None

class TrackStatusUpdate(BaseModel):
    status: TrackStatus

class TrackResponse(TrackBase):
    id: int
    status: TrackStatus
    owner_id: Optional[UUID] = None
    expires_on: Optional[datetime] = None

    model_config = ConfigDict(from_attributes=True)

class RatedTrackResponse(TrackResponse):
    """A track with its derived average score attached."""
    avg_rating: Optional[float] = Field(None, validation_alias=_AVG_RATING_ALIASES, serialization_alias="avgRating")

# Minimal shape for the top-rated listing
class TopRatedTrack(BaseModel):
    id: int
    title: str
    artist: str
    avg_rating: Optional[float] = Field(None, validation_alias=_AVG_RATING_ALIASES, serialization_alias="avgRating")

    model_config = ConfigDict(from_attributes=True)

class TrackPage(BaseModel):
    """One page of the track listing; total counts every match across pages."""
    total: int
    page: int
    limit: int
    tracks: List[RatedTrackResponse]
