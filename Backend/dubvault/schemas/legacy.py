from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator
from typing import Optional
from datetime import datetime

from dubvault.models.track import TrackStatus
from dubvault.schemas.rating import RATING_MIN, RATING_MAX

# Records from the old tracks.json / ratings.json files. Field names and id
# types drifted between app versions, so every field accepts its known spellings.

def _as_str(value):
    return str(value) if value is not None else value

class LegacyTrack(BaseModel):
    id: str
    title: Optional[str] = None
    artist: Optional[str] = None
    genre: Optional[str] = None
    file_path: str = Field(validation_alias=AliasChoices("filePath", "file_path", "FileName"))
    artwork_path: Optional[str] = Field(None, validation_alias=AliasChoices("artworkPath", "artwork_path", "ArtworkName"))
    expires_on: Optional[datetime] = Field(None, validation_alias=AliasChoices("expiresOn", "expires_on", "ExpiresOn"))
    status: Optional[TrackStatus] = None

    model_config = ConfigDict(extra="ignore")

    @field_validator("id", mode="before")
    @classmethod
    def normalize_id(cls, value):
        return _as_str(value)

class LegacyRating(BaseModel):
    track_id: str = Field(validation_alias=AliasChoices("trackId", "track_id"))
    user_id: str = Field(validation_alias=AliasChoices("userId", "user_id"))
    value: int = Field(ge=RATING_MIN, le=RATING_MAX, validation_alias=AliasChoices("vote", "rating", "value"))

    model_config = ConfigDict(extra="ignore")

    @field_validator("track_id", "user_id", mode="before")
    @classmethod
    def normalize_ids(cls, value):
        return _as_str(value)
