from pydantic import AliasChoices, BaseModel, ConfigDict, Field
from uuid import UUID
from datetime import datetime

RATING_MIN = 1
RATING_MAX = 10

class RatingCreate(BaseModel):
    track_id: int = Field(validation_alias=AliasChoices("track_id", "trackId"))
    # Older clients send the score as "rating" or "vote"
    value: int = Field(
        ...,
        ge=RATING_MIN,
        le=RATING_MAX,
        validation_alias=AliasChoices("value", "rating", "vote"),
    )


class RatingResponse(BaseModel):
    id: int
    track_id: int
    user_id: UUID
    value: int
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)
