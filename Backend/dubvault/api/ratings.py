from typing import List, Optional
from fastapi import APIRouter, Depends

from dubvault.core.exceptions import NotFoundException
from dubvault.core.security import get_current_user, get_current_user_optional
from dubvault.models.user import User
from dubvault.schemas.rating import RatingCreate, RatingResponse
from dubvault.services.repository import TrackRepository, get_track_repository
from dubvault.services.visibility import is_visible, visible_tracks

router = APIRouter()

@router.post("/ratings", response_model=RatingResponse)
async def rate_track(
    rating_data: RatingCreate,
    repo: TrackRepository = Depends(get_track_repository),
    current_user: User = Depends(get_current_user),
):
    """Rate a track from 1 to 10. Rating the same track again replaces the earlier score."""
    track = await repo.get_track(rating_data.track_id)
    if track is None or not is_visible(track, current_user.id):
        raise NotFoundException("Track", str(rating_data.track_id))
    return await repo.upsert_rating(track.id, current_user.id, rating_data.value)

@router.get("/ratings", response_model=List[RatingResponse])
async def list_ratings(
    track_id: Optional[int] = None,
    repo: TrackRepository = Depends(get_track_repository),
    current_user: Optional[User] = Depends(get_current_user_optional),
):
    """Ratings on tracks the caller can see."""
    viewer_id = current_user.id if current_user else None
    if track_id is not None:
        track = await repo.get_track(track_id)
        # Same 404 as GET /tracks/{id} for hidden tracks
        if track is None or not is_visible(track, viewer_id):
            raise NotFoundException("Track", str(track_id))
        return await repo.list_ratings(track_id)

    visible_ids = {t.id for t in visible_tracks(await repo.list_tracks(), viewer_id)}
    return [r for r in await repo.list_ratings() if r.track_id in visible_ids]
