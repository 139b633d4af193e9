import logging
from typing import List, Optional
from fastapi import APIRouter, Depends, Query, status

from dubvault.core.config import settings
from dubvault.core.exceptions import BadRequestError, NotFoundException
from dubvault.core.security import get_current_admin, get_current_user, get_current_user_optional
from dubvault.models.user import User
from dubvault.models.track import TrackStatus
from dubvault.schemas.track import RatedTrackResponse, TopRatedTrack, TrackCreate, TrackPage, TrackStatusUpdate
from dubvault.services.catalog import build_track, filter_tracks, paginate, search_tracks
from dubvault.services.ratings import attach_average_ratings, top_rated
from dubvault.services.repository import TrackRepository, get_track_repository
from dubvault.services.visibility import is_visible, visible_tracks

logger = logging.getLogger(__name__)

router = APIRouter()


def _viewer_id(current_user: Optional[User]):
    return current_user.id if current_user else None


# Static routes first
@router.get("/tracks/top-rated", response_model=List[TopRatedTrack])
async def list_top_rated_tracks(
    repo: TrackRepository = Depends(get_track_repository),
    current_user: Optional[User] = Depends(get_current_user_optional),
):
    """Best average ratings among the tracks this viewer can see."""
    tracks = visible_tracks(await repo.list_tracks(), _viewer_id(current_user))
    rated = attach_average_ratings(tracks, await repo.list_ratings())
    return top_rated(rated, limit=settings.TOP_RATED_LIMIT)


@router.get("/tracks/search", response_model=List[RatedTrackResponse])
async def search(
    q: str = "",
    repo: TrackRepository = Depends(get_track_repository),
    current_user: Optional[User] = Depends(get_current_user_optional),
):
    if not q.strip():
        raise BadRequestError("Missing search query ?q=")
    tracks = visible_tracks(await repo.list_tracks(), _viewer_id(current_user))
    matches = search_tracks(tracks, q.strip())
    return attach_average_ratings(matches, await repo.list_ratings())


@router.get("/tracks", response_model=TrackPage)
async def list_tracks(
    genre: Optional[str] = None,
    artist: Optional[str] = None,
    min_rating: Optional[float] = Query(None, ge=0),
    status: Optional[TrackStatus] = None,
    page: int = Query(1, ge=1),
    limit: int = Query(10, ge=1, le=200),
    repo: TrackRepository = Depends(get_track_repository),
    current_user: Optional[User] = Depends(get_current_user_optional),
):
    """
    Tracks visible to the caller with their average rating.

    Anonymous callers see approved tracks only; signed-in users also see
    their own pending and rejected submissions. An admin filtering by
    status sees every track in that status, e.g. the moderation queue
    with ?status=pending.
    """
    tracks = await repo.list_tracks()
    admin_queue = status is not None and current_user is not None and current_user.is_admin
    if not admin_queue:
        tracks = visible_tracks(tracks, _viewer_id(current_user))
    rated = attach_average_ratings(tracks, await repo.list_ratings())
    rated = filter_tracks(rated, genre=genre, artist=artist, min_rating=min_rating, status=status)
    return TrackPage(total=len(rated), page=page, limit=limit, tracks=paginate(rated, page=page, limit=limit))


@router.post("/tracks", response_model=RatedTrackResponse, status_code=status.HTTP_201_CREATED)
async def submit_track(
    track_data: TrackCreate,
    repo: TrackRepository = Depends(get_track_repository),
    current_user: User = Depends(get_current_user),
):
    track = build_track(owner_id=current_user.id, **track_data.model_dump())
    await repo.add_track(track)
    logger.info(f"User {current_user.username} submitted track {track.id} for moderation")
    return attach_average_ratings([track], [])[0]


# Dynamic routes after static ones
@router.get("/tracks/{track_id}", response_model=RatedTrackResponse)
async def get_track(
    track_id: int,
    repo: TrackRepository = Depends(get_track_repository),
    current_user: Optional[User] = Depends(get_current_user_optional),
):
    track = await repo.get_track(track_id)
    # Hidden tracks answer 404 too, so their existence is not revealed
    if track is None or not is_visible(track, _viewer_id(current_user)):
        raise NotFoundException("Track", str(track_id))
    return attach_average_ratings([track], await repo.list_ratings(track_id))[0]


@router.patch("/tracks/{track_id}/status", response_model=RatedTrackResponse)
async def moderate_track(
    track_id: int,
    status_data: TrackStatusUpdate,
    repo: TrackRepository = Depends(get_track_repository),
    admin: User = Depends(get_current_admin),
):
    track = await repo.get_track(track_id)
    if track is None:
        raise NotFoundException("Track", str(track_id))
    await repo.set_status(track, status_data.status)
    logger.info(f"Admin {admin.username} set track {track_id} to {track.status}")
    return attach_average_ratings([track], await repo.list_ratings(track_id))[0]
