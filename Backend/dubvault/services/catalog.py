import calendar
import logging
from datetime import datetime, timezone
from typing import Iterable, List, Optional, Sequence, TypeVar

from dubvault.core.config import settings
from dubvault.core.exceptions import InvalidTransitionError
from dubvault.models.track import Track, TrackStatus

logger = logging.getLogger(__name__)

DEFAULT_TITLE = "Untitled"
DEFAULT_ARTIST = "Unknown Artist"

# Moderation is one step: pending -> approved | rejected, then frozen.
ALLOWED_TRANSITIONS = {
    TrackStatus.PENDING: {TrackStatus.APPROVED, TrackStatus.REJECTED},
    TrackStatus.APPROVED: set(),
    TrackStatus.REJECTED: set(),
}

T = TypeVar("T")


def add_months(moment: datetime, months: int) -> datetime:
    """Shift by calendar months, clamping the day (Aug 31 + 6 months -> Feb 28/29)."""
    month_index = moment.month - 1 + months
    year = moment.year + month_index // 12
    month = month_index % 12 + 1
    day = min(moment.day, calendar.monthrange(year, month)[1])
    return moment.replace(year=year, month=month, day=day)


def build_track(
    file_path: str,
    title: Optional[str] = None,
    artist: Optional[str] = None,
    genre: Optional[str] = None,
    artwork_path: Optional[str] = None,
    owner_id=None,
    status: TrackStatus = TrackStatus.PENDING,
    now: Optional[datetime] = None,
    retention_months: Optional[int] = None,
) -> Track:
    """Create a Track with every default applied in one place."""
    now = now or datetime.now(timezone.utc)
    if retention_months is None:
        retention_months = settings.TRACK_RETENTION_MONTHS
    return Track(
        title=(title or "").strip() or DEFAULT_TITLE,
        artist=(artist or "").strip() or DEFAULT_ARTIST,
        genre=(genre or "").strip() or None,
        file_path=file_path,
        artwork_path=artwork_path or None,
        expires_on=add_months(now, retention_months),
        status=TrackStatus(status).value,
        owner_id=owner_id,
        created_at=now,
    )


def ensure_transition(current: str, target: str) -> TrackStatus:
    current_status = TrackStatus(current)
    target_status = TrackStatus(target)
    if target_status not in ALLOWED_TRANSITIONS[current_status]:
        raise InvalidTransitionError(current_status.value, target_status.value)
    return target_status


def filter_tracks(
    rated_tracks: Iterable,
    genre: Optional[str] = None,
    artist: Optional[str] = None,
    min_rating: Optional[float] = None,
    status: Optional[TrackStatus] = None,
) -> List:
    tracks = list(rated_tracks)
    if status is not None:
        tracks = [t for t in tracks if TrackStatus(t.status) is TrackStatus(status)]
    if genre:
        tracks = [t for t in tracks if (t.genre or "").lower() == genre.lower()]
    if artist:
        tracks = [t for t in tracks if artist.lower() in (t.artist or "").lower()]
    if min_rating is not None:
        tracks = [t for t in tracks if t.avg_rating is not None and t.avg_rating >= min_rating]
    return tracks


def search_tracks(tracks: Iterable, query: str) -> List:
    """Case-insensitive substring match on title or id."""
    needle = query.lower()
    return [
        t for t in tracks
        if needle in (t.title or "").lower() or needle in str(t.id).lower()
    ]


def paginate(items: Sequence[T], page: int = 1, limit: int = 50) -> List[T]:
    start = (max(page, 1) - 1) * limit
    return list(items[start:start + limit])
