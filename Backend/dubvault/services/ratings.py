"""
Average rating computation.

Works on already-loaded rating records (anything with ``track_id`` and
``value`` attributes). Track ids are compared by their string form, so a
rating stored with ``"42"`` still counts towards track ``42``.
"""
from collections import defaultdict
from decimal import Decimal, ROUND_HALF_UP
from statistics import fmean
from typing import Dict, Iterable, List, Optional, Sequence

from dubvault.schemas.track import RatedTrackResponse, TopRatedTrack

DEFAULT_TOP_RATED_LIMIT = 5

_ONE_DECIMAL = Decimal("0.1")


def _rounded_mean(values: Sequence[int]) -> Optional[float]:
    if not values:
        return None
    # Exact binary value of the mean, so 1.15 (stored as 1.1499..) rounds down
    mean = Decimal(fmean(values))
    return float(mean.quantize(_ONE_DECIMAL, rounding=ROUND_HALF_UP))


def _group_values(ratings: Iterable) -> Dict[str, List[int]]:
    grouped: Dict[str, List[int]] = defaultdict(list)
    for rating in ratings:
        grouped[str(rating.track_id)].append(rating.value)
    return grouped


def average_rating(track_id, ratings: Iterable) -> Optional[float]:
    """Mean score for one track to one decimal place, or None when nobody has rated it."""
    key = str(track_id)
    return _rounded_mean([r.value for r in ratings if str(r.track_id) == key])


def attach_average_ratings(tracks: Iterable, ratings: Iterable) -> List[RatedTrackResponse]:
    """Pair every track with its average rating, keeping the order of ``tracks``."""
    grouped = _group_values(ratings)
    rated_tracks = []
    for track in tracks:
        rated = RatedTrackResponse.model_validate(track, from_attributes=True)
        rated.avg_rating = _rounded_mean(grouped.get(str(track.id), []))
        rated_tracks.append(rated)
    return rated_tracks


def top_rated(rated_tracks: Iterable[RatedTrackResponse], limit: int = DEFAULT_TOP_RATED_LIMIT) -> List[TopRatedTrack]:
    """
    Highest average first; unrated tracks count as 0 and so land last.
    The sort is stable, so ties keep their original order.
    """
    ranked = sorted(rated_tracks, key=lambda t: t.avg_rating or 0, reverse=True)
    return [
        TopRatedTrack(id=t.id, title=t.title, artist=t.artist, avg_rating=t.avg_rating)
        for t in ranked[:limit]
    ]
