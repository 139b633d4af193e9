"""
Import of the flat-file data (tracks.json, ratings.json) written by the
original Express app.

Tracks go through catalog.build_track so the same default rules apply as
for new submissions. Old versions had no moderation step, so a track without
a status is imported as approved. Ratings are deduplicated per
(track, rater), the last record winning, and records that fail validation
are skipped with a warning.
"""
import json
import logging
import uuid
from typing import Dict, Iterable, List, Tuple

from pydantic import BaseModel, ValidationError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.future import select

from dubvault.models.track import TrackStatus
from dubvault.models.user import User
from dubvault.schemas.legacy import LegacyRating, LegacyTrack
from dubvault.services.catalog import build_track
from dubvault.services.repository import TrackRepository

logger = logging.getLogger(__name__)

LEGACY_USER_NAMESPACE = uuid.UUID("9b7c2f1e-5d1a-4c8e-a3f4-0d2b6e8c1a57")
# Not a valid bcrypt hash, so these accounts can never log in.
UNUSABLE_PASSWORD = "!legacy"


class ImportSummary(BaseModel):
    tracks_imported: int = 0
    ratings_imported: int = 0
    ratings_skipped: int = 0


def read_json_file(path: str) -> list:
    """Missing or unreadable files count as empty, like the old dataStore did."""
    try:
        with open(path, "r", encoding="utf-8") as f:
            data = json.load(f)
    except FileNotFoundError:
        logger.warning(f"{path} not found, treating as empty")
        return []
    except json.JSONDecodeError as e:
        logger.warning(f"{path} is not valid JSON ({e}), treating as empty")
        return []
    return data if isinstance(data, list) else []


def parse_tracks(records: Iterable[dict]) -> List[LegacyTrack]:
    tracks = []
    for record in records:
        try:
            tracks.append(LegacyTrack.model_validate(record))
        except ValidationError as e:
            legacy_id = record.get('id') if isinstance(record, dict) else record
            logger.warning(f"Skipping legacy track {legacy_id!r}: {e.error_count()} invalid field(s)")
    return tracks


def parse_ratings(records: Iterable[dict]) -> Tuple[List[LegacyRating], int]:
    """Returns the deduplicated ratings and how many records were dropped as invalid."""
    latest: Dict[Tuple[str, str], LegacyRating] = {}
    skipped = 0
    for record in records:
        try:
            rating = LegacyRating.model_validate(record)
        except ValidationError:
            logger.warning(f"Skipping invalid legacy rating: {record!r}")
            skipped += 1
            continue
        key = (rating.track_id, rating.user_id)
        # Re-insert so the surviving entry sits where its last write was
        latest.pop(key, None)
        latest[key] = rating
    return list(latest.values()), skipped


def legacy_user_id(legacy_id: str) -> uuid.UUID:
    return uuid.uuid5(LEGACY_USER_NAMESPACE, legacy_id)


async def _ensure_legacy_user(db: AsyncSession, legacy_id: str) -> uuid.UUID:
    user_id = legacy_user_id(legacy_id)
    existing = await db.get(User, user_id)
    if existing is None:
        db.add(User(id=user_id, username=f"legacy-{legacy_id}", password_hash=UNUSABLE_PASSWORD))
        await db.flush()
    return user_id


async def import_legacy_data(
    db: AsyncSession,
    track_records: Iterable[dict],
    rating_records: Iterable[dict],
) -> ImportSummary:
    repo = TrackRepository(db)
    summary = ImportSummary()
    id_map: Dict[str, int] = {}

    for legacy in parse_tracks(track_records):
        track = build_track(
            file_path=legacy.file_path,
            title=legacy.title,
            artist=legacy.artist,
            genre=legacy.genre,
            artwork_path=legacy.artwork_path,
            status=legacy.status or TrackStatus.APPROVED,
        )
        if legacy.expires_on is not None:
            track.expires_on = legacy.expires_on
        await repo.add_track(track)
        id_map[legacy.id] = track.id
        summary.tracks_imported += 1

    ratings, summary.ratings_skipped = parse_ratings(rating_records)
    for rating in ratings:
        track_id = id_map.get(rating.track_id)
        if track_id is None:
            # Rating for a track that no longer exists
            summary.ratings_skipped += 1
            continue
        rater_id = await _ensure_legacy_user(db, rating.user_id)
        await repo.upsert_rating(track_id, rater_id, rating.value)
        summary.ratings_imported += 1

    logger.info(
        f"Legacy import finished: {summary.tracks_imported} tracks, "
        f"{summary.ratings_imported} ratings, {summary.ratings_skipped} ratings skipped"
    )
    return summary
