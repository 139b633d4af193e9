import logging
import uuid
from datetime import datetime, timezone
from typing import List, Optional

from fastapi import Depends
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.future import select
from sqlalchemy.dialects.postgresql import insert as pg_insert
from sqlalchemy.dialects.sqlite import insert as sqlite_insert

from dubvault.models.track import Track, TrackStatus
from dubvault.models.rating import Rating
from dubvault.services.catalog import ensure_transition
from dubvault.services.database import get_db

logger = logging.getLogger(__name__)

# Dialects with INSERT .. ON CONFLICT DO UPDATE
_UPSERT_INSERTS = {
    "postgresql": pg_insert,
    "sqlite": sqlite_insert,
}


class TrackRepository:
    """Storage access for tracks and ratings."""

    def __init__(self, db_session: AsyncSession):
        self.db = db_session

    async def list_tracks(self) -> List[Track]:
        """All tracks in submission order."""
        result = await self.db.execute(select(Track).order_by(Track.id))
        return list(result.scalars().all())

    async def get_track(self, track_id: int) -> Optional[Track]:
        result = await self.db.execute(select(Track).where(Track.id == track_id))
        return result.scalar_one_or_none()

    async def add_track(self, track: Track) -> Track:
        self.db.add(track)
        await self.db.commit()
        await self.db.refresh(track)
        logger.info(f"Stored track {track.id} '{track.title}' with status {track.status}")
        return track

    async def set_status(self, track: Track, status: TrackStatus) -> Track:
        new_status = ensure_transition(track.status, status)
        track.status = new_status.value
        await self.db.commit()
        logger.info(f"Track {track.id} moderated to {new_status.value}")
        return track

    async def list_ratings(self, track_id: Optional[int] = None) -> List[Rating]:
        query = select(Rating).order_by(Rating.id)
        if track_id is not None:
            query = query.where(Rating.track_id == track_id)
        result = await self.db.execute(query)
        return list(result.scalars().all())

    async def get_rating(self, track_id: int, rater_id: uuid.UUID) -> Optional[Rating]:
        result = await self.db.execute(
            select(Rating)
            .where(Rating.track_id == track_id, Rating.user_id == rater_id)
            .execution_options(populate_existing=True)
        )
        return result.scalar_one_or_none()

    async def upsert_rating(self, track_id: int, rater_id: uuid.UUID, value: int) -> Rating:
        """
        Store a rater's score for a track, replacing any earlier score.
        Backed by the (track_id, user_id) unique constraint, so two concurrent
        writes for the same pair still leave a single row.
        """
        now = datetime.now(timezone.utc)
        dialect = self.db.get_bind().dialect.name
        insert_fn = _UPSERT_INSERTS.get(dialect)

        if insert_fn is not None:
            stmt = insert_fn(Rating).values(
                track_id=track_id,
                user_id=rater_id,
                value=value,
                created_at=now,
                updated_at=now,
            )
            stmt = stmt.on_conflict_do_update(
                index_elements=[Rating.track_id, Rating.user_id],
                set_={"value": stmt.excluded["value"], "updated_at": now},
            )
            await self.db.execute(stmt)
            await self.db.commit()
            rating = await self.get_rating(track_id, rater_id)
        else:
            rating = await self.get_rating(track_id, rater_id)
            if rating is None:
                try:
                    async with self.db.begin_nested():
                        self.db.add(Rating(
                            track_id=track_id,
                            user_id=rater_id,
                            value=value,
                            created_at=now,
                            updated_at=now,
                        ))
                except IntegrityError:
                    # Another request stored this pair between our read and insert
                    logger.info(f"Concurrent first rating for track {track_id} by {rater_id}, updating instead")
                    rating = await self.get_rating(track_id, rater_id)
            if rating is not None:
                rating.value = value
                rating.updated_at = now
            await self.db.commit()
            rating = await self.get_rating(track_id, rater_id)

        logger.info(f"User {rater_id} rated track {track_id}: {value}")
        return rating


async def get_track_repository(db: AsyncSession = Depends(get_db)) -> TrackRepository:
    return TrackRepository(db)
