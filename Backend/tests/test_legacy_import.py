import json
from datetime import datetime

import pytest
from sqlalchemy import select

from dubvault.models.user import User
from dubvault.services.legacy_import import (
    import_legacy_data,
    legacy_user_id,
    parse_ratings,
    parse_tracks,
    read_json_file,
)
from dubvault.services.ratings import attach_average_ratings
from dubvault.services.repository import TrackRepository
from dubvault.services.visibility import visible_tracks
from dubvault.core.security import verify_password

LEGACY_TRACKS = [
    {
        "id": 1700000000001,
        "title": "Sample Dub 1",
        "artist": "Underground Artist",
        "filePath": "sample1.mp3",
        "artworkPath": "sample_artwork1.jpg",
        "expiresOn": "2024-01-14T10:00:00.000Z",
    },
    {
        "id": 1700000000002,
        "title": "",
        "filePath": "uploads/rush.wav",
        "artworkPath": None,
        "expiresOn": "2024-05-14T10:00:00.000Z",
        "status": "pending",
    },
    {"id": 1700000000003, "title": "No file"},
]

LEGACY_RATINGS = [
    {"trackId": 1700000000001, "userId": "u1", "vote": 4},
    {"trackId": "1700000000001", "userId": "u1", "vote": 8},
    {"trackId": "1700000000001", "userId": "u2", "rating": 10},
    {"trackId": "1700000000001", "userId": "u3", "vote": "loud"},
    {"trackId": "1700000000001", "userId": "u4", "rating": 42},
    {"trackId": 999, "userId": "u1", "vote": 5},
]


def test_parse_tracks_normalizes_ids_and_skips_broken_records():
    tracks = parse_tracks(LEGACY_TRACKS)
    assert [t.id for t in tracks] == ["1700000000001", "1700000000002"]
    assert tracks[0].file_path == "sample1.mp3"
    assert tracks[0].expires_on.year == 2024
    assert tracks[1].status == "pending"


def test_parse_ratings_accepts_both_score_names_and_keeps_last_write():
    ratings, skipped = parse_ratings(LEGACY_RATINGS)
    assert skipped == 2
    assert [(r.track_id, r.user_id, r.value) for r in ratings] == [
        ("1700000000001", "u1", 8),
        ("1700000000001", "u2", 10),
        ("999", "u1", 5),
    ]


def test_read_json_file_tolerates_missing_and_corrupt_files(tmp_path):
    assert read_json_file(str(tmp_path / "missing.json")) == []

    corrupt = tmp_path / "tracks.json"
    corrupt.write_text("{not json", encoding="utf-8")
    assert read_json_file(str(corrupt)) == []

    good = tmp_path / "ratings.json"
    good.write_text(json.dumps(LEGACY_RATINGS), encoding="utf-8")
    assert len(read_json_file(str(good))) == len(LEGACY_RATINGS)


@pytest.mark.asyncio
async def test_import_legacy_data(db_session):
    summary = await import_legacy_data(db_session, LEGACY_TRACKS, LEGACY_RATINGS)

    assert summary.tracks_imported == 2
    assert summary.ratings_imported == 2
    # two invalid votes plus one rating for an unknown track
    assert summary.ratings_skipped == 3

    repo = TrackRepository(db_session)
    tracks = await repo.list_tracks()
    assert [t.title for t in tracks] == ["Sample Dub 1", "Untitled"]
    assert tracks[1].artist == "Unknown Artist"
    assert tracks[0].expires_on.replace(tzinfo=None) == datetime(2024, 1, 14, 10, 0)

    # Tracks from before moderation existed are published; explicit statuses are kept
    assert [t.title for t in visible_tracks(tracks)] == ["Sample Dub 1"]

    rated = attach_average_ratings(tracks, await repo.list_ratings())
    assert rated[0].avg_rating == 9.0
    assert rated[1].avg_rating is None


@pytest.mark.asyncio
async def test_legacy_raters_get_accounts_that_cannot_log_in(db_session):
    await import_legacy_data(db_session, LEGACY_TRACKS[:1], LEGACY_RATINGS[:3])
    # Importing twice reuses the same placeholder accounts
    await import_legacy_data(db_session, LEGACY_TRACKS[:1], LEGACY_RATINGS[:3])

    users = (await db_session.execute(select(User).order_by(User.username))).scalars().all()
    assert [u.username for u in users] == ["legacy-u1", "legacy-u2"]
    assert users[0].id == legacy_user_id("u1")
    assert not verify_password("anything", users[0].password_hash)
