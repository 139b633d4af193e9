from types import SimpleNamespace

from dubvault.core.security import create_access_token
from dubvault.models.track import TrackStatus
from dubvault.models.user import User

TEST_PASSWORD = "secret-password"


def auth_headers(user: User) -> dict[str, str]:
    return {"Authorization": f"Bearer {create_access_token(str(user.id))}"}


def track_record(track_id, status=TrackStatus.APPROVED, owner_id=None, title=None, artist="Some Artist", genre=None):
    """An in-memory track shaped like the ORM model."""
    return SimpleNamespace(
        id=track_id,
        title=title or f"Track {track_id}",
        artist=artist,
        genre=genre,
        file_path=f"track_{track_id}.mp3",
        artwork_path=None,
        expires_on=None,
        status=TrackStatus(status).value,
        owner_id=owner_id,
    )


def rating_record(track_id, value, user_id="listener"):
    return SimpleNamespace(track_id=track_id, user_id=user_id, value=value)
