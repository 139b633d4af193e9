import sys
import os
import asyncio
from dotenv import load_dotenv

backend_dir = os.path.abspath(os.path.join(os.path.dirname(__file__), '..', 'Backend'))
sys.path.append(backend_dir)
load_dotenv(os.path.join(os.path.dirname(backend_dir), ".env"))

from dubvault.models.user import User
from dubvault.models.track import TrackStatus
from dubvault.core.security import get_password_hash
from dubvault.services.catalog import build_track
from dubvault.services.database import engine, SessionLocal
from dubvault.services.repository import TrackRepository

async def create_demo_data():
    async with SessionLocal() as session:
        # Create demo users
        admin = User(username="admin", password_hash=get_password_hash("change-me-now"), is_admin=True)
        producer = User(username="local_producer", password_hash=get_password_hash("demo-password"))
        listener = User(username="dub_listener", password_hash=get_password_hash("demo-password"))
        session.add_all([admin, producer, listener])
        await session.commit()

        repo = TrackRepository(session)

        # Same sample tracks the old flat-file store created on first run
        sample_dub_1 = await repo.add_track(build_track(
            title="Sample Dub 1",
            artist="Underground Artist",
            genre="Dub",
            file_path="sample1.mp3",
            artwork_path="sample_artwork1.jpg",
            owner_id=producer.id,
            status=TrackStatus.APPROVED,
        ))
        sample_dub_2 = await repo.add_track(build_track(
            title="Sample Dub 2",
            artist="Local Producer",
            genre="Dub",
            file_path="sample2.mp3",
            artwork_path="sample_artwork2.jpg",
            owner_id=producer.id,
            status=TrackStatus.APPROVED,
        ))
        # Awaiting moderation; only its owner sees it in listings
        await repo.add_track(build_track(
            title="Work In Progress",
            artist="Local Producer",
            file_path="wip.mp3",
            owner_id=producer.id,
        ))

        await repo.upsert_rating(sample_dub_1.id, listener.id, 8)
        await repo.upsert_rating(sample_dub_1.id, admin.id, 10)
        await repo.upsert_rating(sample_dub_2.id, listener.id, 6)

        print("Demo data created successfully!")

    await engine.dispose()

if __name__ == "__main__":
    asyncio.run(create_demo_data())
