import asyncio
import os
import sys
from dotenv import load_dotenv

# Make 'dubvault' importable when the project is not pip-installed.
backend_dir = os.path.abspath(os.path.join(os.path.dirname(__file__), '..', 'Backend'))
sys.path.append(backend_dir)

# DATABASE_URL and SECRET_KEY come from the project-root .env
project_root = os.path.dirname(backend_dir)
load_dotenv(os.path.join(project_root, ".env"))

from dubvault.services.database import engine, Base

# Every model must be imported so its table is registered on Base.metadata.
from dubvault.models.user import User
from dubvault.models.track import Track
from dubvault.models.rating import Rating


async def create_all_tables():
    """Create the users, tracks and ratings tables if they do not exist yet."""
    print("Connecting to the database to create tables...")
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    print("Tables created: " + ", ".join(sorted(Base.metadata.tables)))
    await engine.dispose()

if __name__ == "__main__":
    asyncio.run(create_all_tables())
