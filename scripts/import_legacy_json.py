"""
Load tracks.json and ratings.json from the old Express app into the database.

Usage:
    python scripts/import_legacy_json.py path/to/tracks.json path/to/ratings.json
"""
import argparse
import asyncio
import logging
import os
import sys
from dotenv import load_dotenv

backend_dir = os.path.abspath(os.path.join(os.path.dirname(__file__), '..', 'Backend'))
sys.path.append(backend_dir)
load_dotenv(os.path.join(os.path.dirname(backend_dir), ".env"))

from dubvault.services.database import engine, SessionLocal
from dubvault.services.legacy_import import import_legacy_data, read_json_file

logging.basicConfig(level=logging.INFO)


async def run_import(tracks_path: str, ratings_path: str):
    async with SessionLocal() as session:
        summary = await import_legacy_data(
            session,
            read_json_file(tracks_path),
            read_json_file(ratings_path),
        )
        await session.commit()
    await engine.dispose()
    print(
        f"Imported {summary.tracks_imported} tracks and {summary.ratings_imported} ratings "
        f"({summary.ratings_skipped} ratings skipped)."
    )


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="Import DubVault flat-file JSON data")
    parser.add_argument("tracks", help="path to tracks.json")
    parser.add_argument("ratings", help="path to ratings.json")
    args = parser.parse_args()
    asyncio.run(run_import(args.tracks, args.ratings))
