"""Backfill exercises.standards_key from exercise names / aliases.

Usage: python scripts/backfill_standards_keys.py [--dry-run]
"""

import asyncio
import os
import sys

# Add parent directory to path so we can import strength_analytics modules
sys.path.append(os.path.join(os.path.dirname(__file__), ".."))

from sqlalchemy import select

from strength_analytics.db.session import async_session_maker, engine
from strength_analytics.models.exercise import Exercise
from strength_analytics.services.strength_standards import resolve_standards_key


async def main(dry_run: bool = False):
    async with async_session_maker() as session:
        result = await session.execute(select(Exercise).where(Exercise.standards_key.is_(None)))
        exercises = result.scalars().all()
        print(f"{len(exercises)} exercise(s) without a standards key")

        matched = 0
        for exercise in exercises:
            key = resolve_standards_key(exercise.name)
            if key is None:
                continue
            matched += 1
            print(f"  {exercise.name!r} -> {key}")
            exercise.standards_key = key

        if dry_run:
            await session.rollback()
            print(f"Dry run: {matched} would be updated.")
        else:
            await session.commit()
            print(f"Updated {matched} exercise(s).")

    await engine.dispose()


if __name__ == "__main__":
    asyncio.run(main(dry_run="--dry-run" in sys.argv))
