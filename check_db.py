import asyncio
import os
import sys

from sqlalchemy import text

sys.path.append(os.getcwd())

from strength_analytics.db.session import async_session_maker, engine


async def check_data():
    async with async_session_maker() as session:
        tables = ["profiles", "follows", "exercises", "workouts", "workout_sets"]
        print(f"Checking tables: {tables}")
        for table in tables:
            try:
                result = await session.execute(text(f"SELECT count(*) FROM {table}"))
                print(f"Table '{table}' row count: {result.scalar()}")
            except Exception as e:
                print(f"Error querying {table}: {e}")
                await session.rollback()

        try:
            result = await session.execute(
                text("SELECT count(*) FROM exercises WHERE standards_key IS NULL")
            )
            print(f"Exercises without a standards key: {result.scalar()}")
        except Exception as e:
            print(f"Error checking standards keys: {e}")
    await engine.dispose()


if __name__ == "__main__":
    asyncio.run(check_data())
