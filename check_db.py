import asyncio
import os
import sys

from sqlalchemy import text

# Run from the repository root
sys.path.append(os.getcwd())

from app.db import async_session_maker, engine

TABLES = ["exercises", "routines", "workout_history"]


async def check_data():
    async with async_session_maker() as session:
        print(f"Checking tables: {TABLES}")
        for table in TABLES:
            try:
                result = await session.execute(text(f"SELECT count(*) FROM {table}"))
                print(f"Table '{table}' row count: {result.scalar()}")
            except Exception as e:
                print(f"Error querying {table}: {e}")
    await engine.dispose()


if __name__ == "__main__":
    asyncio.run(check_data())
