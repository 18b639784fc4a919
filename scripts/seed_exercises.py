import asyncio
import os
import sys

# Add parent directory to path so we can import app modules
sys.path.append(os.path.join(os.path.dirname(__file__), ".."))

from sqlalchemy import select

from app.core.seed_data import CARDIO_GROUPS, DEFAULT_EXERCISES
from app.db import Base, async_session_maker, engine
from app.models import Exercise


async def main():
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    async with async_session_maker() as session:
        existing = set((await session.execute(select(Exercise.id))).scalars().all())
        added = 0
        for group, exercises in DEFAULT_EXERCISES.items():
            for slug, name in exercises:
                if slug in existing:
                    continue
                session.add(
                    Exercise(
                        id=slug,
                        name=name,
                        muscle_group=group,
                        category="cardio" if group in CARDIO_GROUPS else "strength",
                        target_muscles=[group.lower()],
                    )
                )
                added += 1
        await session.commit()
        print(f"Seeded {added} exercises ({len(existing)} already present).")

    await engine.dispose()


if __name__ == "__main__":
    asyncio.run(main())
