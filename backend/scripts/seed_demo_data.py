"""
Seed a demo pet and weekly training plan.

Usage:
    cd backend
    python -m scripts.seed_demo_data                    # Dry-run (shows what will be created)
    python -m scripts.seed_demo_data --apply            # Actually insert data
    python -m scripts.seed_demo_data --apply --user me  # Seed for another user id
"""
from __future__ import annotations

import argparse
import asyncio
import logging
import sys
from pathlib import Path

# Suppress noisy SQLAlchemy logs during seed
logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)
logging.getLogger("sqlalchemy.engine.Engine").setLevel(logging.WARNING)

# Ensure backend root is on sys.path
sys.path.insert(0, str(Path(__file__).resolve().parents[1]))

from pawplan.core.config import get_settings
from pawplan.core.logger import setup_logger
from pawplan.infrastructure.local.database import init_db
from pawplan.infrastructure.local.pet_repository import SqlitePetRepository
from pawplan.infrastructure.local.training_task_repository import SqliteTrainingTaskRepository
from pawplan.models.enums import DayOfWeek, TaskCategory
from pawplan.models.pet import PetCreate
from pawplan.models.training_task import TaskFormInput
from pawplan.services.task_store import TaskStore

logger = setup_logger("seed_demo_data")

# ---------------------------------------------------------------------------
# Constants
# ---------------------------------------------------------------------------
PET_NAME = "Bello"

DEMO_TASKS: list[tuple[DayOfWeek, str, TaskCategory, str, int, str]] = [
    (DayOfWeek.MONDAY, "Sit and stay", TaskCategory.OBEDIENCE, "08:00", 15, "Five reps, release word"),
    (DayOfWeek.MONDAY, "Recall in the park", TaskCategory.RECALL, "17:30", 20, ""),
    (DayOfWeek.TUESDAY, "Meet the neighbours' dog", TaskCategory.SOCIALIZATION, "18:00", 30, ""),
    (DayOfWeek.WEDNESDAY, "Paw / high five", TaskCategory.TRICKS, "12:00", 10, ""),
    (DayOfWeek.THURSDAY, "Tunnel run", TaskCategory.AGILITY, "16:00", 25, "Start with a short tunnel"),
    (DayOfWeek.FRIDAY, "Loose-leash walk", TaskCategory.OBEDIENCE, "07:30", 30, ""),
    (DayOfWeek.SATURDAY, "Long line recall", TaskCategory.RECALL, "10:00", 45, ""),
    (DayOfWeek.SUNDAY, "Rest day sniff walk", TaskCategory.OTHER, "11:00", 40, ""),
]


async def seed(user_id: str, apply: bool) -> None:
    settings = get_settings()
    logger.info(f"Database: {settings.DATABASE_URL}")
    logger.info(f"Pet '{PET_NAME}' for user '{user_id}' with {len(DEMO_TASKS)} tasks")
    for day, title, category, time, minutes, _ in DEMO_TASKS:
        logger.info(f"  {day.value} {time} {title} [{category.value}, {minutes} min]")

    if not apply:
        logger.info("Dry-run only. Re-run with --apply to write.")
        return

    await init_db()
    pet = await SqlitePetRepository().create(user_id, PetCreate(name=PET_NAME))

    store = TaskStore(SqliteTrainingTaskRepository(), owner_id=user_id)
    await store.load(pet.id)
    for day, title, category, time, minutes, description in DEMO_TASKS:
        await store.create(
            TaskFormInput(
                title=title,
                category=category.value,
                description=description,
                time=time,
                duration=minutes,
                day_of_week=day.value,
            )
        )
    logger.info(f"Seeded pet {pet.id} with {len(store.tasks)} tasks")


def main() -> None:
    parser = argparse.ArgumentParser(description="Seed a demo training plan")
    parser.add_argument("--apply", action="store_true", help="Write to the database")
    parser.add_argument("--user", default="dev_user", help="Owner user id")
    args = parser.parse_args()
    asyncio.run(seed(args.user, args.apply))


if __name__ == "__main__":
    main()
