"""
Unit tests for model construction from ORM-style objects.
"""

from datetime import datetime, timezone
from types import SimpleNamespace
from uuid import uuid4

from pawplan.models.enums import DayOfWeek, TaskCategory
from pawplan.models.pet import Pet
from pawplan.models.training_task import TrainingTask


class TestFromAttributes:
    """Tests for attribute-based validation."""

    def test_pet_from_attributes(self):
        row = SimpleNamespace(
            id=uuid4(), user_id="test_user", name="Bello", created_at=datetime.now(timezone.utc)
        )

        pet = Pet.model_validate(row)

        assert Pet.model_config["from_attributes"] is True
        assert pet.name == "Bello"

    def test_training_task_from_attributes(self, pet_id):
        row = SimpleNamespace(
            id=uuid4(),
            pet_id=pet_id,
            user_id="test_user",
            title="Sit",
            category="tricks",
            description="",
            time="09:00",
            duration_minutes=15,
            day_of_week="Sa",
            completed=False,
            order=2,
            created_at=datetime.now(timezone.utc),
        )

        task = TrainingTask.model_validate(row)

        assert TrainingTask.model_config["from_attributes"] is True
        assert task.category == TaskCategory.TRICKS
        assert task.day_of_week == DayOfWeek.SATURDAY
