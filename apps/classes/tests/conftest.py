from __future__ import annotations

from datetime import time, timedelta

import pytest
from django.utils import timezone

from apps.classes.models import ClassSchedule, FitnessClass
from apps.users.models import User


@pytest.fixture
def trainer(db):
    return User.objects.create_user(
        email="trainer@example.com",
        password="TrainerPass123",
        full_name="Taylor Trainer",
        role=User.RoleChoices.TRAINER,
    )


@pytest.fixture
def member(db):
    return User.objects.create_user(
        email="member@example.com",
        password="MemberPass123",
        full_name="Morgan Member",
    )


@pytest.fixture
def make_class(trainer):
    def _make(**overrides) -> FitnessClass:
        fields = {
            "trainer": trainer,
            "class_name": "Core Blast",
            "class_type": "hiit",
            "difficulty_level": FitnessClass.Difficulty.INTERMEDIATE,
            "max_capacity": 4,
            "duration_minutes": 30,
        }
        fields.update(overrides)
        return FitnessClass.objects.create(**fields)

    return _make


@pytest.fixture
def make_schedule():
    def _make(fitness_class: FitnessClass, days_ahead: int = 1, start: time = time(12, 0)) -> ClassSchedule:
        return ClassSchedule.objects.create(
            fitness_class=fitness_class,
            scheduled_date=timezone.localdate() + timedelta(days=days_ahead),
            start_time=start,
            end_time=time(start.hour + 1, start.minute),
        )

    return _make
