"""Catalogue services for fitness classes and their schedules.

Write paths here never touch ``current_capacity``; seat accounting lives
in :mod:`apps.classes.ledger`.
"""

from __future__ import annotations

import logging
from datetime import date, time
from typing import Any, Optional

from django.contrib.auth import get_user_model  # type: ignore
from django.db import transaction  # type: ignore
from django.db.models import Count, F, Q, QuerySet  # type: ignore
from django.utils import timezone  # type: ignore

from .models import ClassBooking, ClassSchedule, FitnessClass

logger = logging.getLogger(__name__)

User = get_user_model()

ACTIVE_BOOKING_STATUSES = (
    ClassBooking.Status.CONFIRMED,
    ClassBooking.Status.ATTENDED,
)


class ScheduleValidationError(Exception):
    """Raised when a schedule cannot be created with the given times."""


@transaction.atomic
def create_class(trainer, **fields: Any) -> FitnessClass:
    """Create an active class template owned by ``trainer``."""
    fitness_class = FitnessClass.objects.create(trainer=trainer, is_active=True, **fields)
    logger.info("Class %s created by trainer %s", fitness_class.pk, trainer.pk)
    return fitness_class


@transaction.atomic
def create_schedule(
    fitness_class: FitnessClass,
    scheduled_date: date,
    start_time: time,
    end_time: time,
) -> ClassSchedule:
    """Open a new dated occurrence of ``fitness_class`` with no seats taken."""
    if end_time <= start_time:
        raise ScheduleValidationError("End time must be after start time.")

    schedule = ClassSchedule.objects.create(
        fitness_class=fitness_class,
        scheduled_date=scheduled_date,
        start_time=start_time,
        end_time=end_time,
        current_capacity=0,
        status=ClassSchedule.Status.SCHEDULED,
    )
    logger.info(
        "Schedule %s opened for class %s on %s %s",
        schedule.pk,
        fitness_class.pk,
        scheduled_date,
        start_time,
    )
    return schedule


def deactivate_class(fitness_class: FitnessClass) -> None:
    """Soft delete: hide the class from listings but keep its history."""
    fitness_class.is_active = False
    fitness_class.save(update_fields=["is_active", "updated_at"])
    logger.info("Class %s deactivated", fitness_class.pk)


def available_schedules() -> QuerySet[ClassSchedule]:
    """Upcoming bookable occurrences of active classes with free spot counts."""
    return (
        ClassSchedule.objects.select_related("fitness_class", "fitness_class__trainer")
        .filter(
            fitness_class__is_active=True,
            status=ClassSchedule.Status.SCHEDULED,
            scheduled_date__gte=timezone.localdate(),
        )
        .annotate(spots_available=F("fitness_class__max_capacity") - F("current_capacity"))
        .order_by("scheduled_date", "start_time")
    )


def member_bookings(user, status: Optional[str] = None) -> QuerySet[ClassBooking]:
    """Bookings of ``user``; without ``status`` only confirmed and attended ones."""
    qs = ClassBooking.objects.select_related(
        "schedule",
        "schedule__fitness_class",
        "schedule__fitness_class__trainer",
    ).filter(user=user)

    if status:
        qs = qs.filter(booking_status=status)
    else:
        qs = qs.filter(booking_status__in=ACTIVE_BOOKING_STATUSES)

    return qs.order_by("schedule__scheduled_date", "schedule__start_time")


def schedule_roster(schedule_id: int, trainer=None) -> QuerySet[ClassBooking]:
    """
    Members holding a seat in a schedule.

    With ``trainer`` only schedules of classes taught by that trainer match;
    ``None`` is the platform staff view over every class.
    """
    qs = ClassBooking.objects.select_related("user").filter(
        schedule_id=schedule_id,
        booking_status__in=ACTIVE_BOOKING_STATUSES,
    )
    if trainer is not None:
        qs = qs.filter(schedule__fitness_class__trainer=trainer)
    return qs.order_by("booked_at")


def trainer_classes(trainer=None) -> QuerySet[FitnessClass]:
    """Active classes of ``trainer`` (all trainers for ``None``) with schedule and booking counts."""
    qs = FitnessClass.objects.filter(is_active=True)
    if trainer is not None:
        qs = qs.filter(trainer=trainer)
    return (
        qs.annotate(
            schedule_count=Count("schedules", distinct=True),
            total_bookings=Count(
                "schedules__bookings",
                filter=Q(schedules__bookings__booking_status=ClassBooking.Status.CONFIRMED),
                distinct=True,
            ),
        )
        .order_by("-created_at")
    )


def class_schedules(fitness_class: FitnessClass) -> QuerySet[ClassSchedule]:
    """All occurrences of a class, newest first, with confirmed booking counts."""
    return (
        fitness_class.schedules.annotate(
            confirmed_bookings=Count(
                "bookings",
                filter=Q(bookings__booking_status=ClassBooking.Status.CONFIRMED),
            )
        )
        .order_by("-scheduled_date", "-start_time")
    )


def filter_options() -> dict[str, Any]:
    """Values the class browser offers as filters."""
    class_types = list(
        FitnessClass.objects.filter(is_active=True)
        .exclude(class_type="")
        .order_by("class_type")
        .values_list("class_type", flat=True)
        .distinct()
    )
    trainers = list(
        User.objects.filter(
            role=User.RoleChoices.TRAINER,
            fitness_classes__is_active=True,
        )
        .distinct()
        .order_by("full_name")
        .values("id", "full_name", "profile_picture_url")
    )
    return {
        "class_types": class_types,
        "trainers": trainers,
        "difficulty_levels": [choice for choice, _label in FitnessClass.Difficulty.choices],
    }
