"""Group class domain models for FitBuddy."""

from __future__ import annotations

from datetime import datetime
from decimal import Decimal

from django.conf import settings  # type: ignore
from django.db import models  # type: ignore
from django.utils import timezone  # type: ignore
from django.utils.translation import gettext_lazy as _  # type: ignore


class FitnessClass(models.Model):
    """Class template created by a trainer (e.g. "Morning Yoga")."""

    class Difficulty(models.TextChoices):
        BEGINNER = "beginner", _("Beginner")
        INTERMEDIATE = "intermediate", _("Intermediate")
        ADVANCED = "advanced", _("Advanced")

    trainer = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name="fitness_classes",
    )
    class_name = models.CharField(max_length=100)
    description = models.TextField(blank=True)
    class_type = models.CharField(
        max_length=50,
        blank=True,
        help_text=_("Free-form type such as yoga, spin, HIIT or pilates."),
    )
    difficulty_level = models.CharField(max_length=20, choices=Difficulty.choices)
    max_capacity = models.PositiveIntegerField()
    duration_minutes = models.PositiveIntegerField()
    price = models.DecimalField(
        max_digits=10,
        decimal_places=2,
        default=Decimal("0.00"),
        help_text=_("0 means the class is included in the membership."),
    )
    location = models.CharField(max_length=255, blank=True)
    is_active = models.BooleanField(default=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = "fitness_classes"
        verbose_name = _("Fitness class")
        verbose_name_plural = _("Fitness classes")
        ordering = ["-created_at"]
        constraints = [
            models.CheckConstraint(
                condition=models.Q(max_capacity__gt=0),
                name="fitness_class_positive_capacity",
            ),
        ]
        indexes = [
            models.Index(fields=["trainer", "is_active"], name="fitclass_trainer_active_idx"),
        ]

    def __str__(self) -> str:
        return f"{self.class_name} ({self.max_capacity} seats)"


class ClassSchedule(models.Model):
    """A concrete dated occurrence of a fitness class."""

    class Status(models.TextChoices):
        SCHEDULED = "scheduled", _("Scheduled")
        IN_PROGRESS = "in_progress", _("In progress")
        COMPLETED = "completed", _("Completed")
        CANCELLED = "cancelled", _("Cancelled")

    fitness_class = models.ForeignKey(
        FitnessClass,
        on_delete=models.CASCADE,
        related_name="schedules",
        db_column="class_id",
    )
    scheduled_date = models.DateField()
    start_time = models.TimeField()
    end_time = models.TimeField()
    # Running count of confirmed bookings, only changed by the booking ledger.
    current_capacity = models.PositiveIntegerField(default=0)
    status = models.CharField(
        max_length=20,
        choices=Status.choices,
        default=Status.SCHEDULED,
    )
    cancellation_reason = models.TextField(blank=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = "class_schedules"
        verbose_name = _("Class schedule")
        verbose_name_plural = _("Class schedules")
        ordering = ["scheduled_date", "start_time"]
        constraints = [
            models.CheckConstraint(
                condition=models.Q(end_time__gt=models.F("start_time")),
                name="class_schedule_valid_times",
            ),
        ]
        indexes = [
            models.Index(fields=["scheduled_date"], name="schedule_date_idx"),
        ]

    def __str__(self) -> str:
        return f"{self.fitness_class_id} on {self.scheduled_date} {self.start_time}"

    @property
    def starts_at(self) -> datetime:
        """Start of the class as an aware datetime in the project time zone."""
        start = datetime.combine(self.scheduled_date, self.start_time)
        return timezone.make_aware(start, timezone.get_default_timezone())


class ClassBooking(models.Model):
    """A member's seat in one class schedule."""

    class Status(models.TextChoices):
        CONFIRMED = "confirmed", _("Confirmed")
        ATTENDED = "attended", _("Attended")
        CANCELLED = "cancelled", _("Cancelled")
        NO_SHOW = "no_show", _("No show")

    schedule = models.ForeignKey(
        ClassSchedule,
        on_delete=models.CASCADE,
        related_name="bookings",
    )
    user = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name="class_bookings",
    )
    booking_status = models.CharField(
        max_length=20,
        choices=Status.choices,
        default=Status.CONFIRMED,
    )
    booked_at = models.DateTimeField(auto_now_add=True)
    cancelled_at = models.DateTimeField(null=True, blank=True)
    cancellation_reason = models.TextField(blank=True)
    attended = models.BooleanField(default=False)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = "class_bookings"
        verbose_name = _("Class booking")
        verbose_name_plural = _("Class bookings")
        ordering = ["booked_at"]
        constraints = [
            # One row per member and schedule, whatever its status.
            models.UniqueConstraint(
                fields=["schedule", "user"],
                name="class_booking_unique_member",
            ),
        ]
        indexes = [
            models.Index(fields=["user", "booking_status"], name="booking_user_status_idx"),
        ]

    def __str__(self) -> str:
        return f"Booking #{self.pk} ({self.booking_status}) for schedule {self.schedule_id}"
