"""Seat accounting for class schedules.

``BookingLedger`` is the only code allowed to touch
``ClassSchedule.current_capacity``. Each operation runs in a single
database transaction: the schedule row is locked with
``SELECT ... FOR UPDATE`` where the backend supports it, and the counter
is moved with a conditional ``UPDATE`` so two bookers can never both take
the last seat, even without row locks.
"""

from __future__ import annotations

import logging
from datetime import datetime
from typing import Callable

from django.db import DatabaseError, IntegrityError, transaction  # type: ignore
from django.db.models import F  # type: ignore
from django.utils import timezone  # type: ignore

from .exceptions import (
    AlreadyBooked,
    BookingNotFound,
    ClassFull,
    LedgerError,
    PastClass,
    ScheduleNotFound,
    StoreError,
)
from .models import ClassBooking, ClassSchedule

logger = logging.getLogger(__name__)


def _lock_queryset_if_possible(queryset, *, of: tuple[str, ...] = ()):
    """Apply select_for_update when inside transaction.atomic() and supported."""

    conn = transaction.get_connection()
    if not conn.in_atomic_block or not conn.features.has_select_for_update:
        return queryset
    if of and conn.features.has_select_for_update_of:
        return queryset.select_for_update(of=of)
    return queryset.select_for_update()


class BookingLedger:
    """Books and cancels class seats atomically."""

    def __init__(self, clock: Callable[[], datetime] = timezone.now):
        self.clock = clock

    def book(self, schedule_id: int, user_id: int) -> ClassBooking:
        """
        Reserve a seat in ``schedule_id`` for ``user_id``.

        Raises ScheduleNotFound, ClassFull, AlreadyBooked or StoreError.
        The checks run in that order, so a member who already holds a seat
        in a full class gets ClassFull.
        """
        try:
            with transaction.atomic():
                schedule = self._lock_schedule(schedule_id)
                max_capacity = schedule.fitness_class.max_capacity

                if schedule.current_capacity >= max_capacity:
                    raise ClassFull()

                # Any earlier row counts, including cancelled ones.
                if ClassBooking.objects.filter(schedule_id=schedule.pk, user_id=user_id).exists():
                    raise AlreadyBooked()

                booking = self._insert_booking(schedule, user_id)
                self._reserve_seat(schedule, max_capacity)
        except LedgerError as exc:
            logger.info(
                "Booking rejected for schedule %s, user %s: %s",
                schedule_id,
                user_id,
                exc.kind,
            )
            raise
        except DatabaseError as exc:
            logger.exception(
                "Store failure while booking schedule %s for user %s", schedule_id, user_id
            )
            raise StoreError() from exc

        logger.info(
            "Booking %s created for schedule %s, user %s (%s/%s seats taken)",
            booking.pk,
            schedule_id,
            user_id,
            schedule.current_capacity,
            max_capacity,
        )
        return booking

    def cancel(self, booking_id: int, user_id: int, reason: str = "") -> ClassBooking:
        """
        Cancel a confirmed booking owned by ``user_id`` and free its seat.

        Raises BookingNotFound, PastClass or StoreError.
        """
        try:
            with transaction.atomic():
                booking = self._lock_booking(booking_id, user_id)
                now = self.clock()

                if booking.schedule.starts_at < now:
                    raise PastClass()

                booking.booking_status = ClassBooking.Status.CANCELLED
                booking.cancelled_at = now
                booking.cancellation_reason = reason
                booking.save(
                    update_fields=[
                        "booking_status",
                        "cancelled_at",
                        "cancellation_reason",
                        "updated_at",
                    ]
                )
                self._release_seat(booking.schedule)
        except LedgerError as exc:
            logger.info(
                "Cancellation rejected for booking %s, user %s: %s",
                booking_id,
                user_id,
                exc.kind,
            )
            raise
        except DatabaseError as exc:
            logger.exception(
                "Store failure while cancelling booking %s for user %s", booking_id, user_id
            )
            raise StoreError() from exc

        logger.info(
            "Booking %s cancelled for schedule %s, user %s",
            booking.pk,
            booking.schedule_id,
            user_id,
        )
        return booking

    # --- helpers -------------------------------------------------------------

    def _lock_schedule(self, schedule_id: int) -> ClassSchedule:
        queryset = ClassSchedule.objects.select_related("fitness_class").filter(
            pk=schedule_id,
            status=ClassSchedule.Status.SCHEDULED,
        )
        schedule = _lock_queryset_if_possible(queryset, of=("self",)).first()
        if schedule is None:
            raise ScheduleNotFound()
        return schedule

    def _lock_booking(self, booking_id: int, user_id: int) -> ClassBooking:
        queryset = ClassBooking.objects.select_related("schedule").filter(
            pk=booking_id,
            user_id=user_id,
            booking_status=ClassBooking.Status.CONFIRMED,
        )
        booking = _lock_queryset_if_possible(queryset, of=("self", "schedule")).first()
        if booking is None:
            raise BookingNotFound()
        return booking

    def _insert_booking(self, schedule: ClassSchedule, user_id: int) -> ClassBooking:
        try:
            with transaction.atomic():
                return ClassBooking.objects.create(
                    schedule=schedule,
                    user_id=user_id,
                    booking_status=ClassBooking.Status.CONFIRMED,
                )
        except IntegrityError:
            # A concurrent booker for the same member won the unique constraint.
            if ClassBooking.objects.filter(schedule_id=schedule.pk, user_id=user_id).exists():
                raise AlreadyBooked()
            raise

    def _reserve_seat(self, schedule: ClassSchedule, max_capacity: int) -> None:
        updated = ClassSchedule.objects.filter(
            pk=schedule.pk,
            current_capacity__lt=max_capacity,
        ).update(current_capacity=F("current_capacity") + 1)
        if not updated:
            raise ClassFull()
        schedule.refresh_from_db(fields=["current_capacity"])

    def _release_seat(self, schedule: ClassSchedule) -> None:
        updated = ClassSchedule.objects.filter(
            pk=schedule.pk,
            current_capacity__gt=0,
        ).update(current_capacity=F("current_capacity") - 1)
        if not updated:
            logger.warning("Schedule %s already at zero capacity on cancellation", schedule.pk)
        schedule.refresh_from_db(fields=["current_capacity"])


ledger = BookingLedger()
