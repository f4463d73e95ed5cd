"""Integration tests for the class booking API."""

from __future__ import annotations

from datetime import time, timedelta
from unittest import mock

from django.db import DatabaseError
from django.urls import reverse
from django.utils import timezone
from rest_framework import status
from rest_framework.test import APITestCase

from apps.classes.ledger import BookingLedger, ledger
from apps.classes.models import ClassBooking, ClassSchedule, FitnessClass
from apps.users.models import User


class ClassAPITestMixin:
    def _create_users(self) -> None:
        self.trainer = User.objects.create_user(
            email="coach@example.com",
            password="CoachPass123",
            full_name="Casey Coach",
            role=User.RoleChoices.TRAINER,
        )
        self.other_trainer = User.objects.create_user(
            email="rival@example.com",
            password="RivalPass123",
            full_name="Riley Rival",
            role=User.RoleChoices.TRAINER,
        )
        self.member = User.objects.create_user(
            email="member@example.com",
            password="MemberPass123",
            full_name="Morgan Member",
        )

    def _create_class(self, **overrides) -> FitnessClass:
        fields = {
            "trainer": self.trainer,
            "class_name": "Morning Yoga",
            "class_type": "yoga",
            "difficulty_level": FitnessClass.Difficulty.BEGINNER,
            "max_capacity": 2,
            "duration_minutes": 60,
            "location": "Studio A",
        }
        fields.update(overrides)
        return FitnessClass.objects.create(**fields)

    def _create_schedule(self, fitness_class: FitnessClass, days_ahead: int = 1) -> ClassSchedule:
        return ClassSchedule.objects.create(
            fitness_class=fitness_class,
            scheduled_date=timezone.localdate() + timedelta(days=days_ahead),
            start_time=time(9, 0),
            end_time=time(10, 0),
        )


class BookingAPITests(ClassAPITestMixin, APITestCase):
    """Covers booking, cancellation and the error status mapping."""

    def setUp(self) -> None:
        self._create_users()
        self.fitness_class = self._create_class()
        self.schedule = self._create_schedule(self.fitness_class)
        self.book_url = reverse("class-book")
        self.client.force_authenticate(self.member)

    def _cancel_url(self, booking_id: int) -> str:
        return reverse("class-booking-detail", args=[booking_id])

    def test_member_can_book(self) -> None:
        response = self.client.post(self.book_url, {"schedule_id": self.schedule.pk}, format="json")

        self.assertEqual(response.status_code, status.HTTP_201_CREATED, response.data)
        self.assertTrue(response.data["success"])
        booking = response.data["booking"]
        self.assertEqual(booking["schedule_id"], self.schedule.pk)
        self.assertEqual(booking["user_id"], self.member.pk)
        self.assertEqual(booking["booking_status"], ClassBooking.Status.CONFIRMED)
        self.assertIsNone(booking["cancelled_at"])
        self.schedule.refresh_from_db()
        self.assertEqual(self.schedule.current_capacity, 1)

    def test_schedule_id_is_required(self) -> None:
        response = self.client.post(self.book_url, {}, format="json")

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertIn("schedule_id", response.data)

    def test_trainer_cannot_book(self) -> None:
        self.client.force_authenticate(self.trainer)

        response = self.client.post(self.book_url, {"schedule_id": self.schedule.pk}, format="json")

        self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN)
        self.assertFalse(ClassBooking.objects.exists())

    def test_anonymous_cannot_book(self) -> None:
        self.client.force_authenticate(None)

        response = self.client.post(self.book_url, {"schedule_id": self.schedule.pk}, format="json")

        self.assertEqual(response.status_code, status.HTTP_401_UNAUTHORIZED)

    def test_unknown_schedule_is_404(self) -> None:
        response = self.client.post(self.book_url, {"schedule_id": self.schedule.pk + 50}, format="json")

        self.assertEqual(response.status_code, status.HTTP_404_NOT_FOUND)
        self.assertEqual(
            response.data,
            {
                "success": False,
                "kind": "not_found",
                "message": "Class schedule not found or not available",
            },
        )

    def test_full_class_is_400(self) -> None:
        ClassSchedule.objects.filter(pk=self.schedule.pk).update(current_capacity=2)

        response = self.client.post(self.book_url, {"schedule_id": self.schedule.pk}, format="json")

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(response.data["kind"], "full")
        self.assertEqual(response.data["message"], "Class is full")

    def test_double_booking_is_400(self) -> None:
        self.client.post(self.book_url, {"schedule_id": self.schedule.pk}, format="json")

        response = self.client.post(self.book_url, {"schedule_id": self.schedule.pk}, format="json")

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(response.data["kind"], "already_booked")
        self.schedule.refresh_from_db()
        self.assertEqual(self.schedule.current_capacity, 1)

    def test_store_failure_is_500(self) -> None:
        with mock.patch.object(BookingLedger, "_reserve_seat", side_effect=DatabaseError("gone")):
            response = self.client.post(
                self.book_url, {"schedule_id": self.schedule.pk}, format="json"
            )

        self.assertEqual(response.status_code, status.HTTP_500_INTERNAL_SERVER_ERROR)
        self.assertEqual(response.data["kind"], "store_error")
        self.assertFalse(response.data["success"])
        self.assertFalse(ClassBooking.objects.exists())

    def test_member_can_cancel(self) -> None:
        booking = ledger.book(self.schedule.pk, self.member.pk)

        response = self.client.delete(
            self._cancel_url(booking.pk), {"reason": "Travelling"}, format="json"
        )

        self.assertEqual(response.status_code, status.HTTP_200_OK, response.data)
        self.assertEqual(response.data["booking"]["booking_status"], ClassBooking.Status.CANCELLED)
        self.assertIsNotNone(response.data["booking"]["cancelled_at"])
        booking.refresh_from_db()
        self.assertEqual(booking.cancellation_reason, "Travelling")
        self.schedule.refresh_from_db()
        self.assertEqual(self.schedule.current_capacity, 0)

    def test_second_cancel_is_404(self) -> None:
        booking = ledger.book(self.schedule.pk, self.member.pk)
        self.client.delete(self._cancel_url(booking.pk))

        response = self.client.delete(self._cancel_url(booking.pk))

        self.assertEqual(response.status_code, status.HTTP_404_NOT_FOUND)
        self.assertEqual(response.data["kind"], "not_found")

    def test_cancel_past_class_is_400(self) -> None:
        past_schedule = self._create_schedule(self.fitness_class, days_ahead=-1)
        booking = ledger.book(past_schedule.pk, self.member.pk)

        response = self.client.delete(self._cancel_url(booking.pk))

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(response.data["kind"], "past_class")
        past_schedule.refresh_from_db()
        self.assertEqual(past_schedule.current_capacity, 1)

    def test_invalid_booking_id(self) -> None:
        response = self.client.delete("/api/v1/classes/bookings/abc/")

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)

    def test_my_bookings_lists_active_bookings(self) -> None:
        other_schedule = self._create_schedule(self.fitness_class, days_ahead=3)
        ledger.book(self.schedule.pk, self.member.pk)
        cancelled = ledger.book(other_schedule.pk, self.member.pk)
        ledger.cancel(cancelled.pk, self.member.pk)

        response = self.client.get(reverse("class-my-bookings"))

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data["count"], 1)
        entry = response.data["bookings"][0]
        self.assertEqual(entry["schedule_id"], self.schedule.pk)
        self.assertEqual(entry["class_name"], "Morning Yoga")
        self.assertEqual(entry["trainer_name"], "Casey Coach")

        response = self.client.get(reverse("class-my-bookings"), {"status": "cancelled"})

        self.assertEqual(response.data["count"], 1)
        self.assertEqual(response.data["bookings"][0]["booking_id"], cancelled.pk)

    def test_my_bookings_rejects_unknown_status(self) -> None:
        response = self.client.get(reverse("class-my-bookings"), {"status": "pending"})

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)


class ClassBrowserAPITests(ClassAPITestMixin, APITestCase):
    def setUp(self) -> None:
        self._create_users()
        self.yoga = self._create_class()
        self.hiit = self._create_class(
            trainer=self.other_trainer,
            class_name="Lunch HIIT",
            class_type="hiit",
            difficulty_level=FitnessClass.Difficulty.ADVANCED,
            max_capacity=1,
            location="Main Floor",
        )
        self.yoga_schedule = self._create_schedule(self.yoga, days_ahead=2)
        self.hiit_schedule = self._create_schedule(self.hiit, days_ahead=1)
        self.list_url = reverse("class-list")
        self.client.force_authenticate(self.member)

    def test_lists_upcoming_schedules_with_free_spots(self) -> None:
        self._create_schedule(self.yoga, days_ahead=-1)
        retired = self._create_class(class_name="Retired", is_active=False)
        self._create_schedule(retired, days_ahead=1)
        ledger.book(self.yoga_schedule.pk, self.member.pk)

        response = self.client.get(self.list_url)

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        ids = [entry["schedule_id"] for entry in response.data["classes"]]
        self.assertEqual(ids, [self.hiit_schedule.pk, self.yoga_schedule.pk])
        yoga_entry = response.data["classes"][1]
        self.assertEqual(yoga_entry["spots_available"], 1)
        self.assertEqual(yoga_entry["trainer_name"], "Casey Coach")

    def test_filters_by_difficulty_and_spots(self) -> None:
        ClassSchedule.objects.filter(pk=self.hiit_schedule.pk).update(current_capacity=1)

        response = self.client.get(self.list_url, {"difficulty_level": "advanced"})
        self.assertEqual(
            [entry["schedule_id"] for entry in response.data["classes"]],
            [self.hiit_schedule.pk],
        )

        response = self.client.get(self.list_url, {"has_spots": "true"})
        self.assertEqual(
            [entry["schedule_id"] for entry in response.data["classes"]],
            [self.yoga_schedule.pk],
        )

    def test_filters_by_trainer_and_location(self) -> None:
        response = self.client.get(
            self.list_url, {"trainer_id": self.trainer.pk, "location": "studio"}
        )

        self.assertEqual(response.data["count"], 1)
        self.assertEqual(response.data["classes"][0]["class_name"], "Morning Yoga")

    def test_listing_requires_authentication(self) -> None:
        self.client.force_authenticate(None)

        response = self.client.get(self.list_url)

        self.assertEqual(response.status_code, status.HTTP_401_UNAUTHORIZED)

    def test_filter_options_are_public(self) -> None:
        self.client.force_authenticate(None)

        response = self.client.get(reverse("class-filters"))

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        filters = response.data["filters"]
        self.assertEqual(filters["class_types"], ["hiit", "yoga"])
        self.assertEqual(
            {trainer["full_name"] for trainer in filters["trainers"]},
            {"Casey Coach", "Riley Rival"},
        )
        self.assertEqual(filters["difficulty_levels"], ["beginner", "intermediate", "advanced"])


class TrainerAPITests(ClassAPITestMixin, APITestCase):
    def setUp(self) -> None:
        self._create_users()
        self.fitness_class = self._create_class()
        self.list_url = reverse("trainer-class-list")
        self.client.force_authenticate(self.trainer)

    def test_trainer_creates_class(self) -> None:
        payload = {
            "class_name": "Evening Pilates",
            "class_type": "pilates",
            "difficulty_level": "intermediate",
            "max_capacity": 12,
            "duration_minutes": 50,
        }

        response = self.client.post(self.list_url, payload, format="json")

        self.assertEqual(response.status_code, status.HTTP_201_CREATED, response.data)
        created = FitnessClass.objects.get(pk=response.data["id"])
        self.assertEqual(created.trainer, self.trainer)
        self.assertTrue(created.is_active)

    def test_invalid_difficulty_is_rejected(self) -> None:
        payload = {
            "class_name": "Mystery",
            "class_type": "other",
            "difficulty_level": "extreme",
            "max_capacity": 5,
            "duration_minutes": 30,
        }

        response = self.client.post(self.list_url, payload, format="json")

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertIn("difficulty_level", response.data)

    def test_member_cannot_manage_classes(self) -> None:
        self.client.force_authenticate(self.member)

        response = self.client.get(self.list_url)

        self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN)

    def test_trainer_lists_own_classes_only(self) -> None:
        self._create_class(trainer=self.other_trainer, class_name="Not mine")

        response = self.client.get(self.list_url)

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual([entry["class_name"] for entry in response.data], ["Morning Yoga"])

    def test_other_trainers_class_is_hidden(self) -> None:
        self.client.force_authenticate(self.other_trainer)

        response = self.client.patch(
            reverse("trainer-class-detail", args=[self.fitness_class.pk]),
            {"class_name": "Hijacked"},
            format="json",
        )

        self.assertEqual(response.status_code, status.HTTP_404_NOT_FOUND)

    def test_delete_is_soft(self) -> None:
        response = self.client.delete(reverse("trainer-class-detail", args=[self.fitness_class.pk]))

        self.assertEqual(response.status_code, status.HTTP_204_NO_CONTENT)
        self.fitness_class.refresh_from_db()
        self.assertFalse(self.fitness_class.is_active)

    def test_trainer_opens_schedule(self) -> None:
        url = reverse("trainer-class-schedules", args=[self.fitness_class.pk])
        payload = {
            "scheduled_date": str(timezone.localdate() + timedelta(days=7)),
            "start_time": "07:30",
            "end_time": "08:30",
        }

        response = self.client.post(url, payload, format="json")

        self.assertEqual(response.status_code, status.HTTP_201_CREATED, response.data)
        self.assertEqual(response.data["current_capacity"], 0)
        self.assertEqual(response.data["status"], ClassSchedule.Status.SCHEDULED)

        response = self.client.get(url)
        self.assertEqual(len(response.data), 1)

    def test_schedule_must_end_after_start(self) -> None:
        url = reverse("trainer-class-schedules", args=[self.fitness_class.pk])
        payload = {
            "scheduled_date": str(timezone.localdate() + timedelta(days=7)),
            "start_time": "09:00",
            "end_time": "08:00",
        }

        response = self.client.post(url, payload, format="json")

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertFalse(ClassSchedule.objects.exists())

    def test_capacity_cannot_drop_below_booked_seats(self) -> None:
        schedule = self._create_schedule(self.fitness_class)
        ClassSchedule.objects.filter(pk=schedule.pk).update(current_capacity=2)

        response = self.client.patch(
            reverse("trainer-class-detail", args=[self.fitness_class.pk]),
            {"max_capacity": 1},
            format="json",
        )

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertIn("max_capacity", response.data)

    def test_roster_lists_booked_members(self) -> None:
        schedule = self._create_schedule(self.fitness_class)
        ledger.book(schedule.pk, self.member.pk)
        url = reverse("class-schedule-bookings", args=[schedule.pk])

        response = self.client.get(url)

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data["count"], 1)
        self.assertEqual(response.data["bookings"][0]["email"], "member@example.com")

        self.client.force_authenticate(self.other_trainer)
        response = self.client.get(url)
        self.assertEqual(response.data["count"], 0)

        self.client.force_authenticate(self.member)
        response = self.client.get(url)
        self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN)

    def _admin(self) -> User:
        return User.objects.create_user(
            email="support@example.com",
            password="SupportPass123",
            full_name="Sam Support",
            role=User.RoleChoices.ADMIN,
        )

    def test_admin_sees_any_roster(self) -> None:
        schedule = self._create_schedule(self.fitness_class)
        ledger.book(schedule.pk, self.member.pk)
        self.client.force_authenticate(self._admin())

        response = self.client.get(reverse("class-schedule-bookings", args=[schedule.pk]))

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data["count"], 1)
        self.assertEqual(response.data["bookings"][0]["user_id"], self.member.pk)

    def test_admin_lists_every_trainers_classes(self) -> None:
        self._create_class(trainer=self.other_trainer, class_name="Lunch HIIT")
        self.client.force_authenticate(self._admin())

        response = self.client.get(self.list_url)

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(
            sorted(entry["class_name"] for entry in response.data),
            ["Lunch HIIT", "Morning Yoga"],
        )

    def test_admin_cannot_create_class(self) -> None:
        self.client.force_authenticate(self._admin())
        payload = {
            "class_name": "Staff Special",
            "class_type": "yoga",
            "difficulty_level": "beginner",
            "max_capacity": 5,
            "duration_minutes": 30,
        }

        response = self.client.post(self.list_url, payload, format="json")

        self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN)
        self.assertFalse(FitnessClass.objects.filter(class_name="Staff Special").exists())
