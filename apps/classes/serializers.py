"""Serializers for the group class domain."""

from __future__ import annotations

from rest_framework import serializers  # type: ignore

from . import services
from .models import ClassBooking, ClassSchedule, FitnessClass


class ClassBookingSerializer(serializers.ModelSerializer):
    """Booking record returned by the ledger endpoints."""

    schedule_id = serializers.ReadOnlyField()
    user_id = serializers.ReadOnlyField()

    class Meta:
        model = ClassBooking
        fields = [
            "id",
            "schedule_id",
            "user_id",
            "booking_status",
            "booked_at",
            "cancelled_at",
            "cancellation_reason",
        ]
        read_only_fields = fields


class BookClassSerializer(serializers.Serializer):
    schedule_id = serializers.IntegerField(min_value=1)


class CancelBookingSerializer(serializers.Serializer):
    reason = serializers.CharField(required=False, allow_blank=True, default="", max_length=500)


class MemberBookingSerializer(serializers.ModelSerializer):
    """A member's booking flattened with its schedule and class."""

    booking_id = serializers.ReadOnlyField(source="id")
    schedule_id = serializers.ReadOnlyField()
    scheduled_date = serializers.ReadOnlyField(source="schedule.scheduled_date")
    start_time = serializers.ReadOnlyField(source="schedule.start_time")
    end_time = serializers.ReadOnlyField(source="schedule.end_time")
    schedule_status = serializers.ReadOnlyField(source="schedule.status")
    current_capacity = serializers.ReadOnlyField(source="schedule.current_capacity")
    class_id = serializers.ReadOnlyField(source="schedule.fitness_class_id")
    class_name = serializers.ReadOnlyField(source="schedule.fitness_class.class_name")
    class_type = serializers.ReadOnlyField(source="schedule.fitness_class.class_type")
    difficulty_level = serializers.ReadOnlyField(source="schedule.fitness_class.difficulty_level")
    duration_minutes = serializers.ReadOnlyField(source="schedule.fitness_class.duration_minutes")
    max_capacity = serializers.ReadOnlyField(source="schedule.fitness_class.max_capacity")
    location = serializers.ReadOnlyField(source="schedule.fitness_class.location")
    trainer_name = serializers.ReadOnlyField(source="schedule.fitness_class.trainer.display_name")

    class Meta:
        model = ClassBooking
        fields = [
            "booking_id",
            "booking_status",
            "booked_at",
            "attended",
            "schedule_id",
            "scheduled_date",
            "start_time",
            "end_time",
            "schedule_status",
            "current_capacity",
            "class_id",
            "class_name",
            "class_type",
            "difficulty_level",
            "duration_minutes",
            "max_capacity",
            "location",
            "trainer_name",
        ]


class AvailableScheduleSerializer(serializers.ModelSerializer):
    """Upcoming schedule as shown in the member class browser."""

    schedule_id = serializers.ReadOnlyField(source="id")
    spots_available = serializers.IntegerField(read_only=True)
    class_id = serializers.ReadOnlyField(source="fitness_class_id")
    class_name = serializers.ReadOnlyField(source="fitness_class.class_name")
    description = serializers.ReadOnlyField(source="fitness_class.description")
    class_type = serializers.ReadOnlyField(source="fitness_class.class_type")
    difficulty_level = serializers.ReadOnlyField(source="fitness_class.difficulty_level")
    max_capacity = serializers.ReadOnlyField(source="fitness_class.max_capacity")
    duration_minutes = serializers.ReadOnlyField(source="fitness_class.duration_minutes")
    price = serializers.DecimalField(
        source="fitness_class.price", max_digits=10, decimal_places=2, read_only=True
    )
    location = serializers.ReadOnlyField(source="fitness_class.location")
    trainer_id = serializers.ReadOnlyField(source="fitness_class.trainer_id")
    trainer_name = serializers.ReadOnlyField(source="fitness_class.trainer.display_name")

    class Meta:
        model = ClassSchedule
        fields = [
            "schedule_id",
            "scheduled_date",
            "start_time",
            "end_time",
            "current_capacity",
            "status",
            "spots_available",
            "class_id",
            "class_name",
            "description",
            "class_type",
            "difficulty_level",
            "max_capacity",
            "duration_minutes",
            "price",
            "location",
            "trainer_id",
            "trainer_name",
        ]


class FitnessClassSerializer(serializers.ModelSerializer):
    """Class template managed by its trainer."""

    trainer_id = serializers.ReadOnlyField()
    max_capacity = serializers.IntegerField(min_value=1)
    duration_minutes = serializers.IntegerField(min_value=1)
    schedule_count = serializers.IntegerField(read_only=True)
    total_bookings = serializers.IntegerField(read_only=True)

    class Meta:
        model = FitnessClass
        fields = [
            "id",
            "trainer_id",
            "class_name",
            "description",
            "class_type",
            "difficulty_level",
            "max_capacity",
            "duration_minutes",
            "price",
            "location",
            "is_active",
            "schedule_count",
            "total_bookings",
            "created_at",
            "updated_at",
        ]
        read_only_fields = ["id", "trainer_id", "is_active", "created_at", "updated_at"]
        extra_kwargs = {
            "class_type": {"required": True, "allow_blank": False},
        }

    def create(self, validated_data):  # type: ignore
        return services.create_class(self.context["request"].user, **validated_data)

    def validate_max_capacity(self, value: int) -> int:
        instance = self.instance
        if instance is None:
            return value
        # Shrinking below seats already taken would break the capacity invariant.
        taken = (
            instance.schedules.filter(status=ClassSchedule.Status.SCHEDULED)
            .order_by("-current_capacity")
            .values_list("current_capacity", flat=True)
            .first()
        )
        if taken and value < taken:
            raise serializers.ValidationError(
                f"Max capacity cannot be lower than {taken} seats already booked."
            )
        return value


class ClassScheduleSerializer(serializers.ModelSerializer):
    """Dated occurrence of a class, as created and listed by trainers."""

    class_id = serializers.ReadOnlyField(source="fitness_class_id")
    class_name = serializers.ReadOnlyField(source="fitness_class.class_name")
    max_capacity = serializers.ReadOnlyField(source="fitness_class.max_capacity")
    confirmed_bookings = serializers.IntegerField(read_only=True)

    class Meta:
        model = ClassSchedule
        fields = [
            "id",
            "class_id",
            "class_name",
            "scheduled_date",
            "start_time",
            "end_time",
            "current_capacity",
            "max_capacity",
            "confirmed_bookings",
            "status",
            "created_at",
        ]
        read_only_fields = ["id", "current_capacity", "status", "created_at"]

    def validate(self, attrs):  # type: ignore
        if attrs["end_time"] <= attrs["start_time"]:
            raise serializers.ValidationError("End time must be after start time.")
        return attrs


class RosterEntrySerializer(serializers.ModelSerializer):
    """One member on a schedule roster."""

    booking_id = serializers.ReadOnlyField(source="id")
    user_id = serializers.ReadOnlyField()
    full_name = serializers.ReadOnlyField(source="user.display_name")
    email = serializers.ReadOnlyField(source="user.email")
    profile_picture_url = serializers.ReadOnlyField(source="user.profile_picture_url")

    class Meta:
        model = ClassBooking
        fields = [
            "booking_id",
            "booking_status",
            "booked_at",
            "attended",
            "user_id",
            "full_name",
            "email",
            "profile_picture_url",
        ]
