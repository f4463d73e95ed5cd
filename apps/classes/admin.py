"""Admin registration for group classes."""

from __future__ import annotations

from django.contrib import admin

from .models import ClassBooking, ClassSchedule, FitnessClass


@admin.register(FitnessClass)
class FitnessClassAdmin(admin.ModelAdmin):
    list_display = (
        "class_name",
        "trainer",
        "class_type",
        "difficulty_level",
        "max_capacity",
        "is_active",
        "created_at",
    )
    list_filter = ("is_active", "difficulty_level", "class_type")
    search_fields = ("class_name", "trainer__email", "trainer__full_name")
    readonly_fields = ("created_at", "updated_at")


@admin.register(ClassSchedule)
class ClassScheduleAdmin(admin.ModelAdmin):
    list_display = (
        "fitness_class",
        "scheduled_date",
        "start_time",
        "end_time",
        "current_capacity",
        "status",
    )
    list_filter = ("status", "scheduled_date")
    search_fields = ("fitness_class__class_name",)
    # Seat counts are owned by the booking ledger.
    readonly_fields = ("current_capacity", "created_at", "updated_at")


@admin.register(ClassBooking)
class ClassBookingAdmin(admin.ModelAdmin):
    list_display = ("id", "schedule", "user", "booking_status", "booked_at", "cancelled_at")
    list_filter = ("booking_status", "attended")
    search_fields = ("user__email", "schedule__fitness_class__class_name")
    readonly_fields = ("booked_at", "cancelled_at", "updated_at")
