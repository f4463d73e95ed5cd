"""URL routing for group classes."""

from __future__ import annotations

from django.urls import include, path  # type: ignore
from rest_framework.routers import SimpleRouter  # type: ignore

from .views import BookingViewSet, ClassViewSet, ScheduleViewSet, TrainerClassViewSet

router = SimpleRouter()
router.register(r"bookings", BookingViewSet, basename="class-booking")
router.register(r"trainer", TrainerClassViewSet, basename="trainer-class")
router.register(r"schedules", ScheduleViewSet, basename="class-schedule")
# Registered last: its routes sit at the prefix root.
router.register(r"", ClassViewSet, basename="class")

urlpatterns = [
    path("", include(router.urls)),
]
