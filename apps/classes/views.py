"""API views for group classes and seat bookings."""

from __future__ import annotations

from django_filters.rest_framework import DjangoFilterBackend  # type: ignore
from rest_framework import permissions, status, viewsets  # type: ignore
from rest_framework.decorators import action  # type: ignore
from rest_framework.response import Response  # type: ignore

from apps.users.api.permissions import IsClassOwner, IsMember, IsTrainer, is_platform_staff

from . import services
from .exceptions import LedgerError
from .filters import AvailableScheduleFilterSet
from .ledger import ledger
from .models import ClassBooking
from .serializers import (
    AvailableScheduleSerializer,
    BookClassSerializer,
    CancelBookingSerializer,
    ClassBookingSerializer,
    ClassScheduleSerializer,
    FitnessClassSerializer,
    MemberBookingSerializer,
    RosterEntrySerializer,
)

LEDGER_ERROR_STATUS = {
    "not_found": status.HTTP_404_NOT_FOUND,
    "full": status.HTTP_400_BAD_REQUEST,
    "already_booked": status.HTTP_400_BAD_REQUEST,
    "past_class": status.HTTP_400_BAD_REQUEST,
    "store_error": status.HTTP_500_INTERNAL_SERVER_ERROR,
}


def ledger_error_response(exc: LedgerError) -> Response:
    """Render a ledger failure with the status its kind maps to."""
    return Response(
        {"success": False, "kind": exc.kind, "message": exc.message},
        status=LEDGER_ERROR_STATUS.get(exc.kind, status.HTTP_500_INTERNAL_SERVER_ERROR),
    )


class ClassViewSet(viewsets.GenericViewSet):
    """Member-facing class browser plus booking."""

    serializer_class = AvailableScheduleSerializer
    permission_classes = [permissions.IsAuthenticated]
    filter_backends = [DjangoFilterBackend]
    filterset_class = AvailableScheduleFilterSet

    def get_queryset(self):  # type: ignore
        return services.available_schedules()

    def list(self, request):  # type: ignore
        queryset = self.filter_queryset(self.get_queryset())
        serializer = self.get_serializer(queryset, many=True)
        return Response({"success": True, "classes": serializer.data, "count": len(serializer.data)})

    @action(detail=False, methods=["post"], permission_classes=[IsMember])
    def book(self, request):  # type: ignore
        serializer = BookClassSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        try:
            booking = ledger.book(serializer.validated_data["schedule_id"], request.user.id)
        except LedgerError as exc:
            return ledger_error_response(exc)
        return Response(
            {
                "success": True,
                "message": "Class booked successfully",
                "booking": ClassBookingSerializer(booking).data,
            },
            status=status.HTTP_201_CREATED,
        )

    @action(detail=False, methods=["get"], url_path="my-bookings")
    def my_bookings(self, request):  # type: ignore
        booking_status = request.query_params.get("status") or None
        if booking_status and booking_status not in ClassBooking.Status.values:
            return Response(
                {"success": False, "message": f"Unknown booking status: {booking_status}"},
                status=status.HTTP_400_BAD_REQUEST,
            )
        bookings = services.member_bookings(request.user, status=booking_status)
        data = MemberBookingSerializer(bookings, many=True).data
        return Response({"success": True, "bookings": data, "count": len(data)})

    @action(
        detail=False,
        methods=["get"],
        permission_classes=[permissions.AllowAny],
    )
    def filters(self, request):  # type: ignore
        return Response({"success": True, "filters": services.filter_options()})


class BookingViewSet(viewsets.GenericViewSet):
    """Cancellation of the caller's own bookings."""

    permission_classes = [IsMember]
    serializer_class = CancelBookingSerializer

    def destroy(self, request, pk=None):  # type: ignore
        try:
            booking_id = int(pk)
        except (TypeError, ValueError):
            return Response(
                {"success": False, "message": "Invalid booking ID"},
                status=status.HTTP_400_BAD_REQUEST,
            )
        serializer = self.get_serializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        try:
            booking = ledger.cancel(booking_id, request.user.id, serializer.validated_data["reason"])
        except LedgerError as exc:
            return ledger_error_response(exc)
        return Response(
            {
                "success": True,
                "message": "Booking cancelled successfully",
                "booking": ClassBookingSerializer(booking).data,
            }
        )


class TrainerClassViewSet(viewsets.ModelViewSet):
    """Class templates owned by the calling trainer, or every class for staff."""

    serializer_class = FitnessClassSerializer
    permission_classes = [IsTrainer, IsClassOwner]
    filter_backends = []

    def get_queryset(self):  # type: ignore
        user = self.request.user
        return services.trainer_classes(None if is_platform_staff(user) else user)

    def get_serializer_class(self):  # type: ignore
        if self.action == "schedules":
            return ClassScheduleSerializer
        return FitnessClassSerializer

    def create(self, request, *args, **kwargs):  # type: ignore
        # The caller becomes the class trainer.
        if not request.user.is_trainer():
            self.permission_denied(request, message="Only trainers can create classes")
        return super().create(request, *args, **kwargs)

    def perform_destroy(self, instance):  # type: ignore
        services.deactivate_class(instance)

    @action(detail=True, methods=["get", "post"])
    def schedules(self, request, pk=None):  # type: ignore
        """Lists the occurrences of a class or opens a new one."""
        fitness_class = self.get_object()
        if request.method == "POST":
            serializer = self.get_serializer(data=request.data)
            serializer.is_valid(raise_exception=True)
            try:
                schedule = services.create_schedule(fitness_class, **serializer.validated_data)
            except services.ScheduleValidationError as exc:
                return Response(
                    {"success": False, "message": str(exc)},
                    status=status.HTTP_400_BAD_REQUEST,
                )
            return Response(self.get_serializer(schedule).data, status=status.HTTP_201_CREATED)

        schedules = services.class_schedules(fitness_class)
        return Response(self.get_serializer(schedules, many=True).data)


class ScheduleViewSet(viewsets.GenericViewSet):
    """Trainer view on the members booked into a schedule."""

    permission_classes = [IsTrainer]
    serializer_class = RosterEntrySerializer
    filter_backends = []

    @action(detail=True, methods=["get"])
    def bookings(self, request, pk=None):  # type: ignore
        try:
            schedule_id = int(pk)
        except (TypeError, ValueError):
            return Response(
                {"success": False, "message": "Invalid schedule ID"},
                status=status.HTTP_400_BAD_REQUEST,
            )
        trainer = None if is_platform_staff(request.user) else request.user
        roster = services.schedule_roster(schedule_id, trainer)
        data = self.get_serializer(roster, many=True).data
        return Response({"success": True, "bookings": data, "count": len(data)})
