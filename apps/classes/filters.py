"""FilterSet definitions for the member-facing class browser."""

from __future__ import annotations

import django_filters  # type: ignore

from .models import ClassSchedule, FitnessClass


class AvailableScheduleFilterSet(django_filters.FilterSet):
    """Filters accepted by ``GET /classes/`` on upcoming schedules."""

    trainer_id = django_filters.NumberFilter(field_name="fitness_class__trainer_id")
    class_type = django_filters.CharFilter(field_name="fitness_class__class_type", lookup_expr="iexact")
    difficulty_level = django_filters.ChoiceFilter(
        field_name="fitness_class__difficulty_level",
        choices=FitnessClass.Difficulty.choices,
    )
    location = django_filters.CharFilter(field_name="fitness_class__location", lookup_expr="icontains")
    date_from = django_filters.DateFilter(field_name="scheduled_date", lookup_expr="gte")
    date_to = django_filters.DateFilter(field_name="scheduled_date", lookup_expr="lte")
    # Only schedules that still have a free seat
    has_spots = django_filters.BooleanFilter(method="filter_has_spots")

    class Meta:
        model = ClassSchedule
        fields = [
            "trainer_id",
            "class_type",
            "difficulty_level",
            "location",
            "date_from",
            "date_to",
        ]

    def filter_has_spots(self, queryset, name, value):  # type: ignore
        if value is None:
            return queryset
        if value:
            return queryset.filter(spots_available__gt=0)
        return queryset.filter(spots_available__lte=0)
