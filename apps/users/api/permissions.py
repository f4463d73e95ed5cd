"""Role-based permission classes shared by the FitBuddy API."""

from __future__ import annotations

from rest_framework import permissions  # type: ignore


def is_platform_staff(user) -> bool:
    """Django staff, superusers and accounts with the admin role."""
    if not user.is_authenticated:
        return False
    if getattr(user, "is_staff", False) or getattr(user, "is_superuser", False):
        return True
    return hasattr(user, "is_platform_admin") and user.is_platform_admin()


class IsMember(permissions.BasePermission):
    """Only members can book and cancel class seats."""

    message = "Only members can book classes"

    def has_permission(self, request, view) -> bool:  # type: ignore
        user = request.user
        if not user.is_authenticated:
            return False
        return hasattr(user, "is_member") and user.is_member()


class IsTrainer(permissions.BasePermission):
    """
    Allows trainers to manage their own classes and schedules.

    Platform staff pass as well; the trainer views widen their querysets to
    every trainer's classes for them, so support can inspect rosters.
    """

    message = "Only trainers can access this endpoint"

    def has_permission(self, request, view) -> bool:  # type: ignore
        user = request.user
        if is_platform_staff(user):
            return True
        return user.is_authenticated and hasattr(user, "is_trainer") and user.is_trainer()


class IsClassOwner(permissions.BasePermission):
    """
    Object-level permission: the trainer must own the fitness class
    (or the schedule's class) or be platform staff.
    """

    def has_object_permission(self, request, view, obj) -> bool:  # type: ignore
        user = request.user
        if not user.is_authenticated:
            return False
        if is_platform_staff(user):
            return True

        if hasattr(obj, "trainer_id"):
            return obj.trainer_id == user.id
        if hasattr(obj, "fitness_class"):
            return obj.fitness_class.trainer_id == user.id
        return False
