"""Group fitness classes, their schedules and member seat bookings."""
