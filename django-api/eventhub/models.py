"""Django ORM models (persistence layer).

These models handle database concerns. Domain logic lives in domain/models.py.
Cascading deletes are declared here and relied on by the stores.
"""

from django.db import models

from eventhub.domain.value_objects import Category

CATEGORY_CHOICES = [(category.name, category.label) for category in Category]


class User(models.Model):
    """Persistence model for accounts."""

    name = models.CharField(max_length=255)
    email = models.CharField(max_length=254, unique=True)
    password = models.CharField(max_length=255)
    is_admin = models.BooleanField(default=False)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ["id"]
        indexes = [
            models.Index(fields=["is_admin", "id"], name="eventhub_user_admin_idx"),
        ]

    def __str__(self) -> str:
        return self.email


class Event(models.Model):
    """Persistence model for events."""

    name = models.CharField(max_length=255)
    category = models.CharField(max_length=20, choices=CATEGORY_CHOICES)
    scheduled_at = models.DateTimeField()
    location = models.CharField(max_length=255)
    capacity = models.PositiveIntegerField()
    organizer = models.ForeignKey(
        User, on_delete=models.CASCADE, related_name="organized_events"
    )
    description = models.TextField()
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ["scheduled_at", "id"]
        indexes = [
            models.Index(fields=["scheduled_at", "id"], name="eventhub_event_sched_idx"),
            models.Index(
                fields=["organizer", "scheduled_at"], name="eventhub_event_org_idx"
            ),
        ]
        constraints = [
            models.CheckConstraint(
                condition=models.Q(capacity__gt=0),
                name="eventhub_event_capacity_positive",
            ),
        ]

    def __str__(self) -> str:
        return self.name


class Enrollment(models.Model):
    """Persistence model for the user/event enrollment relation."""

    user = models.ForeignKey(
        User, on_delete=models.CASCADE, related_name="enrollments"
    )
    event = models.ForeignKey(
        Event, on_delete=models.CASCADE, related_name="enrollments"
    )
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        constraints = [
            models.UniqueConstraint(
                fields=["user", "event"], name="eventhub_enrollment_unique_pair"
            ),
        ]

    def __str__(self) -> str:
        return f"{self.user_id} -> {self.event_id}"
