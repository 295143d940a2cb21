from django.urls import path

from eventhub.handlers import (
    AccountAdminStatusView,
    AccountDetailView,
    AccountListView,
    CategoryListView,
    EnrolledEventListView,
    EnrollmentView,
    EventDetailView,
    EventListView,
    LoginView,
    OrganizedEventListView,
)

urlpatterns = [
    path("accounts", AccountListView.as_view(), name="account-list"),
    path("accounts/<int:user_id>", AccountDetailView.as_view(), name="account-detail"),
    path(
        "accounts/<int:user_id>/admin",
        AccountAdminStatusView.as_view(),
        name="account-admin-status",
    ),
    path("auth/login", LoginView.as_view(), name="login"),
    path("events", EventListView.as_view(), name="event-list"),
    path("events/categories", CategoryListView.as_view(), name="category-list"),
    path("events/<int:event_id>", EventDetailView.as_view(), name="event-detail"),
    path(
        "events/<int:event_id>/enrollment",
        EnrollmentView.as_view(),
        name="enrollment",
    ),
    path(
        "me/events/organized",
        OrganizedEventListView.as_view(),
        name="organized-event-list",
    ),
    path(
        "me/events/enrolled",
        EnrolledEventListView.as_view(),
        name="enrolled-event-list",
    ),
]
