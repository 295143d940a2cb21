from eventhub.handlers.views import (
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

__all__ = [
    "AccountAdminStatusView",
    "AccountDetailView",
    "AccountListView",
    "CategoryListView",
    "EnrolledEventListView",
    "EnrollmentView",
    "EventDetailView",
    "EventListView",
    "LoginView",
    "OrganizedEventListView",
]
