"""HTTP handlers (views) - handle HTTP concerns only.

Handlers:
- Parse requests and validate input format
- Call services for business logic
- Leave domain error mapping to the exception handler in handlers.errors
- Never contain business logic
- Never expose internal error details
"""

from rest_framework import status
from rest_framework.permissions import AllowAny, IsAuthenticated
from rest_framework.request import Request
from rest_framework.response import Response
from rest_framework.views import APIView

from eventhub.handlers.authentication import issue_token
from eventhub.handlers.serializers import (
    AdminStatusSerializer,
    CategorySerializer,
    EventCreateSerializer,
    EventDetailSerializer,
    LoginSerializer,
    RegisterSerializer,
    UserSerializer,
)
from eventhub.wiring import build_services


class AccountListView(APIView):
    """Handler for GET/POST /api/accounts"""

    def get_permissions(self):
        if self.request.method == "POST":
            return [AllowAny()]
        return [IsAuthenticated()]

    def get(self, request: Request) -> Response:
        users = build_services().accounts.list_for_admin(request.user.id)
        return Response(UserSerializer(users, many=True).data)

    def post(self, request: Request) -> Response:
        payload = RegisterSerializer(data=request.data)
        payload.is_valid(raise_exception=True)
        user_id = build_services().accounts.register(**payload.validated_data)
        return Response({"id": user_id.value}, status=status.HTTP_201_CREATED)


class LoginView(APIView):
    """Handler for POST /api/auth/login"""

    permission_classes = [AllowAny]

    def post(self, request: Request) -> Response:
        payload = LoginSerializer(data=request.data)
        payload.is_valid(raise_exception=True)
        user = build_services().accounts.authenticate(**payload.validated_data)
        return Response({"token": issue_token(user.id), "user": UserSerializer(user).data})


class AccountDetailView(APIView):
    """Handler for DELETE /api/accounts/{user_id}"""

    def delete(self, request: Request, user_id: int) -> Response:
        build_services().accounts.delete(request.user.id, user_id)
        return Response(status=status.HTTP_204_NO_CONTENT)


class AccountAdminStatusView(APIView):
    """Handler for PUT /api/accounts/{user_id}/admin"""

    def put(self, request: Request, user_id: int) -> Response:
        payload = AdminStatusSerializer(data=request.data)
        payload.is_valid(raise_exception=True)
        accounts = build_services().accounts
        accounts.set_admin_status(request.user.id, user_id, payload.validated_data["is_admin"])
        return Response(UserSerializer(accounts.get(user_id)).data)


class EventListView(APIView):
    """Handler for GET/POST /api/events"""

    def get_permissions(self):
        if self.request.method == "GET":
            return [AllowAny()]
        return [IsAuthenticated()]

    def get(self, request: Request) -> Response:
        details = build_services().events.list_all()
        return Response(EventDetailSerializer(details, many=True).data)

    def post(self, request: Request) -> Response:
        payload = EventCreateSerializer(data=request.data)
        payload.is_valid(raise_exception=True)
        data = payload.validated_data
        events = build_services().events
        event_id = events.create(
            request.user.id,
            data["name"],
            data["category"],
            data["scheduled_at"],
            data["location"],
            data["capacity"],
            data["description"],
        )
        return Response(
            EventDetailSerializer(events.get(event_id)).data,
            status=status.HTTP_201_CREATED,
        )


class EventDetailView(APIView):
    """Handler for GET/DELETE /api/events/{event_id}"""

    def get_permissions(self):
        if self.request.method == "GET":
            return [AllowAny()]
        return [IsAuthenticated()]

    def get(self, request: Request, event_id: int) -> Response:
        services = build_services()
        detail = services.events.get(event_id)
        body = dict(EventDetailSerializer(detail).data)
        body["participants"] = services.enrollments.count_participants(event_id)
        if request.user.is_authenticated:
            body["enrolled"] = services.enrollments.is_enrolled(request.user.id, event_id)
        return Response(body)

    def delete(self, request: Request, event_id: int) -> Response:
        build_services().events.delete(event_id, request.user.id)
        return Response(status=status.HTTP_204_NO_CONTENT)


class CategoryListView(APIView):
    """Handler for GET /api/events/categories"""

    permission_classes = [AllowAny]

    def get(self, request: Request) -> Response:
        categories = build_services().events.categories()
        return Response(CategorySerializer(categories, many=True).data)


class OrganizedEventListView(APIView):
    """Handler for GET /api/me/events/organized"""

    def get(self, request: Request) -> Response:
        details = build_services().events.list_by_organizer(request.user.id)
        return Response(EventDetailSerializer(details, many=True).data)


class EnrolledEventListView(APIView):
    """Handler for GET /api/me/events/enrolled"""

    def get(self, request: Request) -> Response:
        details = build_services().events.list_enrolled_for(request.user.id)
        return Response(EventDetailSerializer(details, many=True).data)


class EnrollmentView(APIView):
    """Handler for POST/DELETE /api/events/{event_id}/enrollment"""

    def post(self, request: Request, event_id: int) -> Response:
        build_services().enrollments.enroll(request.user.id, event_id)
        return Response(
            {"user_id": request.user.id.value, "event_id": event_id},
            status=status.HTTP_201_CREATED,
        )

    def delete(self, request: Request, event_id: int) -> Response:
        build_services().enrollments.cancel(request.user.id, event_id)
        return Response(status=status.HTTP_204_NO_CONTENT)
