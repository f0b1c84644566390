"""API views for the notifications system."""

from rest_framework import status
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from rest_framework.views import APIView

from .serializers import NotifyMessageSerializer
from .service import get_service
from .snapshots import ProfileSnapshot


class NotifyMessageView(APIView):
    """Send a free-form message to the notification webhook.

    POST /api/v1/notifications/notify/  {"message", "profile"?, "debug"?}
    """

    permission_classes = [IsAuthenticated]

    def post(self, request):
        serializer = NotifyMessageSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        profile = serializer.validated_data.get("profile")
        get_service().notify_message(
            serializer.validated_data["message"],
            ProfileSnapshot.from_profile(profile) if profile else None,
            debug=serializer.validated_data["debug"],
        )
        return Response({"status": "sent"}, status=status.HTTP_202_ACCEPTED)
