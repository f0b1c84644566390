"""Custom DRF throttle classes for rate limiting API endpoints."""

from rest_framework.throttling import UserRateThrottle


class EventCreateThrottle(UserRateThrottle):
    """Stricter rate limiting for event creation operations.

    Prevents rapid mass-insertion of events (feedings, pumpings, diapers, ...),
    each of which also fans out to the reminder engine and the webhook.
    Rate: 120 requests per hour per user (one per 30 seconds)
    """

    scope = "event_create"


class AssistantRequestThrottle(UserRateThrottle):
    """Rate limiting for "request assistant" calls.

    Each call pings the chat webhook and an external hook immediately.
    Rate: 30 requests per hour per user
    """

    scope = "assistant_request"
