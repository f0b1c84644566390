"""Base ViewSet for tracking apps API.

This base class consolidates common API patterns across all tracking apps
(feedings, pumpings, diapers, naps, activities). Supports both nested routes
(/profiles/{profile_pk}/tracking/) and top-level routes (/tracking/).
"""

from typing import Any, List

from django.db.models import QuerySet
from django.utils.dateparse import parse_datetime
from rest_framework import filters, viewsets
from rest_framework.exceptions import NotFound
from rest_framework.permissions import IsAuthenticated

from django_project.throttles import EventCreateThrottle

from .models import BabyProfile


class TrackingViewSet(viewsets.ModelViewSet):
    """Base ViewSet for tracking records (nested under profiles).

    Subclasses must set:
        queryset: Base queryset for the tracking model
        serializer_class: Default serializer (for top-level routes like /diapers/)
        nested_serializer_class: Serializer for nested routes (profile in URL)

    Subclasses may set:
        datetime_filter_field: Name of the datetime field to filter on (e.g. 'fed_at').
            When set, the list endpoint accepts query parameters:
            - {field}__gte: Filter records on or after this ISO datetime
            - {field}__lt: Filter records before this ISO datetime

    The profile in nested routes may be given by id or by handle.

    The list endpoint also accepts ``?search=`` (text contained in the
    comment) and ``?ordering=`` (the datetime field or ``created_at``,
    prefixed with ``-`` for descending). Records are newest first by default.

    Example:
        class DiaperChangeViewSet(TrackingViewSet):
            queryset = DiaperChange.objects.all()
            serializer_class = DiaperChangeSerializer
            nested_serializer_class = NestedDiaperChangeSerializer
            datetime_filter_field = 'changed_at'
    """

    permission_classes = [IsAuthenticated]
    filter_backends = [filters.SearchFilter, filters.OrderingFilter]
    search_fields = ["comment"]
    nested_serializer_class: type | None = None  # Must be set by subclass
    datetime_filter_field: str | None = None  # Set by subclass to enable date filtering

    @property
    def ordering_fields(self) -> List[str]:
        return [
            field for field in (self.datetime_filter_field, "created_at") if field
        ]

    def get_throttles(self) -> List[Any]:
        """Apply stricter rate limiting for create/update operations."""
        throttles = super().get_throttles()
        if self.action in ["create", "update", "partial_update"]:
            throttles.append(EventCreateThrottle())
        return throttles

    def get_serializer_class(self) -> type:
        """Use nested serializer when profile is in URL."""
        if "profile_pk" in self.kwargs:
            if not self.nested_serializer_class:
                raise NotImplementedError("Subclass must set nested_serializer_class")
            return self.nested_serializer_class
        return self.serializer_class

    def get_profile(self) -> BabyProfile:
        """Resolve the profile from the URL, or 404."""
        if not hasattr(self, "_profile"):
            try:
                self._profile = BabyProfile.resolve(self.kwargs["profile_pk"])
            except BabyProfile.DoesNotExist:
                raise NotFound("Baby profile not found.")
        return self._profile

    def get_queryset(self) -> QuerySet[Any]:
        """Return records for the profile, filtered by optional date range."""
        model = self.queryset.model
        qs = model.objects.select_related("profile")
        if "profile_pk" in self.kwargs:
            qs = qs.filter(profile=self.get_profile())
        return self._apply_datetime_filters(qs)

    def _apply_datetime_filters(self, queryset: QuerySet[Any]) -> QuerySet[Any]:
        """Apply date range filtering if datetime_filter_field is set.

        Reads query parameters {field}__gte and {field}__lt from the request
        and applies them as ORM filters. Invalid dates are silently ignored.
        """
        field = self.datetime_filter_field
        if not field:
            return queryset

        gte_param = self.request.query_params.get(f"{field}__gte")
        lt_param = self.request.query_params.get(f"{field}__lt")

        if gte_param:
            parsed = parse_datetime(gte_param)
            if parsed:
                queryset = queryset.filter(**{f"{field}__gte": parsed})

        if lt_param:
            parsed = parse_datetime(lt_param)
            if parsed:
                queryset = queryset.filter(**{f"{field}__lt": parsed})

        return queryset

    def perform_create(self, serializer: Any) -> None:
        """Set profile from URL parameter on nested routes."""
        if "profile_pk" in self.kwargs:
            serializer.save(profile=self.get_profile())
        else:
            # Top-level route: profile must be in request data
            serializer.save()
