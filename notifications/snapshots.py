"""Cached copies of the profile settings the reminder engine schedules from."""

from __future__ import annotations

import hashlib
import json
from dataclasses import asdict, dataclass, field
from datetime import timedelta
from typing import Any

# Settings copied off a profile; everything here participates in the hash.
SNAPSHOT_FIELDS = (
    "name",
    "nickname",
    "feeding_interval",
    "night_feeding_interval",
    "pumping_duration",
    "pumping_interval",
    "night_pumping_interval",
    "baby_daytime_start",
    "baby_daytime_end",
    "parent_daytime_start",
    "parent_daytime_end",
    "enable_feeding_reminder",
    "enable_pumping_reminder",
    "enable_feeding_notification",
    "enable_pumping_notification",
    "enable_other_activities_notification",
)

# Profile columns stored as whole minutes
MINUTE_FIELDS = {
    "feeding_interval",
    "night_feeding_interval",
    "pumping_duration",
    "pumping_interval",
    "night_pumping_interval",
}


@dataclass(frozen=True)
class ProfileSnapshot:
    """Denormalized, hashable copy of a profile's scheduling settings.

    Intervals are ``timedelta`` values; a zero interval disables reminders for
    that part of the day. Daytime windows are half-open hour ranges.
    """

    profile_id: str
    name: str
    nickname: str = ""
    feeding_interval: timedelta = timedelta(hours=3)
    night_feeding_interval: timedelta = timedelta(hours=4)
    pumping_duration: timedelta = timedelta(minutes=30)
    pumping_interval: timedelta = timedelta(hours=3)
    night_pumping_interval: timedelta = timedelta(hours=4)
    baby_daytime_start: int = 7
    baby_daytime_end: int = 19
    parent_daytime_start: int = 6
    parent_daytime_end: int = 24
    enable_feeding_reminder: bool = True
    enable_pumping_reminder: bool = True
    enable_feeding_notification: bool = True
    enable_pumping_notification: bool = True
    enable_other_activities_notification: bool = False
    content_hash: str = field(default="", compare=False)

    def __post_init__(self):
        if not self.content_hash:
            object.__setattr__(self, "content_hash", self.compute_hash())

    @classmethod
    def from_profile(cls, profile: Any) -> ProfileSnapshot:
        """Build a snapshot from a profile-like object (e.g. ``BabyProfile``).

        Interval attributes on the profile are whole minutes.
        """
        values = {}
        for name in SNAPSHOT_FIELDS:
            value = getattr(profile, name)
            if name in MINUTE_FIELDS:
                value = timedelta(minutes=value or 0)
            values[name] = value
        values["nickname"] = values["nickname"] or ""
        return cls(profile_id=str(profile.pk), **values)

    @property
    def display_name(self) -> str:
        return self.nickname or self.name

    def compute_hash(self) -> str:
        """SHA-256 over the profile id and every snapshot field."""
        payload = asdict(self)
        payload.pop("content_hash")
        encoded = json.dumps(payload, sort_keys=True, default=str)
        return hashlib.sha256(encoded.encode("utf-8")).hexdigest()


class ProfileSnapshotCache:
    """Map of profile id to its latest ``ProfileSnapshot``.

    Not thread-safe on its own; the notification service serialises access.
    """

    def __init__(self):
        self._snapshots: dict[str, ProfileSnapshot] = {}

    def __len__(self):
        return len(self._snapshots)

    def __contains__(self, profile_id):
        return str(profile_id) in self._snapshots

    def upsert_if_changed(self, snapshot: ProfileSnapshot) -> bool:
        """Replace the cached snapshot when absent or its hash differs.

        Returns:
            bool: True if the cache was written
        """
        cached = self._snapshots.get(snapshot.profile_id)
        if cached is not None and cached.content_hash == snapshot.content_hash:
            return False
        self._snapshots[snapshot.profile_id] = snapshot
        return True

    def remove(self, profile_id) -> None:
        self._snapshots.pop(str(profile_id), None)

    def get(self, profile_id) -> ProfileSnapshot | None:
        return self._snapshots.get(str(profile_id))
