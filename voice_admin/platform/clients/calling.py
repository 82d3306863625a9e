"""Calling-platform administrative API client.

Covers the voice-app resources the tool manages: fixed (calendar)
schedules and application-backed resource accounts.
"""

from collections.abc import Sequence
from dataclasses import dataclass
from typing import Any

from voice_admin.holidays.models import FIXED_SCHEDULE_KIND, DateRange, ExistingSchedule
from voice_admin.platform.clients.base import ApiClient
from voice_admin.platform.clients.exceptions import AdminProtocolError

SCHEDULES_PATH = "/Teams.VoiceApps/schedules"
APPLICATION_INSTANCES_PATH = "/Teams.VoiceApps/applicationinstances"


@dataclass(frozen=True)
class ResourceAccount:
    object_id: str
    user_principal_name: str
    display_name: str
    application_id: str


class CallingPlatformClient(ApiClient):
    """Client for schedules and resource accounts on the calling platform."""

    def list_schedules(self) -> list[ExistingSchedule]:
        """List every schedule configured on the tenant, in platform order."""
        payload = self._request("GET", SCHEDULES_PATH)
        items = payload.get("value", []) if isinstance(payload, dict) else payload
        if not isinstance(items, list):
            raise AdminProtocolError("schedule listing is not a list", url=self._url(SCHEDULES_PATH))
        return [parse_schedule(item) for item in items]

    def create_fixed_schedule(self, name: str, ranges: Sequence[DateRange]) -> ExistingSchedule:
        """Create a fixed schedule.

        Raises:
            AdminConflictError: If a schedule with the same name already exists.
        """
        body = {
            "Name": name,
            "Type": FIXED_SCHEDULE_KIND,
            "FixedSchedule": {"DateTimeRanges": [r.to_api() for r in ranges]},
        }
        payload = self._request("POST", SCHEDULES_PATH, json=body)
        if isinstance(payload, dict):
            return parse_schedule(payload)
        return ExistingSchedule(id="", name=name, date_ranges=tuple(ranges))

    def update_schedule_ranges(self, schedule: ExistingSchedule, ranges: Sequence[DateRange]) -> None:
        """Replace the date ranges of an existing schedule, addressed by ID."""
        body = {
            "Id": schedule.id,
            "Name": schedule.name,
            "Type": schedule.kind,
            "FixedSchedule": {"DateTimeRanges": [r.to_api() for r in ranges]},
        }
        self._request("PUT", f"{SCHEDULES_PATH}/{schedule.id}", json=body)

    def create_resource_account(
        self,
        user_principal_name: str,
        display_name: str,
        application_id: str,
    ) -> ResourceAccount:
        """Create an application-backed resource account.

        Raises:
            AdminConflictError: If the principal name is already taken.
        """
        body = {
            "UserPrincipalName": user_principal_name,
            "DisplayName": display_name,
            "ApplicationId": application_id,
        }
        payload = self._request("POST", APPLICATION_INSTANCES_PATH, json=body) or {}
        object_id = payload.get("ObjectId") or payload.get("Id")
        if not object_id:
            raise AdminProtocolError(
                "created resource account carried no object ID",
                url=self._url(APPLICATION_INSTANCES_PATH),
            )
        return ResourceAccount(
            object_id=object_id,
            user_principal_name=payload.get("UserPrincipalName", user_principal_name),
            display_name=payload.get("DisplayName", display_name),
            application_id=payload.get("ApplicationId", application_id),
        )


def parse_schedule(item: dict[str, Any]) -> ExistingSchedule:
    """Build an ExistingSchedule from a platform schedule object."""
    try:
        fixed = item.get("FixedSchedule") or {}
        ranges = tuple(
            DateRange.parse(r["Start"], r["End"]) for r in fixed.get("DateTimeRanges") or []
        )
        return ExistingSchedule(
            id=str(item["Id"]),
            name=item["Name"],
            kind=item.get("Type", FIXED_SCHEDULE_KIND),
            date_ranges=ranges,
        )
    except (KeyError, TypeError, ValueError) as e:
        raise AdminProtocolError(f"malformed schedule object: {e}") from e
