"""Response shapes of the freispace analytics endpoints.

Every field is optional because the backend omits what it does not know.
Unknown fields are ignored. A payload that fails validation is reported as
an UnexpectedResponseError by `utils.response_utils.parse_payload`.
"""
from typing import Any

from pydantic import BaseModel, ConfigDict

Identifier = int | str
Number = int | float


class ResponseModel(BaseModel):
    model_config = ConfigDict(extra="ignore")


class StaffSummary(ResponseModel):
    id: Identifier | None = None
    display_name: str | None = None
    title: str | None = None
    number: Identifier | None = None


# get-staffs-next-holidays
class NextHoliday(ResponseModel):
    staff: StaffSummary | None = None
    start: str | None = None
    end: str | None = None
    length: Number | None = None
    comment: str | None = None


# get-staffs-left-holidays
class HolidayQuota(ResponseModel):
    staff: StaffSummary | None = None
    year: Identifier | None = None
    quota_total: Number | None = None
    taken: Number | None = None
    left: Number | None = None


# get-staffs-worked-together
class SharedBooking(ResponseModel):
    name: str | None = None
    duration: Number | str | None = None


class SharedProject(ResponseModel):
    name: str | None = None
    number: Identifier | None = None


class Colleague(ResponseModel):
    display_name: str | None = None
    title: str | None = None
    bookings: list[SharedBooking] | None = None
    projects: list[SharedProject] | None = None


class CollaborationSummary(ResponseModel):
    total_collaborations: Number | None = None
    unique_colleagues: Number | None = None
    bookings_involved: Number | None = None
    projects_involved: Number | None = None


class WorkedTogether(ResponseModel):
    target_staff: StaffSummary | None = None
    summary: CollaborationSummary | None = None
    colleagues: list[Colleague] | None = None


# get-project-stats
class ProjectInfo(ResponseModel):
    name: str | None = None
    number: Identifier | None = None
    byline: str | None = None
    description: str | None = None


class BookingStats(ResponseModel):
    number: Number | None = None
    percentage: Number | None = None
    by_status: dict[str, Any] | list[Any] | None = None


class ProjectStats(ResponseModel):
    project: ProjectInfo | None = None
    bookings_past: BookingStats | None = None
    bookings_future: BookingStats | None = None


# get-staff-projects
class StaffProject(ResponseModel):
    id: Identifier | None = None
    name: str | None = None
    number: Identifier | None = None
    timeframe: str | None = None
    start: str | None = None
    end: str | None = None
    duration_days: Number | None = None


# get-entities-by-name
class Entity(ResponseModel):
    id: Identifier | None = None
    name: str | None = None
    title: str | None = None
    number: Identifier | None = None


class EntityGroup(ResponseModel):
    amount: Number | None = None
    items: list[Entity] | None = None


class EntitySearch(ResponseModel):
    suites: EntityGroup | None = None
    resources: EntityGroup | None = None
    staffs: EntityGroup | None = None


# get-staffs-worked-on-project
class ProjectTeamMember(ResponseModel):
    name: str | None = None
    title: str | None = None
    amount_bookings: Number | None = None
