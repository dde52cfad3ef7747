from typing import Annotated, Any
import logging

from pydantic import Field

from core.errors import UnexpectedResponseError  # type: ignore
from core.models import HolidayQuota, NextHoliday, StaffSummary, WorkedTogether  # type: ignore
from utils import FreispaceClient, ensure_payload, get_endpoint, parse_payload, require_argument  # type: ignore
from utils.formatting import (  # type: ignore
    days_until,
    divide,
    format_fixed,
    format_value,
    is_blank,
    parse_date,
    plural,
    raw_json_block,
    utcnow,
)

logger = logging.getLogger(__name__)


def _staff_block(staff: StaffSummary) -> str:
    text = "**Staff Member:**\n"
    text += f"- Name: {format_value(staff.display_name)}\n"
    text += f"- Title: {format_value(staff.title)}\n"
    text += f"- ID: {format_value(staff.id)}\n"
    if not is_blank(staff.number):
        text += f"- Number: {staff.number}\n"
    return text + "\n"


def render_staff_directory(data: Any) -> str:
    text = "# Staff Directory\n\n"

    staffs = None
    if isinstance(data, list) and data:
        try:
            staffs = parse_payload(list[StaffSummary], data)
        except UnexpectedResponseError:
            logger.warning("Unrecognized staff directory entries, rendering raw data")

    if not staffs:
        text += "**No staff members found or unexpected data format.**\n\n"
        if data:
            text += raw_json_block(data)
        return text

    text += f"**Total Staff Members: {len(staffs)}**\n\n"
    text += "**Staff List:**\n\n"
    for index, staff in enumerate(staffs, start=1):
        text += f"{index}. **{staff.display_name or 'Unknown'}**\n"
        text += f"   - Title: {staff.title or 'N/A'}\n"
        if not is_blank(staff.number):
            text += f"   - Number: {staff.number}\n"
        text += f"   - ID: {format_value(staff.id)}\n"
        text += "\n"

    title_counts: dict[str, int] = {}
    for staff in staffs:
        title = staff.title or "No Title"
        title_counts[title] = title_counts.get(title, 0) + 1

    text += "**Role Distribution:**\n\n"
    ranked = sorted(title_counts.items(), key=lambda item: item[1], reverse=True)
    for index, (title, count) in enumerate(ranked, start=1):
        text += f"{index}. {title}: {count} {plural(count, 'staff member')}\n"
    return text


def render_worked_together(data: Any, name: str) -> str:
    report = parse_payload(WorkedTogether, data)
    target = report.target_staff
    text = f"# Collaboration Report for {(target and target.display_name) or name}\n\n"

    if target:
        text += "**Staff Details:**\n"
        text += f"- Name: {format_value(target.display_name)}\n"
        text += f"- Title: {format_value(target.title)}\n"
        text += f"- Number: {target.number or 'N/A'}\n\n"

    if report.summary:
        summary = report.summary
        text += "**Collaboration Summary:**\n"
        text += f"- Total Collaborations: {format_value(summary.total_collaborations)}\n"
        text += f"- Unique Colleagues: {format_value(summary.unique_colleagues)}\n"
        text += f"- Bookings Involved: {format_value(summary.bookings_involved)}\n"
        text += f"- Projects Involved: {format_value(summary.projects_involved)}\n\n"

    if report.colleagues:
        text += "**Colleagues Worked With:**\n"
        for index, colleague in enumerate(report.colleagues, start=1):
            text += f"\n{index}. **{format_value(colleague.display_name)}** ({format_value(colleague.title)})\n"
            if colleague.bookings:
                text += f"   Shared Bookings ({len(colleague.bookings)}):\n"
                for booking in colleague.bookings:
                    text += f"   - {format_value(booking.name)} ({format_value(booking.duration)})\n"
            if colleague.projects:
                text += f"   Shared Projects ({len(colleague.projects)}):\n"
                for project in colleague.projects:
                    number = f" (#{project.number})" if project.number else ""
                    text += f"   - {format_value(project.name)}{number}\n"
    return text


def render_next_holiday(data: Any, now=None) -> str:
    holiday = parse_payload(NextHoliday, data)
    now = now or utcnow()
    text = "# Next Holiday Information\n\n"

    if holiday.staff:
        text += _staff_block(holiday.staff)

    text += "**Holiday Details:**\n"
    text += f"- Start Date: {format_value(holiday.start)}\n"
    text += f"- End Date: {format_value(holiday.end)}\n"
    text += f"- Duration: {format_value(holiday.length)} {plural(holiday.length, 'day')}\n"
    if not is_blank(holiday.comment):
        text += f"- Comment: {holiday.comment}\n"

    start = parse_date(holiday.start)
    # an unparseable start is treated as past and falls through to the end date
    until_start = days_until(start, now) if start is not None else None
    if until_start is not None and until_start > 0:
        text += f"- Days until holiday: {until_start}\n"
    elif until_start == 0:
        text += "- Holiday starts today!\n"
    else:
        end = parse_date(holiday.end)
        until_end = days_until(end, now) if end is not None else None
        if until_end is not None and until_end >= 0:
            text += f"- Currently on holiday (ends in {until_end + 1} {plural(until_end + 1, 'day')})\n"
        else:
            text += "- This holiday has already ended\n"
    return text


def render_holiday_quota(data: Any) -> str:
    quota = parse_payload(HolidayQuota, data)
    year = format_value(quota.year)
    text = "# Holiday Quota Information\n\n"

    if quota.staff:
        text += _staff_block(quota.staff)

    text += f"**Holiday Quota for {year}:**\n"
    text += f"- Total Quota: {format_value(quota.quota_total)} days\n"
    text += f"- Days Taken: {format_value(quota.taken)} days\n"
    text += f"- Days Remaining: {format_value(quota.left)} days\n"

    usage = divide(quota.taken, quota.quota_total) * 100
    text += f"- Usage: {format_fixed(usage, 1)}% of quota used\n"

    left = quota.left
    if left == 0:
        text += f"\n⚠️ **Warning:** No holiday days remaining for {year}!\n"
    elif left is not None and left <= 5:
        text += f"\n⚠️ **Notice:** Only {format_value(left)} holiday days remaining for {year}.\n"
    else:
        text += f"\n✅ **Status:** {format_value(left)} holiday days available for planning.\n"
    return text


async def staffs_query(client: FreispaceClient) -> str:
    """List every staff member with title, number and role distribution."""
    try:
        response = await client.get(get_endpoint("get-staffs"))
        return render_staff_directory(ensure_payload(response))
    except Exception:
        logger.exception("Error executing staffs query tool")
        raise


async def staffs_worked_together_query(
    client: FreispaceClient,
    name: Annotated[str, Field(description="The name of the staff member to query collaboration data for")],
) -> str:
    """Collaboration report for one staff member."""
    try:
        require_argument(name, "Staff name is required")
        response = await client.get(get_endpoint("get-staffs-worked-together", name=name))
        return render_worked_together(ensure_payload(response), name)
    except Exception:
        logger.exception("Error executing staffs worked together tool")
        raise


async def staffs_next_holidays_query(
    client: FreispaceClient,
    name: Annotated[
        str | None,
        Field(description="The name of the staff member to query holiday data for. If not provided, uses the assigned staff of the user."),
    ] = None,
) -> str:
    """Next upcoming holiday of a staff member, or of the user's assigned staff."""
    try:
        response = await client.get(get_endpoint("get-staffs-next-holidays", name=name))
        return render_next_holiday(ensure_payload(response))
    except Exception:
        logger.exception("Error executing staffs next holidays tool")
        raise


async def staffs_holidays_left_query(
    client: FreispaceClient,
    name: Annotated[
        str | None,
        Field(description="The name of the staff member to query holiday quota for. If not provided, uses the assigned staff of the user."),
    ] = None,
    year: Annotated[
        int | None,
        Field(description="The year to query holiday quota for. If not provided, uses the current year."),
    ] = None,
) -> str:
    """Remaining holiday quota of a staff member for a year."""
    try:
        # a zero year is treated as absent
        response = await client.get(get_endpoint("get-staffs-left-holidays", year=year or None, name=name))
        return render_holiday_quota(ensure_payload(response))
    except Exception:
        logger.exception("Error executing staffs holidays left tool")
        raise


STAFFS_DESCRIPTION = """
Use this tool to retrieve a comprehensive list of all staff members in the organization, including:

- Complete staff directory with all employees
- Individual staff member details (name, title, number, ID)
- Organizational structure and role distribution

Use it when users ask "/staff", "Who are the staff members?", "List all employees",
"What roles do we have in the company?", or look for people without knowing their exact names.
"""

WORKED_TOGETHER_DESCRIPTION = """
Use this tool to find detailed collaboration information for a specific staff member:

- Target staff member details (name, title, number)
- Collaboration summary (total collaborations, unique colleagues, bookings, projects)
- Colleagues they've worked with, with the shared bookings and projects

Useful for analyzing working relationships, team dynamics and project participation.
Provide the staff member's name to get their complete collaboration profile.
"""

NEXT_HOLIDAYS_DESCRIPTION = """
Use this tool to get the next upcoming holiday of a staff member:

- Staff member details (name, title, ID, number)
- Holiday start and end dates, duration in days and comments
- How many days remain until the holiday, or whether it is in progress

If no name is provided, the tool returns the next holiday of the user's assigned staff.
Useful for planning project timelines and resource allocation around absences.
"""

HOLIDAYS_LEFT_DESCRIPTION = """
Use this tool to get the remaining holiday quota of a staff member:

- Staff member details (name, title, ID, number)
- Year being queried
- Holidays taken so far, total quota and remaining days

If no name is provided, the tool uses the user's assigned staff.
If no year is provided, the current year is used.
Useful for checking how many days someone has left and planning holiday requests.
"""


def get_tools() -> dict[str, Any]:
    return {
        "staffs_query": {
            "func": staffs_query,
            "title": "Staff directory",
            "description": STAFFS_DESCRIPTION,
        },
        "staffs_worked_together_query": {
            "func": staffs_worked_together_query,
            "title": "Staff collaborations",
            "description": WORKED_TOGETHER_DESCRIPTION,
        },
        "staffs_next_holidays_query": {
            "func": staffs_next_holidays_query,
            "title": "Next staff holiday",
            "description": NEXT_HOLIDAYS_DESCRIPTION,
        },
        "staffs_holidays_left_query": {
            "func": staffs_holidays_left_query,
            "title": "Remaining holiday quota",
            "description": HOLIDAYS_LEFT_DESCRIPTION,
        },
    }
