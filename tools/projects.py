from typing import Annotated, Any
import logging

from pydantic import Field

from core.errors import UnexpectedResponseError  # type: ignore
from core.models import BookingStats, Number, ProjectStats, ProjectTeamMember, StaffProject  # type: ignore
from utils import FreispaceClient, ensure_payload, get_endpoint, parse_payload, require_argument  # type: ignore
from utils.formatting import (  # type: ignore
    divide,
    format_value,
    parse_date,
    plural,
    raw_json_block,
    round_half_up,
    utcnow,
)

logger = logging.getLogger(__name__)


def _booking_section(label: str, stats: BookingStats, empty_message: str) -> str:
    text = f"**{label} Bookings:**\n"
    text += f"- Total: {format_value(stats.number)}\n"
    text += f"- Percentage: {format_value(stats.percentage)}%\n"
    breakdown = stats.by_status
    if breakdown:
        # a list breakdown is keyed by position
        entries = breakdown.items() if isinstance(breakdown, dict) else enumerate(breakdown)
        text += "- Status Breakdown:\n"
        for status, count in entries:
            text += f"  - {status}: {format_value(count)}\n"
    else:
        text += f"- Status Breakdown: {empty_message}\n"
    return text + "\n"


def render_project_stats(data: Any, name: str) -> str:
    stats = parse_payload(ProjectStats, data)
    project = stats.project
    text = f"# Project Status Report for {(project and project.name) or name}\n\n"

    if project:
        text += "**Project Details:**\n"
        text += f"- Name: {format_value(project.name)}\n"
        text += f"- Number: {project.number or 'N/A'}\n"
        text += f"- Byline: {project.byline or 'N/A'}\n"
        if project.description:
            text += f"- Description: {project.description}\n"
        text += "\n"

    past, future = stats.bookings_past, stats.bookings_future
    if past:
        text += _booking_section("Past", past, "No past bookings")
    if future:
        text += _booking_section("Future", future, "No future bookings")

    total = ((past and past.number) or 0) + ((future and future.number) or 0)
    if total > 0:
        text += "**Summary:**\n"
        text += f"- Total Bookings: {format_value(total)}\n"
        text += f"- Past Activity: {format_value((past and past.percentage) or 0)}%\n"
        text += f"- Future Activity: {format_value((future and future.percentage) or 0)}%\n"
    return text


def _is_active(project: StaffProject, now) -> bool:
    end = parse_date(project.end)
    return end is not None and end >= now


def render_staff_projects(data: Any, name: str, now=None) -> str:
    projects = data.get("projects") if isinstance(data, dict) else None
    text = f"# Project Assignments for {name}\n\n"

    items = None
    if isinstance(projects, list) and projects:
        try:
            items = parse_payload(list[StaffProject], projects)
        except UnexpectedResponseError:
            logger.warning("Unrecognized staff project entries, rendering raw data")

    if not items:
        text += "**No projects found for this staff member.**\n\n"
        if projects:
            text += raw_json_block(projects)
        return text

    text += f"**Total Projects Assigned: {len(items)}**\n\n"
    text += "**Project List:**\n\n"
    for index, project in enumerate(items, start=1):
        text += f"{index}. **{format_value(project.name)}**\n"
        if project.number:
            text += f"   - Project Number: {project.number}\n"
        text += f"   - Project ID: {format_value(project.id)}\n"
        text += f"   - Timeframe: {format_value(project.timeframe)}\n"
        text += f"   - Start Date: {format_value(project.start)}\n"
        text += f"   - End Date: {format_value(project.end)}\n"
        text += f"   - Duration: {format_value(project.duration_days)} {plural(project.duration_days, 'day')}\n"
        text += "\n"

    now = now or utcnow()
    total_duration = sum(project.duration_days or 0 for project in items)
    active = [project for project in items if _is_active(project, now)]

    text += "**Summary Statistics:**\n"
    text += f"- Total Duration: {format_value(total_duration)} days\n"
    text += f"- Active Projects: {len(active)}\n"
    text += f"- Average Project Duration: {format_value(round_half_up(divide(total_duration, len(items))))} days\n"
    return text


def render_project_team(data: Any, name: str) -> str:
    staffs = data.get("staffs") if isinstance(data, dict) else None
    text = f'# Project Team for "{name}"\n\n'

    members = None
    if isinstance(staffs, list) and staffs:
        try:
            amount_staffs = parse_payload(Number | None, data.get("amount_staffs"))
            members = parse_payload(list[ProjectTeamMember], staffs)
        except UnexpectedResponseError:
            logger.warning("Unrecognized project team entries, rendering raw data")

    if not members:
        text += "**No staff members found for this project.**\n\n"
        if staffs:
            text += raw_json_block(staffs)
        return text

    text += f"**Total Team Members: {format_value(amount_staffs)}**\n\n"
    text += "**Team Members:**\n\n"
    for index, member in enumerate(members, start=1):
        text += f"{index}. **{format_value(member.name)}**\n"
        text += f"   - Title: {member.title or 'N/A'}\n"
        text += f"   - Bookings: {format_value(member.amount_bookings)}\n"
        text += "\n"

    total_bookings = sum(member.amount_bookings or 0 for member in members)
    # unique titles in first-seen order
    titles = list(dict.fromkeys(member.title for member in members))
    average = round_half_up(divide(total_bookings, amount_staffs))

    text += "**Project Summary:**\n"
    text += f"- Total Staff Members: {format_value(amount_staffs)}\n"
    text += f"- Total Bookings: {format_value(total_bookings)}\n"
    text += f"- Unique Roles: {len(titles)}\n"
    text += f"- Average Bookings per Staff: {format_value(average)}\n\n"

    text += "**Role Distribution:**\n"
    for index, title in enumerate(titles, start=1):
        count = sum(1 for member in members if member.title == title)
        text += f"{index}. {format_value(title)}: {count} {plural(count, 'staff member')}\n"
    return text


async def get_project_status(
    client: FreispaceClient,
    name: Annotated[str, Field(description="The name of the project to query status analytics for")],
) -> str:
    """Booking statistics of one project."""
    try:
        require_argument(name, "Project name is required")
        response = await client.get(get_endpoint("get-project-stats", name=name))
        return render_project_stats(ensure_payload(response), name)
    except Exception:
        logger.exception("Error executing get project status tool")
        raise


async def get_staff_projects(
    client: FreispaceClient,
    name: Annotated[str, Field(description="The name of the staff member to query project assignments for")],
) -> str:
    """Projects assigned to one staff member."""
    try:
        require_argument(name, "Staff name is required")
        response = await client.get(get_endpoint("get-staff-projects", name=name))
        return render_staff_projects(ensure_payload(response), name)
    except Exception:
        logger.exception("Error executing get staff projects tool")
        raise


async def get_staffs_worked_on_project(
    client: FreispaceClient,
    name: Annotated[str, Field(description="The name of the project to query for staff members who worked on it")],
) -> str:
    """Staff members booked on one project."""
    try:
        require_argument(name, "Project name is required")
        response = await client.get(get_endpoint("get-staffs-worked-on-project", name=name))
        return render_project_team(ensure_payload(response), name)
    except Exception:
        logger.exception("Error executing get staffs worked on project tool")
        raise


PROJECT_STATUS_DESCRIPTION = """
Use this tool to retrieve project status analytics and statistics:

- Project details (name, number, byline, description)
- Past bookings with status breakdown
- Future bookings with status distribution
- Percentage-based analysis of project activity

Useful for project reports, workload insights and tracking progress through booking status.
Provide the project name to get its analytics.
"""

STAFF_PROJECTS_DESCRIPTION = """
Use this tool to retrieve all projects assigned to a specific staff member:

- Project details (name, number, ID)
- Timeline information (timeframe, start date, end date, duration)
- Total duration, active projects and average project duration

Useful for understanding a staff member's current workload and project portfolio.
Provide the staff member's name to get their project assignments.
"""

WORKED_ON_PROJECT_DESCRIPTION = """
Use this tool to retrieve all staff members who have worked on a specific project:

- Staff members booked on the project with their titles
- Number of bookings each staff member had on the project
- Team composition and role distribution

Useful for identifying a project's team and understanding workload distribution.
Provide the project name to get its team.
"""


def get_tools() -> dict[str, Any]:
    return {
        "get_project_status": {
            "func": get_project_status,
            "title": "Project status",
            "description": PROJECT_STATUS_DESCRIPTION,
        },
        "get_staff_projects": {
            "func": get_staff_projects,
            "title": "Staff projects",
            "description": STAFF_PROJECTS_DESCRIPTION,
        },
        "get_staffs_worked_on_project": {
            "func": get_staffs_worked_on_project,
            "title": "Project team",
            "description": WORKED_ON_PROJECT_DESCRIPTION,
        },
    }
