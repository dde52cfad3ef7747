from typing import Annotated, Any
import logging

from pydantic import Field

from core.models import EntityGroup, EntitySearch  # type: ignore
from utils import FreispaceClient, ensure_payload, get_endpoint, parse_payload, require_argument  # type: ignore
from utils.formatting import format_value  # type: ignore

logger = logging.getLogger(__name__)


def _group_amount(group: EntityGroup) -> Any:
    return group.amount if group.amount is not None else len(group.items or [])


def _entity_section(heading: str, group: EntityGroup | None, with_title: bool = False) -> str:
    if not group or not group.items:
        return ""
    text = f"## {heading} ({format_value(_group_amount(group))})\n\n"
    for index, entity in enumerate(group.items, start=1):
        text += f"{index}. **{format_value(entity.name)}**\n"
        text += f"   - ID: {format_value(entity.id)}\n"
        if with_title:
            text += f"   - Title: {entity.title or 'N/A'}\n"
        if entity.number:
            text += f"   - Number: {entity.number}\n"
        text += "\n"
    return text


def render_entities(data: Any, name: str, available_only: bool = False, booked_only: bool = False) -> str:
    search = parse_payload(EntitySearch, data)
    text = f'# Entity Search Results for "{name}"\n\n'

    if available_only or booked_only:
        text += "**Search Filters Applied:**\n"
        if available_only:
            text += "- Available Only: Yes (showing unbooked entities)\n"
        if booked_only:
            text += "- Booked Only: Yes (showing booked entities)\n"
        text += "\n"

    groups = [
        ("Suites", search.suites, False),
        ("Resources", search.resources, False),
        ("Staff Members", search.staffs, True),
    ]
    total = 0
    for heading, group, with_title in groups:
        section = _entity_section(heading, group, with_title)
        if section:
            text += section
            total += _group_amount(group)

    if total > 0:
        text += "**Search Summary:**\n"
        text += f"- Total Entities Found: {format_value(total)}\n"
        for heading, group, _ in groups:
            if group:
                text += f"- {heading}: {format_value(_group_amount(group))}\n"
    else:
        text += f'**No entities found matching "{name}"**\n'
        if available_only or booked_only:
            text += "Try removing the availability filters to see all matching entities.\n"
    return text


async def get_entities_by_name(
    client: FreispaceClient,
    name: Annotated[str, Field(description="The name or partial name to search for across suites, resources, and staff")],
    available_only: Annotated[
        bool | None,
        Field(description="Filter to show only entities that are currently available (not booked)"),
    ] = None,
    booked_only: Annotated[
        bool | None,
        Field(description="Filter to show only entities that are currently booked (not available)"),
    ] = None,
) -> str:
    """Search suites, resources and staff by name, optionally filtered by availability."""
    try:
        require_argument(name, "Search name is required")
        endpoint = get_endpoint(
            "get-entities-by-name",
            **{"name": name, "available-only": bool(available_only), "booked-only": bool(booked_only)},
        )
        response = await client.get(endpoint)
        return render_entities(ensure_payload(response), name, bool(available_only), bool(booked_only))
    except Exception:
        logger.exception("Error executing get entities by name tool")
        raise


ENTITIES_DESCRIPTION = """
Use this tool to search for suites, resources and staff members by name:

- Suite results (rooms, studios, workspaces)
- Resource results (equipment, licenses, tools)
- Staff results (employees, team members)
- Availability filtering (available only, booked only)

Useful for finding available suites, resources or staff for new bookings and checking
the availability of organizational assets. Requires a name or partial name; the
availability filters are optional.
"""


def get_tools() -> dict[str, Any]:
    return {
        "get_entities_by_name": {
            "func": get_entities_by_name,
            "title": "Search entities by name",
            "description": ENTITIES_DESCRIPTION,
        },
    }
