"""Keyword-matched draft templates.

An offline generator for when no model is configured: the case
description is matched against a few keyword groups and a canned task
tree is returned. Team-neutral templates take the team the case was
opened for.
"""

import asyncio
import logging

from caseflow.domain.review import GeneratedTask

logger = logging.getLogger(__name__)


def _task(title: str, team: str | None = None, description: str | None = None,
          subtasks: list[GeneratedTask] | None = None) -> GeneratedTask:
    return GeneratedTask(title=title, team=team, description=description, subtasks=subtasks or [])


def _plumbing(team: str | None) -> list[GeneratedTask]:
    return [
        _task(
            "Emergency inspection and assessment",
            team,
            "Assess the leak and the extent of water damage",
            [
                _task("Check the unit above for plumbing issues", team),
                _task("Document the damage with photos", team),
            ],
        ),
        _task("Shut off the water supply if needed", team),
        _task("Schedule a licensed plumber", team),
        _task("Inform the guest about the repair timeline", "GUEST_COMM_DE"),
    ]


def _electrical(team: str | None) -> list[GeneratedTask]:
    return [
        _task(
            "Assess the electrical fault",
            team,
            subtasks=[
                _task("Check the breaker panel", team),
                _task("Identify affected rooms and outlets", team),
            ],
        ),
        _task("Dispatch a certified electrician", team),
        _task("Confirm power is restored with the guest", "GUEST_COMM_DE"),
    ]


def _hvac(team: str | None) -> list[GeneratedTask]:
    return [
        _task(
            "Diagnose the heating/cooling issue",
            team,
            subtasks=[
                _task("Check thermostat settings and batteries", team),
                _task("Inspect filters and vents", team),
            ],
        ),
        _task("Book an HVAC technician", team),
        _task("Offer the guest a temporary heater or fan", "GUEST_EXPERIENCE"),
    ]


def _cleaning(team: str | None) -> list[GeneratedTask]:
    return [
        _task("Review the cleaning checklist for the unit", team),
        _task(
            "Schedule a re-clean",
            team,
            subtasks=[_task("Confirm housekeeper availability", team)],
        ),
        _task("Apologize to the guest and confirm the re-clean time", "GUEST_COMM_DE"),
    ]


def _repair(team: str | None) -> list[GeneratedTask]:
    return [
        _task(
            "Assess the damage",
            team,
            subtasks=[
                _task("Collect photos from the guest or cleaner", team),
                _task("Estimate repair cost", "FINOPS"),
            ],
        ),
        _task("Order the repair", team),
        _task("Decide on a damage claim", "FINOPS"),
    ]


def _guest_comm(team: str | None) -> list[GeneratedTask]:
    return [
        _task("Reply to the guest within one hour", team or "GUEST_COMM_DE"),
        _task(
            "Investigate the complaint",
            team,
            subtasks=[_task("Check reservation notes and history", team)],
        ),
        _task("Propose a goodwill gesture if justified", "GUEST_EXPERIENCE"),
    ]


def _wifi(team: str | None) -> list[GeneratedTask]:
    return [
        _task(
            "Validate issue",
            "PROPERTY_MANAGEMENT_DE",
            subtasks=[
                _task("Verify case validity", "PROPERTY_MANAGEMENT_DE"),
                _task("Open a maintenance ticket", "PROPERTY_MANAGEMENT_DE"),
            ],
        ),
        _task("Troubleshoot and fix the WiFi", "PROPERTY_MANAGEMENT_DE"),
        _task("Send a resolution confirmation to the guest", "GUEST_COMM_DE"),
    ]


# Checked in order; the first group with a keyword in the description wins.
TEMPLATES = [
    (("plumbing", "pipe", "leak"), _plumbing),
    (("electrical", "power", "light"), _electrical),
    (("hvac", "heating", "cooling", "air condition"), _hvac),
    (("cleaning", "housekeeping"), _cleaning),
    (("damage", "repair", "broken"), _repair),
    (("guest", "complaint", "communication"), _guest_comm),
]


class TemplateTaskGenerator:
    """Offline generator returning canned drafts by keyword.

    Args:
        delay: Seconds to wait before answering, to mimic a model call.
    """

    def __init__(self, delay: float = 0.0) -> None:
        self._delay = delay

    async def generate(
        self,
        description: str,
        title: str = "",
        team: str | None = None,
    ) -> list[GeneratedTask]:
        if self._delay:
            await asyncio.sleep(self._delay)

        text = description.lower()
        for keywords, build in TEMPLATES:
            if any(k in text for k in keywords):
                logger.debug(f"Template '{build.__name__.lstrip('_')}' matched")
                return build(team)
        return _wifi(team)
