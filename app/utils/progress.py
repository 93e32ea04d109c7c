"""Section completion and progress calculations.

Pure functions over stored vision board documents (plain dicts as read from
MongoDB). Nothing here performs I/O, so the same rules serve the save hook,
the read-only progress endpoints and the maintenance scripts.
"""
from typing import Any, NamedTuple, Optional

from app.errors import ValidationError
from app.utils.sections import ALL_SECTION_KEYS, locate_section


class ModuleDefinition(NamedTuple):
    """A UI module and the strategy sheet sections that feed its progress."""

    id: str
    name: str
    section_keys: tuple[str, ...]


MODULES: dict[str, ModuleDefinition] = {
    module.id: module
    for module in (
        ModuleDefinition("targets", "Target Tracker", ("smartGoals", "quarterlyPlan")),
        ModuleDefinition(
            "resources",
            "Resource Management",
            ("organizationalStructure", "sopRoadmap", "automationSystems"),
        ),
        ModuleDefinition(
            "execution",
            "Execution & Risk",
            ("strategicPriorities", "threeYearStrategy", "riskManagement"),
        ),
        ModuleDefinition("financial", "Financial Insights", ("revenueModel", "kpiDashboard")),
        # No sections of its own: reports whole-board progress
        ModuleDefinition("collaboration", "Collaboration Hub", ()),
    )
}


def is_meaningful_content(value: Any) -> bool:
    """
    Check whether a JSON-like value holds anything a user actually entered.

    Blank strings, zero or negative numbers, and containers holding only such
    values do not count. Booleans are not treated as numbers.

    Examples:
        >>> is_meaningful_content({"name": "", "tags": [], "price": 0})
        False
        >>> is_meaningful_content({"risks": [{"risk": "Churn"}]})
        True
    """
    if value is None or isinstance(value, bool):
        return False
    if isinstance(value, str):
        return len(value.strip()) > 0
    if isinstance(value, (int, float)):
        return value > 0
    if isinstance(value, (list, tuple)):
        return any(is_meaningful_content(item) for item in value)
    if isinstance(value, dict):
        return any(is_meaningful_content(item) for item in value.values())
    return False


def is_section_complete(section: Optional[dict]) -> bool:
    """A section is complete when flagged so or when its data has content."""
    if not section:
        return False
    return section.get("completed") is True or is_meaningful_content(section.get("data"))


def percentage(count: int, total: int) -> int:
    """
    Integer percentage rounded half up; 0 when there is nothing to count.

    Examples:
        >>> percentage(1, 8)
        13
        >>> percentage(0, 0)
        0
    """
    if total <= 0:
        return 0
    # floor(100 * count / total + 0.5) without floating point
    return (200 * count + total) // (2 * total)


def recompute_overall_progress(document: dict) -> int:
    """
    Recompute a board's overall progress from its two section containers.

    Every known key is counted whether or not the document stores it, so a
    document missing a container reads as having those sections incomplete.
    """
    completed = sum(
        1 for key in ALL_SECTION_KEYS if is_section_complete(locate_section(document, key))
    )
    return percentage(completed, len(ALL_SECTION_KEYS))


def get_module(module_id: str) -> ModuleDefinition:
    """Look up a module definition, rejecting unknown ids."""
    try:
        return MODULES[module_id]
    except KeyError:
        raise ValidationError(f"Invalid module id: {module_id}") from None


def module_progress(module_id: str, document: dict) -> int:
    """
    Progress of one UI module, derived on demand and never stored.

    Args:
        module_id: One of the MODULES keys
        document: Stored vision board document

    Returns:
        Percentage of the module's sections that are complete, or the board's
        overall progress for modules without mapped sections

    Raises:
        ValidationError: If module_id is unknown
    """
    module = get_module(module_id)
    if not module.section_keys:
        return int(document.get("overall_progress") or 0)

    completed = sum(
        1 for key in module.section_keys if is_section_complete(locate_section(document, key))
    )
    return percentage(completed, len(module.section_keys))


def all_module_progress(document: dict) -> list[dict]:
    """Progress breakdown for every module, in display order."""
    return [
        {
            "module": module.id,
            "name": module.name,
            "sections": list(module.section_keys),
            "progress": module_progress(module.id, document),
        }
        for module in MODULES.values()
    ]
