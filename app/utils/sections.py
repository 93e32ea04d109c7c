"""Section keys and the lookup that maps a key to its container.

A vision board stores its sections in two containers: the original eight
``sections`` and the newer twenty-key ``strategy_sheet``. Everything outside
this module addresses a section by name only and never needs to know which
container it lives in.
"""
from typing import Any, Optional

from app.errors import ValidationError


LEGACY_CONTAINER = "sections"
STRATEGY_CONTAINER = "strategy_sheet"

LEGACY_SECTION_KEYS = (
    "businessOverview",
    "financialGoals",
    "growthStrategy",
    "productService",
    "systemsToBuild",
    "teamPlan",
    "brandGoals",
    "lifestyleVision",
)

STRATEGY_SHEET_KEYS = (
    "companyOverview",
    "corePurpose",
    "vision",
    "mission",
    "brandPromise",
    "coreValues",
    "bhag",
    "vividDescription",
    "swotAnalysis",
    "strategicPriorities",
    "threeYearStrategy",
    "smartGoals",
    "quarterlyPlan",
    "revenueModel",
    "organizationalStructure",
    "sopRoadmap",
    "automationSystems",
    "kpiDashboard",
    "riskManagement",
    "strategySummary",
)

ALL_SECTION_KEYS = LEGACY_SECTION_KEYS + STRATEGY_SHEET_KEYS

_LEGACY_KEY_SET = frozenset(LEGACY_SECTION_KEYS)
_STRATEGY_KEY_SET = frozenset(STRATEGY_SHEET_KEYS)


def container_for(section_name: str) -> str:
    """
    Return the container field that holds a section.

    Args:
        section_name: Section key, e.g. "teamPlan" or "swotAnalysis"

    Returns:
        "sections" for legacy keys, "strategy_sheet" for strategy keys

    Raises:
        ValidationError: If the key belongs to neither container

    Examples:
        >>> container_for("teamPlan")
        'sections'
        >>> container_for("swotAnalysis")
        'strategy_sheet'
    """
    if section_name in _LEGACY_KEY_SET:
        return LEGACY_CONTAINER
    if section_name in _STRATEGY_KEY_SET:
        return STRATEGY_CONTAINER
    raise ValidationError(f"Invalid section name: {section_name}")


def locate_section(document: dict, section_name: str) -> Optional[dict]:
    """
    Find a section in a stored document.

    Missing containers and missing keys yield None rather than an error, so
    partially migrated documents read as "not filled in".
    """
    container = document.get(container_for(section_name))
    if not isinstance(container, dict):
        return None
    section = container.get(section_name)
    return section if isinstance(section, dict) else None


def empty_section(data: Optional[dict[str, Any]] = None) -> dict:
    """Build an incomplete section around ``data`` (empty object by default)."""
    return {"completed": False, "data": data if data is not None else {}}


def default_sections() -> dict[str, dict]:
    """Scaffold for the legacy container: every key present, nothing filled."""
    return {key: empty_section() for key in LEGACY_SECTION_KEYS}


def default_strategy_sheet() -> dict[str, dict]:
    """Scaffold for the strategy sheet, each key with its empty structured data."""
    # Imported here to keep the models package free to import this module
    from app.models.strategy_sheet import empty_strategy_data

    return {key: empty_section(empty_strategy_data(key)) for key in STRATEGY_SHEET_KEYS}
