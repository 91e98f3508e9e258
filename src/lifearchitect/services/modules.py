"""Module registry: the static catalog of feature modules and its seeding."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Iterable

from ..domain.repositories import ModuleRepository
from ..errors import ConflictError
from ..logging_config import get_logger
from ..models.module import Module

logger = get_logger(__name__)

DASHBOARD_WIDGETS = ["goals", "habits", "activities", "mood", "journal", "calendar"]


@dataclass(frozen=True, slots=True)
class ModuleSpec:
    name: str
    title: str
    description: str
    icon: str
    display_order: int
    is_system: bool = True
    default_settings: dict[str, Any] = field(default_factory=dict)

    def to_model(self) -> Module:
        return Module(
            name=self.name,
            title=self.title,
            description=self.description,
            icon=self.icon,
            is_system=self.is_system,
            display_order=self.display_order,
            default_settings=dict(self.default_settings),
        )


DEFAULT_MODULES: tuple[ModuleSpec, ...] = (
    ModuleSpec(
        "dashboard",
        "Dashboard",
        "Overview of your personal development journey",
        "LayoutDashboard",
        1,
        default_settings={"widgets": list(DASHBOARD_WIDGETS)},
    ),
    ModuleSpec("principles", "Core Principles", "Define your core values and guiding principles", "Heart", 2),
    ModuleSpec("goals", "Goals", "Track and manage your short and long-term goals", "Target", 3),
    ModuleSpec("projects", "Passions & Projects", "Manage complex projects with multiple tasks", "FolderGit2", 4),
    ModuleSpec(
        "habits",
        "Habits & Rituals",
        "Build and maintain positive daily routines",
        "Repeat",
        5,
        default_settings={"reminderTime": None},
    ),
    ModuleSpec("activities", "Activities", "Organize tasks using the Eisenhower matrix", "ListTodo", 6),
    ModuleSpec(
        "challenges",
        "Challenges & Solutions",
        "Space for identifying challenges and developing solutions",
        "Lightbulb",
        7,
    ),
    ModuleSpec(
        "journal",
        "Self-Analysis (Journal)",
        "Document your thoughts and reflections",
        "BookOpen",
        8,
        default_settings={"reminderTime": None},
    ),
    ModuleSpec(
        "analytics",
        "Analytics",
        "Insights and visualizations of your progress",
        "BarChart3",
        9,
        default_settings={"defaultTimeRange": "month"},
    ),
    ModuleSpec("social", "Social Interactions", "Track and manage social connections and events", "Users", 10),
    ModuleSpec("mood", "Mood", "Track your emotional well-being over time", "Smile", 11),
    ModuleSpec("calendar", "Calendar", "Plan and visualize your schedule", "Calendar", 12),
    ModuleSpec("settings", "Settings", "Choose which modules are visible and configure them", "Settings", 13),
)


def list_modules(repo: ModuleRepository) -> list[Module]:
    """Return the catalog ordered by display order, then name."""

    return repo.list_all()


def seed_modules(repo: ModuleRepository, catalog: Iterable[ModuleSpec] = DEFAULT_MODULES) -> int:
    """Insert catalog modules, skipping names that already exist.

    Returns the number of modules inserted.
    """

    inserted = 0
    for spec in catalog:
        try:
            repo.create(spec.to_model())
        except ConflictError:
            logger.debug("Module already exists", extra={"module_name": spec.name})
            continue
        inserted += 1
        logger.info("Inserted module", extra={"module_name": spec.name})
    return inserted


__all__ = ["DEFAULT_MODULES", "ModuleSpec", "list_modules", "seed_modules"]
