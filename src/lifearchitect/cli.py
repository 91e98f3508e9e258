"""Flask CLI commands for LifeArchitect."""

from __future__ import annotations

import click

DEMO_HABITS = (
    {
        "title": "Morning Journal",
        "description": "Document thoughts and set intentions for the day",
        "time_of_day": "morning",
        "streak": 5,
        "best_streak": 21,
    },
    {
        "title": "Meditation",
        "description": "Mindfulness practice",
        "time_of_day": "morning",
        "streak": 5,
        "best_streak": 30,
    },
    {
        "title": "Exercise",
        "description": "Physical activity for at least 30 minutes",
        "time_of_day": "evening",
        "streak": 3,
        "best_streak": 14,
    },
    {
        "title": "Reading",
        "description": "Read non-fiction for personal development",
        "time_of_day": "evening",
        "streak": 4,
        "best_streak": 15,
    },
)


def seed_demo(username: str, password: str) -> tuple[int, int]:
    """Create (or reuse) the demo account and give it settings and habits.

    Returns ``(user_id, habits_created)``. Habits are only added for an
    account that has none yet, so the command can be rerun safely.
    """

    from .extensions import get_session_factory, habit_repository, module_repository, settings_repository
    from .services import auth
    from .services import habits as habit_service
    from .services.settings import initialize_user_settings

    session_factory = get_session_factory()
    user = auth.get_user_by_username(username, session_factory)
    if user is None:
        user = auth.create_user(
            username=username,
            password=password,
            name="Demo User",
            session_factory=session_factory,
        )
    user_id = int(user.id)  # type: ignore[arg-type]

    initialize_user_settings(user_id, modules=module_repository(), settings=settings_repository())

    repo = habit_repository()
    created = 0
    if not repo.list_all(user_id=user_id):
        for payload in DEMO_HABITS:
            habit_service.create_habit(repo, user_id, {**payload, "frequency": "daily"})
            created += 1
    return user_id, created


def init_app(app) -> None:
    """Register CLI commands on the Flask app."""

    @app.cli.command("lifearchitect-init")
    def lifearchitect_init() -> None:
        """Create missing tables and seed the module catalog."""

        from .extensions import module_repository
        from .services.modules import list_modules, seed_modules

        inserted = seed_modules(module_repository())
        total = len(list_modules(module_repository()))
        click.echo(f"Database ready: {total} modules ({inserted} newly seeded).")

    @app.cli.command("lifearchitect-seed-demo")
    @click.option("--username", default="demo", show_default=True, help="Demo account username")
    @click.option("--password", default="demo", show_default=True, help="Demo account password")
    def lifearchitect_seed_demo(username: str, password: str) -> None:
        """Create a demo user with module settings and sample habits."""

        user_id, created = seed_demo(username, password)
        click.echo(f"Demo user '{username}' (id={user_id}) ready; {created} habits added.")


__all__ = ["DEMO_HABITS", "init_app", "seed_demo"]
