"""Service layer modules."""

__all__ = ["auth", "gate", "habits", "modules", "settings"]
