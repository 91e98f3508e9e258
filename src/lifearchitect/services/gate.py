"""Module gate: turn a user's settings into an allow/deny decision."""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from typing import Any, Optional

# Landing and settings screens stay reachable so a user can always re-enable
# everything else.
ALWAYS_ENABLED_MODULES: frozenset[str] = frozenset({"dashboard", "settings"})


def _field(record: Any, *names: str) -> Any:
    """Read the first present attribute/key from an ORM row, record or dict."""

    for name in names:
        if isinstance(record, Mapping):
            if name in record:
                return record[name]
        elif hasattr(record, name):
            return getattr(record, name)
    return None


def find_module_setting(user_settings: Optional[Iterable[Any]], module_name: str) -> Any:
    """Return the settings record for ``module_name`` or ``None``."""

    if user_settings is None:
        return None
    for record in user_settings:
        if _field(record, "module_name", "moduleName") == module_name:
            return record
    return None


def is_module_enabled(
    user_settings: Optional[Iterable[Any]],
    module_name: str,
    *,
    always_enabled: frozenset[str] = ALWAYS_ENABLED_MODULES,
) -> bool:
    """Decide whether ``module_name`` is visible for the given settings.

    ``user_settings`` is ``None`` while settings have not been loaded; that
    state allows everything. Once loaded, a module with no record is hidden.
    """

    if module_name in always_enabled:
        return True
    if user_settings is None:
        return True
    try:
        record = find_module_setting(user_settings, module_name)
    except TypeError:
        return False
    if record is None:
        return False
    return bool(_field(record, "enabled", "isEnabled"))


def module_setting(user_settings: Optional[Iterable[Any]], module_name: str, key: str) -> Any:
    """Read one key from a module's settings blob, ``None`` when absent."""

    record = find_module_setting(user_settings, module_name)
    if record is None:
        return None
    blob = _field(record, "settings")
    if not isinstance(blob, Mapping):
        return None
    return blob.get(key)


__all__ = ["ALWAYS_ENABLED_MODULES", "find_module_setting", "is_module_enabled", "module_setting"]
