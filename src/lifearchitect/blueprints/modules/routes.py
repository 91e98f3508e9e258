"""Module catalog routes."""

from __future__ import annotations

from flask import jsonify

from ...errors import NotFoundError
from ...extensions import module_repository, settings_repository
from ...schemas import ModuleOut, UserSettingOut, dump, dump_many
from ...security import current_user_id, ensure_module_enabled, login_required
from ...services.modules import list_modules
from . import bp


@bp.get("")
@login_required
def list_catalog():
    return jsonify(dump_many(ModuleOut, list_modules(module_repository())))


@bp.get("/<module_name>")
@login_required
def module_page(module_name: str):
    """Module landing payload; disabled and unknown modules both look missing."""

    ensure_module_enabled(module_name)
    module = module_repository().get_by_name(module_name)
    if module is None:
        raise NotFoundError()
    record = settings_repository().get_by_module_name(module_name, user_id=current_user_id())
    return jsonify(
        {
            "module": dump(ModuleOut, module),
            "setting": dump(UserSettingOut, record) if record else None,
        }
    )
