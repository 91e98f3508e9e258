"""User settings routes."""

from __future__ import annotations

from flask import jsonify, request

from ...errors import NotFoundError
from ...extensions import module_repository, settings_repository
from ...schemas import UserSettingOut, dump, dump_many, parse_payload
from ...security import current_user_id, login_required
from ...services import settings as settings_service
from . import bp
from .forms import UserSettingCreateForm, UserSettingUpdateForm


@bp.get("")
@login_required
def list_settings():
    records = settings_repository().list_for_user(user_id=current_user_id())
    return jsonify(dump_many(UserSettingOut, records))


@bp.get("/<module_name>")
@login_required
def get_setting(module_name: str):
    record = settings_repository().get_by_module_name(module_name, user_id=current_user_id())
    if record is None:
        raise NotFoundError("Setting not found for this module")
    return jsonify(dump(UserSettingOut, record))


@bp.post("")
@login_required
def create_setting():
    user_id = current_user_id()
    form = parse_payload(UserSettingCreateForm, request.get_json(silent=True), "Invalid user setting data")
    module = settings_service.resolve_module(
        module_repository(), module_id=form.module_id, module_name=form.module_name
    )
    record = settings_service.create_user_setting(
        user_id,
        module,
        settings=settings_repository(),
        enabled=form.enabled,
        display_order=form.display_order,
        blob=form.settings,
    )
    return jsonify(dump(UserSettingOut, record)), 201


@bp.patch("/<int:setting_id>")
@login_required
def update_setting(setting_id: int):
    user_id = current_user_id()
    repo = settings_repository()
    # Ownership before validation so foreign ids never leak a 400
    if repo.get(setting_id, user_id=user_id) is None:
        raise NotFoundError("Setting not found or does not belong to user")
    # An empty body changes nothing but still refreshes updatedAt
    payload = request.get_json(silent=True) if request.get_data() else {}
    form = parse_payload(UserSettingUpdateForm, payload, "Invalid user setting data")
    record = settings_service.update_user_setting(
        setting_id,
        user_id,
        settings=repo,
        enabled=form.enabled,
        blob=form.settings,
        display_order=form.display_order,
    )
    return jsonify(dump(UserSettingOut, record))


@bp.delete("/<int:setting_id>")
@login_required
def delete_setting(setting_id: int):
    settings_service.delete_user_setting(setting_id, current_user_id(), settings=settings_repository())
    return jsonify({"message": "User setting deleted successfully"})
