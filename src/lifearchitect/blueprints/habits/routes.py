"""Habit and habit entry routes."""

from __future__ import annotations

from datetime import date, datetime
from typing import Optional

from flask import jsonify, request

from ...errors import InvalidPayloadError, NotFoundError
from ...extensions import app_config, habit_repository
from ...schemas import HabitEntryOut, HabitOut, dump, dump_many, parse_payload
from ...security import current_user_id, login_required, module_required
from ...services import habits as habit_service
from . import bp
from .forms import HabitEntryForm, HabitForm, HabitUpdateForm


def _parse_day(raw: Optional[str]) -> Optional[date]:
    """Accept ``YYYY-MM-DD`` or a full ISO timestamp; aware values are read in local time."""

    if not raw:
        return None
    try:
        return date.fromisoformat(raw)
    except ValueError:
        pass
    try:
        moment = datetime.fromisoformat(raw.replace("Z", "+00:00"))
    except ValueError as exc:
        raise InvalidPayloadError("Invalid date", [{"loc": ["date"], "msg": str(exc)}]) from exc
    if moment.tzinfo is not None:
        tz = app_config().local_timezone()
        moment = moment.astimezone(tz) if tz is not None else moment.astimezone()
    return moment.date()


@bp.get("/habits")
@login_required
@module_required("habits")
def list_habits():
    habits = habit_service.list_habits(habit_repository(), current_user_id())
    return jsonify(dump_many(HabitOut, habits))


@bp.post("/habits")
@login_required
@module_required("habits")
def create_habit():
    form = parse_payload(HabitForm, request.get_json(silent=True), "Invalid habit data")
    habit = habit_service.create_habit(habit_repository(), current_user_id(), form.model_dump())
    return jsonify(dump(HabitOut, habit)), 201


@bp.get("/habits/<int:habit_id>")
@login_required
@module_required("habits")
def get_habit(habit_id: int):
    habit = habit_service.get_habit(habit_repository(), habit_id, current_user_id())
    return jsonify(dump(HabitOut, habit))


@bp.route("/habits/<int:habit_id>", methods=["PUT", "PATCH"])
@login_required
@module_required("habits")
def update_habit(habit_id: int):
    user_id = current_user_id()
    repo = habit_repository()
    habit_service.get_habit(repo, habit_id, user_id)
    form = parse_payload(HabitUpdateForm, request.get_json(silent=True), "Invalid habit data")
    habit = habit_service.update_habit(repo, habit_id, user_id, form.changes())
    return jsonify(dump(HabitOut, habit))


@bp.delete("/habits/<int:habit_id>")
@login_required
@module_required("habits")
def delete_habit(habit_id: int):
    habit_service.delete_habit(habit_repository(), habit_id, current_user_id())
    return jsonify({"message": "Habit deleted successfully"})


@bp.get("/habits/<int:habit_id>/entries")
@login_required
@module_required("habits")
def list_habit_entries(habit_id: int):
    entries = habit_service.list_entries_for_habit(habit_repository(), habit_id, current_user_id())
    return jsonify(dump_many(HabitEntryOut, entries))


@bp.get("/habit-entries")
@login_required
@module_required("habits")
def list_entries():
    day = _parse_day(request.args.get("date"))
    entries = habit_service.list_entries_for_user(
        habit_repository(),
        current_user_id(),
        day=day,
        tz=app_config().local_timezone(),
    )
    return jsonify(dump_many(HabitEntryOut, entries))


@bp.post("/habit-entries")
@login_required
@module_required("habits")
def create_entry():
    form = parse_payload(HabitEntryForm, request.get_json(silent=True), "Invalid habit entry data")
    entry = habit_service.complete_habit(
        habit_repository(),
        form.habit_id,
        current_user_id(),
        notes=form.notes,
        completed_at=form.completed_at,
    )
    return jsonify(dump(HabitEntryOut, entry)), 201


@bp.delete("/habit-entries/<int:entry_id>")
@login_required
@module_required("habits")
def delete_entry(entry_id: int):
    if not habit_service.delete_habit_entry(habit_repository(), entry_id, current_user_id()):
        raise NotFoundError("Habit entry not found")
    return jsonify({"message": "Habit entry deleted successfully"})
