"""Health and clock endpoints."""

from __future__ import annotations

import time
from datetime import datetime, timezone

from flask import Blueprint, jsonify

bp = Blueprint("system", __name__, url_prefix="/api")

_STARTED = time.monotonic()


@bp.get("/health")
def health():
    return jsonify(
        {
            "status": "ok",
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "uptime": round(time.monotonic() - _STARTED, 3),
        }
    )


@bp.get("/current-date")
def current_date():
    return jsonify({"date": datetime.now(timezone.utc).isoformat()})


__all__ = ["bp"]
