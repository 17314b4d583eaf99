from __future__ import annotations

from flask import request

from .validators import require_mapping


def json_body() -> dict:
    """Parsed JSON object of the current request; a missing or unparseable body reads as ``{}``."""

    data = request.get_json(silent=True)
    if data is None:
        return {}
    return require_mapping(data, "body")
