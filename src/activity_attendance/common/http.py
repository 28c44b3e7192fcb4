from __future__ import annotations

import logging
from functools import wraps
from typing import Any, Dict

from flask import jsonify, request

from ..core.exceptions import ConfigurationError, PersistenceFailure, ValidationError

logger = logging.getLogger(__name__)


def json_body() -> Dict[str, Any]:
    data = request.get_json(silent=True)
    if not isinstance(data, dict):
        raise ValidationError("Dữ liệu gửi lên phải là JSON object")
    return data


def require_field(data: Dict[str, Any], name: str) -> Any:
    value = data.get(name)
    if value is None:
        raise ValidationError(f"Thiếu trường '{name}'")
    return value


def json_errors(view):
    """Map domain errors to {"success": false, "message": ...} responses."""

    @wraps(view)
    def wrapper(*args, **kwargs):
        try:
            return view(*args, **kwargs)
        except ValidationError as e:
            return jsonify({"success": False, "message": str(e)}), 400
        except ConfigurationError as e:
            logger.warning("Configuration error in %s: %s", request.path, e)
            return jsonify({"success": False, "message": str(e)}), 422
        except PersistenceFailure as e:
            logger.error("Persistence failure in %s: %s", request.path, e)
            return jsonify({"success": False, "message": str(e)}), 503

    return wrapper
