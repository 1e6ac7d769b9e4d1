from __future__ import annotations

import logging
from functools import wraps

from flask import jsonify

from ..core.exceptions import BreakOverLimitError, NotFoundError, StorageError, ValidationError

logger = logging.getLogger(__name__)


def json_error(message: str, status: int, **extra):
    body = {"success": False, "message": message}
    body.update(extra)
    return jsonify(body), status


def api_errors(view):
    """Map domain exceptions to JSON error responses."""

    @wraps(view)
    def wrapper(*args, **kwargs):
        try:
            return view(*args, **kwargs)
        except NotFoundError as e:
            return json_error(str(e), 404)
        except ValidationError as e:
            return json_error(str(e), 400)
        except BreakOverLimitError as e:
            return json_error(
                str(e),
                409,
                requires_confirmation=True,
                duration_minutes=e.duration_minutes,
                limit_minutes=e.limit_minutes,
            )
        except StorageError as e:
            logger.error("Storage failure in %s: %s", view.__name__, e)
            return json_error("Storage is unavailable, please retry", 503)

    return wrapper
