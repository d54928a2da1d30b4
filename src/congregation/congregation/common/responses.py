from __future__ import annotations

import logging

from flask import jsonify

from ..core.exceptions import DomainError, NotFoundError

log = logging.getLogger(__name__)


def error_response(error: DomainError):
    """JSON body + status for a business rule failure raised by a service."""
    status = 404 if isinstance(error, NotFoundError) else 400
    log.info("request rejected (%s): %s", status, error)
    return jsonify({"success": False, "message": str(error)}), status
