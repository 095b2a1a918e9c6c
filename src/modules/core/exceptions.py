"""Project-wide DRF exception handler.

DRF's own exceptions (validation, authentication, permission, 404) keep
their default bodies.  Anything else is an internal error: the traceback
goes to the log, the transaction is rolled back, and the client receives
a generic 500 without details.
"""

from __future__ import annotations

from typing import Any, Optional

import structlog
from rest_framework import status
from rest_framework.response import Response
from rest_framework.views import exception_handler, set_rollback

logger = structlog.get_logger(__name__)

INTERNAL_ERROR_DETAIL = "Internal server error"


def api_exception_handler(exc: Exception, context: dict[str, Any]) -> Optional[Response]:
    response = exception_handler(exc, context)
    if response is not None:
        return response

    view = context.get("view")
    logger.error(
        "api.unhandled_exception",
        view=type(view).__name__ if view is not None else None,
        action=getattr(view, "action", None),
        error=repr(exc),
        exc_info=exc,
    )
    set_rollback()
    return Response(
        {"detail": INTERNAL_ERROR_DETAIL},
        status=status.HTTP_500_INTERNAL_SERVER_ERROR,
    )
