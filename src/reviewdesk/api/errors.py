"""HTTP mapping for reviewdesk workflow errors.

Protean's own exceptions (ValidationError → 400, ObjectNotFoundError → 404)
are handled by ``protean.integrations.fastapi.register_exception_handlers``.
"""

import structlog
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from reviewdesk.exceptions import ReviewDeskError

logger = structlog.get_logger(__name__)

STATUS_BY_CATEGORY = {
    "conflict": 409,
    "not_found": 404,
    "forbidden": 403,
    "platform": 502,
}


async def reviewdesk_error_handler(request: Request, exc: ReviewDeskError) -> JSONResponse:
    status_code = STATUS_BY_CATEGORY.get(exc.category, 500)
    logger.info(
        "Request rejected",
        path=request.url.path,
        error=exc.__class__.__name__,
        status_code=status_code,
    )
    return JSONResponse(status_code=status_code, content=exc.to_dict())


def register_error_handlers(app: FastAPI) -> None:
    app.add_exception_handler(ReviewDeskError, reviewdesk_error_handler)
