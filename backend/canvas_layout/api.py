import logging

import httpx
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from canvas_layout import config
from canvas_layout.api_models import ErrorResponse
from canvas_layout.exceptions import InvalidBoardError, NotAuthenticatedError
from canvas_layout.metrics import metrics_endpoint
from canvas_layout.routers import layout

log = logging.getLogger(__name__)


def _error(status_code: int, code: str, message: str) -> JSONResponse:
    body = ErrorResponse(error_code=code, error_message=message)
    return JSONResponse(status_code=status_code, content=body.model_dump())


def create_app() -> FastAPI:
    logging.basicConfig(
        level=config.LOG_LEVEL,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    app = FastAPI(title="Canvas Layout Engine")
    app.include_router(layout.router)
    app.add_api_route("/metrics", metrics_endpoint, methods=["GET"], include_in_schema=False)

    @app.exception_handler(NotAuthenticatedError)
    async def _not_authenticated(request: Request, exc: NotAuthenticatedError):
        return _error(401, "not_authenticated", str(exc))

    @app.exception_handler(InvalidBoardError)
    async def _invalid_board(request: Request, exc: InvalidBoardError):
        return _error(400, "invalid_board", str(exc))

    @app.exception_handler(httpx.HTTPError)
    async def _store_failure(request: Request, exc: httpx.HTTPError):
        log.error("Board store request failed: %s", exc, exc_info=True)
        return _error(502, "board_store_error", "Board store request failed.")

    return app


app = create_app()
