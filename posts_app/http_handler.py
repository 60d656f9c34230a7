import uuid

import uvicorn
from aws_lambda_powertools import Logger
from aws_lambda_powertools.logging.logger import set_package_logger
from botocore.exceptions import BotoCoreError, ClientError
from fastapi import FastAPI, HTTPException, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.gzip import GZipMiddleware
from fastapi.responses import JSONResponse
from mangum import Mangum

from posts_app import settings
from posts_app.api.v1.api import legacy_router
from posts_app.api.v1.api import router as api_v1_router
from posts_app.middlewares import (
    ERROR_MESSAGE_INTERNAL_SERVER_ERROR,
    X_CORRELATION_ID,
    CorrelationIdMiddleware,
)
from posts_app.models.response import (
    ErrorResponse,
    ValidationErrorResponse,
    error_response,
)

if settings.debug:
    set_package_logger()

logger = Logger(utc=True)

app = FastAPI(debug=settings.debug, title="PostsApplication", version="1.0.0")
app.add_middleware(CorrelationIdMiddleware)
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_allowed_origins,
    allow_methods=["*"],
    allow_headers=["*"],
    expose_headers=[X_CORRELATION_ID],
)
app.add_middleware(GZipMiddleware)
app.include_router(api_v1_router)
app.include_router(legacy_router)

handler = Mangum(app)
handler = logger.inject_lambda_context(handler, clear_state=True, log_event=True)


@app.get("/health", include_in_schema=False)
def health() -> dict[str, str]:
    return {"status": "ok"}


@app.exception_handler(BotoCoreError)
@app.exception_handler(ClientError)
async def botocore_error_handler(
    request: Request, error: BotoCoreError
) -> JSONResponse:
    error_id = uuid.uuid4()
    logger.exception(f"Received botocore error {error_id=}")
    return error_response(
        ErrorResponse(
            status=status.HTTP_500_INTERNAL_SERVER_ERROR,
            id=error_id,
            message=str(error) if settings.debug else ERROR_MESSAGE_INTERNAL_SERVER_ERROR,
        )
    )


@app.exception_handler(HTTPException)
async def http_exception_handler(
    request: Request, error: HTTPException
) -> JSONResponse:
    error_id = uuid.uuid4()
    if error.status_code >= status.HTTP_500_INTERNAL_SERVER_ERROR:
        logger.exception(f"Received http exception {error_id=}")
    else:
        logger.warning(
            f"Received http exception {error_id=} {error.status_code=} {error.detail=}"
        )
    return error_response(
        ErrorResponse(status=error.status_code, id=error_id, message=error.detail)
    )


@app.exception_handler(RequestValidationError)
async def request_validation_error_handler(
    request: Request, error: RequestValidationError
) -> JSONResponse:
    error_id = uuid.uuid4()
    logger.warning(f"Received request validation error {error_id=}")
    return error_response(
        ValidationErrorResponse(
            status=status.HTTP_400_BAD_REQUEST,
            id=error_id,
            message=str(error),
            errors=error.errors(),
        )
    )


if __name__ == "__main__":
    uvicorn.run("posts_app.http_handler:app", host="localhost", port=8080, reload=True)
