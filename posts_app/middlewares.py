import uuid
from contextvars import ContextVar

from aws_lambda_powertools import Logger
from fastapi import status
from fastapi.requests import Request
from fastapi.responses import Response
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.types import ASGIApp

from posts_app import settings
from posts_app.models.response import ErrorResponse, error_response

ERROR_MESSAGE_INTERNAL_SERVER_ERROR = "Internal Server Error"
X_CORRELATION_ID = "X-Correlation-ID"

correlation_id: ContextVar[str] = ContextVar(X_CORRELATION_ID)
logger = Logger(utc=True)


class CorrelationIdMiddleware(BaseHTTPMiddleware):
    """Tags logs and responses with a correlation id.

    Unhandled errors are turned into the generic error body here, inside the
    CORS layer, so a 500 still carries the CORS and correlation headers.
    """

    def __init__(self, app: ASGIApp):
        super().__init__(app)

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        aws_context = request.scope.get("aws.context")
        correlation_id.set(
            request.headers.get(X_CORRELATION_ID)
            or (aws_context.aws_request_id if aws_context else str(uuid.uuid4()))
        )
        logger.set_correlation_id(correlation_id.get())
        try:
            response = await call_next(request)
        except Exception as exc:
            error_id = uuid.uuid4()
            logger.exception(f"Received unhandled error {error_id=}")
            response = error_response(
                ErrorResponse(
                    status=status.HTTP_500_INTERNAL_SERVER_ERROR,
                    id=error_id,
                    message=(
                        str(exc)
                        if settings.debug
                        else ERROR_MESSAGE_INTERNAL_SERVER_ERROR
                    ),
                )
            )
        response.headers[X_CORRELATION_ID] = correlation_id.get()
        return response
