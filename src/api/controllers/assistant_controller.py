"""Assistant controller relaying user messages to the assistant as a chunked text stream."""

import logging
from typing import Optional

from fastapi import APIRouter, Request
from fastapi.responses import PlainTextResponse, Response, StreamingResponse
from opentelemetry import trace
from pydantic import BaseModel, ConfigDict, Field, ValidationError

from application.services import AssistantService
from domain.exceptions import RequestValidationError
from domain.models import AssistantRequest
from observability import assistant_requests_received, assistant_requests_rejected

logger = logging.getLogger(__name__)
tracer = trace.get_tracer(__name__)

CORS_HEADERS = {
    "Access-Control-Allow-Origin": "*",
    "Access-Control-Allow-Methods": "GET, POST, OPTIONS",
    "Access-Control-Allow-Headers": "Content-Type, Authorization, X-Thread-ID",
    "Access-Control-Max-Age": "86400",
}

THREAD_ID_HEADER = "X-Thread-ID"

MESSAGE_REQUIRED = "Message is required"


class SendMessageRequest(BaseModel):
    """Structured request body for sending a message."""

    model_config = ConfigDict(populate_by_name=True)

    message: Optional[str] = Field(None, description="User message")
    file_ids: Optional[list[str]] = Field(None, alias="fileIds", description="Uploaded file IDs to attach for file search")


class AssistantController:
    """Controller for the assistant endpoint.

    POST accepts either a JSON body ({message, fileIds} plus an optional
    X-Thread-ID header to continue a conversation) or, for legacy clients,
    a raw text body holding the message. OPTIONS answers CORS preflights.
    """

    def __init__(self, assistant_service: AssistantService) -> None:
        self._assistant_service = assistant_service
        self.router = APIRouter(prefix="/assistant", tags=["Assistant"])
        self.router.add_api_route("", self.send_message, methods=["POST"], response_class=StreamingResponse)
        self.router.add_api_route("", self.preflight, methods=["OPTIONS"])

    async def send_message(self, request: Request) -> Response:
        """
        Send a message and stream the assistant's response.

        The body is a plain-text stream of chunks:
        - "@thread:<id>" first, when a new conversation thread was created
        - "@created", "@queued", "@in_progress" run status sentinels
        - Response text as it is generated
        - "Error: <message>" if the run or the relay fails
        """
        with tracer.start_as_current_span("assistant.send_message") as span:
            try:
                assistant_request = await self._parse_request(request)
            except RequestValidationError as e:
                assistant_requests_rejected.add(1, {"reason": "parse" if e.is_parse_error else "empty_message"})
                if e.is_parse_error:
                    logger.warning(f"⚠️ Invalid request body: {e.message}")
                    return PlainTextResponse(f"Request error: {e.message}", status_code=500, headers=CORS_HEADERS)
                logger.warning("⚠️ Empty message received")
                return PlainTextResponse(e.message, status_code=400, headers=CORS_HEADERS)
            except Exception as e:
                logger.exception(f"💥 Request handler error: {e}")
                assistant_requests_rejected.add(1, {"reason": "error"})
                return PlainTextResponse(f"Request error: {e}", status_code=500, headers=CORS_HEADERS)

            shape = "json" if assistant_request.supports_continuation else "legacy"
            span.set_attribute("assistant.request_shape", shape)
            assistant_requests_received.add(1, {"shape": shape})
            logger.info(
                f"💬 Message received ({len(assistant_request.message)} characters, "
                f"{len(assistant_request.file_ids)} file(s), thread: {assistant_request.thread_id}, shape: {shape})"
            )

            return StreamingResponse(
                self._assistant_service.process_message(assistant_request),
                media_type="text/plain",
                headers={**CORS_HEADERS, "Transfer-Encoding": "chunked"},
            )

    async def preflight(self) -> Response:
        """Answer a CORS preflight request."""
        logger.debug("🔧 Handling CORS preflight request")
        return Response(content="", status_code=200, headers=CORS_HEADERS)

    async def _parse_request(self, request: Request) -> AssistantRequest:
        """Build an AssistantRequest from either request shape.

        Raises:
            RequestValidationError: If the body cannot be parsed (is_parse_error)
                or the message is empty
        """
        content_type = request.headers.get("content-type", "")
        body = await request.body()

        if "application/json" in content_type:
            try:
                payload = SendMessageRequest.model_validate_json(body)
            except ValidationError as e:
                raise RequestValidationError(_describe_validation_error(e), is_parse_error=True) from e

            message = payload.message or ""
            if not message.strip():
                raise RequestValidationError(MESSAGE_REQUIRED)

            return AssistantRequest(
                message=message,
                file_ids=tuple(payload.file_ids or ()),
                thread_id=request.headers.get(THREAD_ID_HEADER) or None,
            )

        try:
            message = body.decode("utf-8")
        except UnicodeDecodeError as e:
            raise RequestValidationError(f"Body is not valid UTF-8 text: {e}", is_parse_error=True) from e

        if not message.strip():
            raise RequestValidationError(MESSAGE_REQUIRED)
        return AssistantRequest.legacy(message)


def _describe_validation_error(error: ValidationError) -> str:
    """First validation failure as a short human-readable message."""
    first = error.errors()[0] if error.errors() else {}
    location = ".".join(str(part) for part in first.get("loc", ()))
    message = first.get("msg", str(error))
    return f"{location}: {message}" if location else message
