"""API controllers for the Assistant Relay."""

from fastapi import APIRouter

from api.controllers.assistant_controller import CORS_HEADERS, AssistantController, SendMessageRequest
from api.controllers.health_controller import HealthController, HealthResponse
from application.services import AssistantService
from application.settings import Settings


def build_api_router(assistant_service: AssistantService, settings: Settings) -> APIRouter:
    """Mount every controller under the /api prefix."""
    router = APIRouter(prefix="/api")
    router.include_router(AssistantController(assistant_service).router)
    router.include_router(HealthController(settings).router)
    return router


__all__ = [
    "AssistantController",
    "CORS_HEADERS",
    "HealthController",
    "HealthResponse",
    "SendMessageRequest",
    "build_api_router",
]
