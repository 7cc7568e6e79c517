"""Health check controller."""

import logging
from typing import Any

from fastapi import APIRouter
from pydantic import BaseModel

from application.settings import Settings

logger = logging.getLogger(__name__)


class HealthResponse(BaseModel):
    """Service health status."""

    status: str
    service: str
    version: str
    checks: dict[str, Any]


class HealthController:
    """Controller for the service health endpoint.

    Reports configuration health only; it never calls the provider.
    """

    def __init__(self, settings: Settings) -> None:
        self._settings = settings
        self.router = APIRouter(prefix="/health", tags=["Health"])
        self.router.add_api_route("", self.get_health, methods=["GET"], response_model=HealthResponse)

    async def get_health(self) -> HealthResponse:
        has_credentials = self._settings.has_provider_credentials
        return HealthResponse(
            status="healthy" if has_credentials else "degraded",
            service=self._settings.app_name,
            version=self._settings.app_version,
            checks={
                "provider_credentials": has_credentials,
                "assistant": "configured" if self._settings.assistant_id else "auto-create",
                "email_receiver": bool(self._settings.email_receiver),
            },
        )
