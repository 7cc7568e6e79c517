"""Assistant Relay main application entry point."""

import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI

from api.controllers import build_api_router
from application.services import AssistantService, ConversationProvider
from application.settings import Settings, app_settings, configure_logging, log_settings_summary
from application.tools import MailSender, build_assistant_definition, build_tool_registry
from infrastructure import AzureOpenAiAssistantsProvider, SmtpMailSender
from observability.telemetry import configure_telemetry

configure_logging(log_level=app_settings.log_level)
log = logging.getLogger(__name__)


def create_app(
    settings: Optional[Settings] = None,
    provider: Optional[ConversationProvider] = None,
    mail_sender: Optional[MailSender] = None,
) -> FastAPI:
    """Create and configure the Assistant Relay application.

    Args:
        settings: Application settings (default: app_settings)
        provider: Conversation provider (default: Azure OpenAI Assistants built from settings)
        mail_sender: Transport for the sendEmail tool (default: SMTP built from settings)

    Returns:
        Configured FastAPI application

    Raises:
        ConfigurationError: If no provider is given and the Azure credentials are missing
    """
    settings = settings or app_settings
    log.debug("🚀 Creating Assistant Relay application...")
    log_settings_summary(settings)

    # ==========================================================================
    # Collaborators (built once, shared by all requests)
    # ==========================================================================
    provider = provider or AzureOpenAiAssistantsProvider.from_settings(settings)
    mail_sender = mail_sender or SmtpMailSender.from_settings(settings)

    tool_registry = build_tool_registry(settings, mail_sender)
    assistant_service = AssistantService(
        provider=provider,
        tool_registry=tool_registry,
        settings=settings,
        assistant_definition=build_assistant_definition(settings, tool_registry),
    )

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        yield
        log.info("🛑 Shutting down, closing provider client")
        await provider.close()

    app = FastAPI(
        title=settings.app_name,
        description="Streaming relay between chat clients and an Azure OpenAI assistant",
        version=settings.app_version,
        debug=settings.debug,
        lifespan=lifespan,
    )
    app.state.assistant_service = assistant_service
    app.state.tool_registry = tool_registry
    app.include_router(build_api_router(assistant_service, settings))

    configure_telemetry(app, settings)

    log.info("✅ Assistant Relay application created successfully!")
    log.info("📊 Access points:")
    log.info(f"   - Assistant: http://localhost:{settings.app_port}/api/assistant")
    log.info(f"   - Health: http://localhost:{settings.app_port}/api/health")
    return app


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "main:create_app",
        factory=True,
        host=app_settings.app_host,
        port=app_settings.app_port,
        reload=app_settings.debug,
    )
