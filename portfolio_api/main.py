#run it with uvicorn portfolio_api.main:app --reload
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from dotenv import load_dotenv
from typing import Optional
import logging

from portfolio_api.api.api_router import api_router
from portfolio_api.core.config import Settings, get_settings
from portfolio_api.core.errors import InvalidBodyError, PortfolioError, ValidationError

# Load environment variables from .env file
load_dotenv()

logger = logging.getLogger(__name__)


async def portfolio_error_handler(request: Request, exc: PortfolioError) -> JSONResponse:
    """Render PortfolioError subclasses as the public JSON error contract."""
    settings: Settings = request.app.state.settings

    if isinstance(exc, ValidationError):
        # Client mistakes are not incidents
        logger.debug(f"Rejected {request.method} {request.url.path}: {exc.kind}")

    return JSONResponse(
        status_code=exc.status_code,
        content=exc.to_body(include_details=settings.is_development),
    )


async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Bodies that are not a JSON object of strings get a 400, not FastAPI's 422."""
    summary = "; ".join(
        f"{'.'.join(str(part) for part in error.get('loc', ()))}: {error.get('msg')}"
        for error in exc.errors()
    )
    return await portfolio_error_handler(request, InvalidBodyError(summary))


def resolve_log_level(name: str) -> int:
    """Numeric level for a LOG_LEVEL name, INFO when the name is unknown."""
    level = logging.getLevelName(name.strip().upper())
    return level if isinstance(level, int) else logging.INFO


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    """
    Build the FastAPI application.

    Args:
        settings: Explicit settings (tests); defaults to the cached env settings

    Returns:
        FastAPI: Configured application
    """
    settings = settings or get_settings()

    # Set up logging
    log_level = resolve_log_level(settings.log_level)
    logging.basicConfig(
        level=log_level,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    )

    if not isinstance(logging.getLevelName(settings.log_level.strip().upper()), int):
        logger.warning(f"Unknown LOG_LEVEL '{settings.log_level}', using INFO")

    app = FastAPI(title="Portfolio Backend", version="1.0.0")
    app.state.settings = settings

    # CORS setup, restrict ALLOWED_ORIGINS to the site domain in production
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.allowed_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.add_exception_handler(PortfolioError, portfolio_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)

    app.include_router(api_router)

    @app.get("/api/health")
    def health_check():
        """
        Health check endpoint.

        Reports whether mail credentials are present, never their values.
        """
        return {
            "status": "ok",
            "environment": settings.app_env,
            "email": {
                "provider": settings.email_service,
                "user_configured": bool(settings.email_user),
                "password_configured": bool(settings.email_pass),
            },
        }

    logger.info(f"Portfolio backend configured ({settings.app_env}, email service: {settings.email_service})")
    return app


app = create_app()


#run it with uvicorn portfolio_api.main:app --reload
