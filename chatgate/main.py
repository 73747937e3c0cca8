"""FastAPI application entrypoint. No business logic; only wiring and middleware."""

import logging

from dotenv import load_dotenv

load_dotenv()

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from chatgate import __version__
from chatgate.api import query_router
from chatgate.api import router as api_router
from chatgate.core.config import Settings, get_settings
from chatgate.services.authenticator import Authenticator
from chatgate.services.completion import CompletionClient
from chatgate.services.conversation_store import ConversationStore
from chatgate.services.credentials import CredentialStore

logger = logging.getLogger(__name__)


async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    """Render errors as {"message": ...}."""
    return JSONResponse(
        status_code=exc.status_code,
        content={"message": exc.detail},
        headers=getattr(exc, "headers", None),
    )


def create_app(settings: Settings | None = None) -> FastAPI:
    """Build the application and the services it owns (credentials, sessions, conversations, LLM)."""
    settings = settings or get_settings()
    jwt_secret_set = bool(settings.JWT_SECRET.get_secret_value())
    llm_api_key_set = settings.LLM_API_KEY is not None
    logger.info(
        "Configuration loaded: port=%s jwt_secret_set=%s llm_api_key_set=%s",
        settings.PORT,
        jwt_secret_set,
        llm_api_key_set,
        extra={
            "port": settings.PORT,
            "jwt_secret_set": jwt_secret_set,
            "llm_api_key_set": llm_api_key_set,
        },
    )

    app = FastAPI(
        title="Chatgate API",
        version=__version__,
        docs_url="/docs",
        redoc_url="/redoc",
    )

    credentials = CredentialStore.from_seed(settings.SEED_USERS, rounds=settings.BCRYPT_ROUNDS)
    app.state.settings = settings
    app.state.authenticator = Authenticator(credentials, settings)
    app.state.conversations = ConversationStore()
    app.state.completion = CompletionClient(settings)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"] if settings.APP_ENV == "dev" else [],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)

    app.include_router(api_router, prefix=settings.API_PREFIX)
    app.include_router(query_router)

    @app.get("/")
    def root() -> dict[str, str]:
        """Root route; minimal payload for discovery."""
        return {"message": "Chatgate API"}

    return app


app = create_app()
