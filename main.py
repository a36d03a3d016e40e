import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from finassist.config import Settings, load_settings
from finassist.routers import auth, chatbot, demo
from finassist.services.chatbot import ChatbotService, build_model
from finassist.services.identity import IdentityClient

logging.basicConfig(format="%(asctime)s - %(name)s - %(levelname)s - %(message)s", level=logging.INFO)
logger = logging.getLogger(__name__)


# --- Lifespan ---
@asynccontextmanager
async def lifespan(app: FastAPI):
    settings: Settings = app.state.settings

    app.state.identity_client = IdentityClient(settings.supabase_url, settings.supabase_anon_key)
    app.state.chatbot_service = ChatbotService(
        build_model(settings.gemini_api_key, settings.gemini_model), settings.gemini_model
    )
    logger.info(f"✅ Services ready (model: {settings.gemini_model})")

    yield

    logger.info("🛑 Shutting down")


# --- Error Envelope ---
async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    return JSONResponse(status_code=exc.status_code, content={"error": exc.detail}, headers=exc.headers)


async def validation_exception_handler(request: Request, exc: RequestValidationError):
    logger.warning(f"Invalid request body on {request.url.path}: {exc.errors()}")
    return JSONResponse(status_code=400, content={"error": "Invalid request body"})


def create_app(settings: Settings) -> FastAPI:
    app = FastAPI(title="Finassist API", lifespan=lifespan)
    app.state.settings = settings

    # --- CORS ---
    app.add_middleware(
        CORSMiddleware,
        allow_origins=list(settings.cors_origins),
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)

    # --- API Routers ---
    app.include_router(auth.router, prefix="/api")
    app.include_router(chatbot.router, prefix="/api")
    app.include_router(demo.router, prefix="/api")

    return app


# Exits if credentials are missing
app = create_app(load_settings())
