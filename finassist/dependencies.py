import logging

from fastapi import Depends, Header, HTTPException, Request

from finassist.config import Settings
from finassist.services.chatbot import ChatbotService
from finassist.services.identity import IdentityClient, IdentityError

logger = logging.getLogger(__name__)


# Services are built once in the app lifespan and stored on app.state
def get_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_identity_client(request: Request) -> IdentityClient:
    return request.app.state.identity_client


def get_chatbot_service(request: Request) -> ChatbotService:
    return request.app.state.chatbot_service


async def get_bearer_token(authorization: str | None = Header(None)) -> str:
    token = (authorization or "").removeprefix("Bearer ").strip()
    if not token:
        raise HTTPException(status_code=401, detail="No token provided")
    return token


async def get_current_user(
    token: str = Depends(get_bearer_token),
    identity: IdentityClient = Depends(get_identity_client),
) -> dict:
    """Resolves the bearer token to a user via the identity provider. Valid for this request only."""
    try:
        return await identity.get_user(token)
    except IdentityError as e:
        logger.warning(f"❌ [AUTH FAIL]: {e.message}")
        raise HTTPException(status_code=401, detail="Invalid or expired token")
