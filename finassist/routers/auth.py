import logging

from fastapi import APIRouter, Depends, HTTPException

from finassist.dependencies import get_bearer_token, get_current_user, get_identity_client
from finassist.models.schemas import AuthResponse, LoginRequest, RegisterRequest
from finassist.services.identity import IdentityClient, IdentityError

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/auth", tags=["auth"])


@router.post("/register", status_code=201, response_model=AuthResponse)
async def register(payload: RegisterRequest, identity: IdentityClient = Depends(get_identity_client)):
    if not payload.email or not payload.password or not payload.name:
        raise HTTPException(status_code=400, detail="All fields required")

    try:
        data = await identity.sign_up(payload.email, payload.password, payload.name)
    except IdentityError as e:
        raise HTTPException(status_code=400, detail=e.message)

    return {"message": "Registration successful", "user": data["user"], "session": data["session"]}


@router.post("/login", response_model=AuthResponse)
async def login(payload: LoginRequest, identity: IdentityClient = Depends(get_identity_client)):
    if not payload.email or not payload.password:
        raise HTTPException(status_code=400, detail="Email and password required")

    try:
        data = await identity.sign_in(payload.email, payload.password)
    except IdentityError as e:
        # Provider detail is logged, never returned
        logger.warning(f"Login failed for {payload.email}: {e.message}")
        raise HTTPException(status_code=401, detail="Invalid credentials")

    return {"message": "Login successful", "user": data["user"], "session": data["session"]}


@router.post("/logout")
async def logout(
    user=Depends(get_current_user),
    token: str = Depends(get_bearer_token),
    identity: IdentityClient = Depends(get_identity_client),
):
    try:
        await identity.sign_out(token)
    except IdentityError as e:
        raise HTTPException(status_code=400, detail=e.message)

    return {"message": "Logout successful"}


@router.get("/me")
async def get_me(user=Depends(get_current_user)):
    return {"user": user}
