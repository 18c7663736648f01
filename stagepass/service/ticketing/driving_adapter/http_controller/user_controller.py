from typing import Optional

from dependency_injector.wiring import Provide, inject
from fastapi import APIRouter, Depends, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from stagepass.platform.config.di import Container
from stagepass.platform.logging.loguru_io import Logger
from stagepass.service.ticketing.app.command.register_user_use_case import RegisterUserUseCase
from stagepass.service.ticketing.app.query.login_use_case import LoginUseCase
from stagepass.service.ticketing.domain.value_object.identity import Identity
from stagepass.service.ticketing.driving_adapter.http_controller.auth.jwt_auth import JwtAuth
from stagepass.service.ticketing.driving_adapter.http_controller.schema.user_schema import (
    LoginRequest,
    LoginResponse,
    RegisterRequest,
    UserResponse,
)


# === API Router ===

router = APIRouter()

# auto_error=False: a missing header must be a 401 from JwtAuth, not FastAPI's 403
bearer_scheme = HTTPBearer(auto_error=False)


@inject
async def get_current_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
    jwt_auth: JwtAuth = Depends(Provide[Container.jwt_auth]),
) -> Identity:
    """Verify the bearer token and rebuild the caller's identity (no DB query)."""
    return jwt_auth.authenticate(credentials.credentials if credentials else None)


@router.post('/register', response_model=UserResponse, status_code=status.HTTP_201_CREATED)
@Logger.io
async def register(
    request: RegisterRequest,
    use_case: RegisterUserUseCase = Depends(RegisterUserUseCase.depends),
) -> UserResponse:
    user_entity = await use_case.register(
        username=request.username,
        email=request.email,
        password=request.password,
        organizer=request.organizer,
    )
    return UserResponse(
        id=user_entity.id or 0,
        username=user_entity.username,
        email=user_entity.email,
        organizer=user_entity.organizer,
    )


@router.post('/login', response_model=LoginResponse)
@Logger.io
@inject
async def login(
    request: LoginRequest,
    use_case: LoginUseCase = Depends(LoginUseCase.depends),
    jwt_auth: JwtAuth = Depends(Provide[Container.jwt_auth]),
) -> LoginResponse:
    user_entity = await use_case.authenticate(email=request.email, password=request.password)
    token = jwt_auth.create_access_token(user_entity.to_identity())
    return LoginResponse(
        token=token,
        username=user_entity.username,
        organizer=user_entity.organizer,
    )
