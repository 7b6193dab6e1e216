from fastapi import APIRouter, Depends, status, Request

from ..errors import ServiceError
from ..middleware.rate_limit import apply_rate_limit, LOGIN_LIMIT, REGISTER_LIMIT
from ..schemas.common import ApiResponse
from ..schemas.user import LoginRequest, LoginResponse, RefreshTokenRequest, RegisterRequest, UserOut
from ..security import get_current_username
from ..services.auth_service import AuthService, get_auth_service

router = APIRouter()


def to_out(user) -> UserOut:
    # Nunca exponer el hash de la contraseña
    return UserOut(username=user.username, email=user.email, created_at=user.created_at)


@router.post("/login", response_model=ApiResponse[LoginResponse])
async def login(request: Request, payload: LoginRequest, auth: AuthService = Depends(get_auth_service)):
    apply_rate_limit(request, LOGIN_LIMIT)
    result = auth.authenticate(payload)
    return ApiResponse[LoginResponse].ok(result, "Login successful")


@router.post("/register", response_model=ApiResponse[UserOut], status_code=status.HTTP_201_CREATED)
async def register(request: Request, payload: RegisterRequest, auth: AuthService = Depends(get_auth_service)):
    apply_rate_limit(request, REGISTER_LIMIT)
    user = auth.register(payload)
    return ApiResponse[UserOut].ok(to_out(user), "User registered successfully")


@router.post("/refresh", response_model=ApiResponse[LoginResponse])
async def refresh(payload: RefreshTokenRequest, auth: AuthService = Depends(get_auth_service)):
    result = auth.refresh_token(payload.token)
    return ApiResponse[LoginResponse].ok(result, "Token refreshed successfully")


@router.get("/me", response_model=ApiResponse[UserOut])
async def me(
    username: str = Depends(get_current_username),
    auth: AuthService = Depends(get_auth_service),
):
    user = auth.get_user(username)
    if user is None:
        # Token válido de un usuario que ya no existe en el store
        raise ServiceError.unauthorized(auth.messages.invalid_token)
    return ApiResponse[UserOut].ok(to_out(user), "User retrieved successfully")
