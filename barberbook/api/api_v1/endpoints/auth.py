from fastapi import APIRouter, Depends, HTTPException, status

from barberbook.api.deps import get_app_settings, get_repository
from barberbook.core.auth import create_access_token, get_current_user
from barberbook.core.config import Settings
from barberbook.db.repository import Repository
from barberbook.schemas.user import Token, User, UserCreate, UserLogin, UserResponse
from barberbook.services.user_service import authenticate_user, register_user

router = APIRouter()

def _token_for(user: User, app_settings: Settings) -> Token:
    access_token = create_access_token({"sub": user.id, "role": user.role.value}, app_settings)
    return Token(access_token=access_token, user=UserResponse(**user.model_dump()))

@router.post("/register", response_model=Token)
async def register(
    user_in: UserCreate,
    repository: Repository = Depends(get_repository),
    app_settings: Settings = Depends(get_app_settings),
):
    """
    Register a customer account and return an access token
    """
    user = await register_user(repository, user_in)
    if not user:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Username already registered"
        )
    return _token_for(user, app_settings)

@router.post("/login", response_model=Token)
async def login(
    credentials: UserLogin,
    repository: Repository = Depends(get_repository),
    app_settings: Settings = Depends(get_app_settings),
):
    """
    Log in with username and password
    """
    user = await authenticate_user(repository, credentials.username, credentials.password)
    if not user:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Incorrect username or password",
            headers={"WWW-Authenticate": "Bearer"},
        )
    return _token_for(user, app_settings)

@router.get("/me", response_model=UserResponse)
async def read_me(current_user: User = Depends(get_current_user)):
    return UserResponse(**current_user.model_dump())
