from fastapi import APIRouter, Depends, HTTPException, status
from fastapi.security import OAuth2PasswordRequestForm
from sqlalchemy.orm import Session
from datetime import datetime, timedelta
from noise_sentinel.core.database import get_db
from noise_sentinel.core.security import create_access_token
from noise_sentinel.core.config import settings
from noise_sentinel.core.dependencies import get_current_user, require_role
from noise_sentinel.features.user.model import User
from noise_sentinel.features.user.schema import (
    Token,
    UserCreate,
    UserResponse,
    JudgeCreate,
    PoliceOfficerCreate,
    ChangePassword,
    MessageResponse,
)
from noise_sentinel.features.user.service import UserService
from noise_sentinel.models.enums import UserRole

router = APIRouter()

@router.post("/login", response_model=Token)
def login(form_data: OAuth2PasswordRequestForm = Depends(), db: Session = Depends(get_db)):
    """Login with username or e-mail"""
    user = UserService.authenticate_user(db, form_data.username, form_data.password)
    if not user:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid username or password.",
            headers={"WWW-Authenticate": "Bearer"},
        )
    if not user.is_active:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="User account is deactivated.")

    access_token_expires = timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES)
    access_token = create_access_token(
        data={"sub": str(user.id), "role": user.role_name}, expires_delta=access_token_expires
    )
    return {
        "access_token": access_token,
        "token_type": "bearer",
        "user_id": user.id,
        "username": user.username,
        "full_name": user.full_name,
        "role": user.role_name,
        "expires_at": datetime.utcnow() + access_token_expires,
    }

@router.post("/bootstrap-admin", response_model=UserResponse, status_code=status.HTTP_201_CREATED)
def bootstrap_admin(user_data: UserCreate, db: Session = Depends(get_db)):
    """First Admin account, only while none exists"""
    if UserService.admin_exists(db):
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="An Admin account already exists.")
    try:
        return UserService.create_user(db, user_data, UserRole.ADMIN)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))

@router.post("/register/admin", response_model=UserResponse, status_code=status.HTTP_201_CREATED)
def register_admin(
    user_data: UserCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_role([UserRole.ADMIN]))
):
    try:
        return UserService.create_user(db, user_data, UserRole.ADMIN)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))

@router.post("/register/court-authority", response_model=UserResponse, status_code=status.HTTP_201_CREATED)
def register_court_authority(
    user_data: UserCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_role([UserRole.ADMIN]))
):
    try:
        return UserService.create_user(db, user_data, UserRole.COURT_AUTHORITY)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))

@router.post("/register/station-authority", response_model=UserResponse, status_code=status.HTTP_201_CREATED)
def register_station_authority(
    user_data: UserCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_role([UserRole.ADMIN]))
):
    try:
        return UserService.create_user(db, user_data, UserRole.STATION_AUTHORITY)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))

@router.post("/register/judge", response_model=UserResponse, status_code=status.HTTP_201_CREATED)
def register_judge(
    judge_data: JudgeCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_role([UserRole.COURT_AUTHORITY]))
):
    """Court Authority creates a Judge account"""
    try:
        return UserService.create_judge(db, judge_data)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))

@router.post("/register/police-officer", response_model=UserResponse, status_code=status.HTTP_201_CREATED)
def register_police_officer(
    officer_data: PoliceOfficerCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_role([UserRole.STATION_AUTHORITY]))
):
    """Station Authority creates a Police Officer account"""
    try:
        return UserService.create_police_officer(db, officer_data)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))

@router.post("/change-password", response_model=MessageResponse)
def change_password(
    data: ChangePassword,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    try:
        UserService.change_password(db, current_user, data)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    return {"message": "Password changed successfully."}

@router.get("/me", response_model=UserResponse)
def get_me(current_user: User = Depends(get_current_user)):
    return current_user
