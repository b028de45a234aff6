from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session
from typing import List, Optional
from noise_sentinel.core.database import get_db
from noise_sentinel.core.dependencies import require_role
from noise_sentinel.features.user.model import User
from noise_sentinel.features.user.schema import UserResponse, UserUpdate, UserCountsResponse
from noise_sentinel.features.user.service import UserService
from noise_sentinel.models.enums import UserRole, AUTHORITY_ROLES

router = APIRouter()

@router.get("/admins", response_model=List[UserResponse])
def list_admins(
    db: Session = Depends(get_db),
    current_user: User = Depends(require_role([UserRole.ADMIN]))
):
    return UserService.get_users_by_role(db, UserRole.ADMIN)

@router.get("/court-authorities", response_model=List[UserResponse])
def list_court_authorities(
    db: Session = Depends(get_db),
    current_user: User = Depends(require_role([UserRole.ADMIN]))
):
    return UserService.get_users_by_role(db, UserRole.COURT_AUTHORITY)

@router.get("/station-authorities", response_model=List[UserResponse])
def list_station_authorities(
    db: Session = Depends(get_db),
    current_user: User = Depends(require_role([UserRole.ADMIN]))
):
    return UserService.get_users_by_role(db, UserRole.STATION_AUTHORITY)

@router.get("/judges", response_model=List[UserResponse])
def list_judges(
    db: Session = Depends(get_db),
    current_user: User = Depends(require_role([UserRole.ADMIN, UserRole.COURT_AUTHORITY]))
):
    return UserService.get_users_by_role(db, UserRole.JUDGE)

@router.get("/police-officers", response_model=List[UserResponse])
def list_police_officers(
    db: Session = Depends(get_db),
    current_user: User = Depends(require_role([UserRole.ADMIN, UserRole.STATION_AUTHORITY]))
):
    return UserService.get_users_by_role(db, UserRole.POLICE_OFFICER)

@router.get("/counts", response_model=UserCountsResponse)
def get_user_counts(
    db: Session = Depends(get_db),
    current_user: User = Depends(require_role(AUTHORITY_ROLES))
):
    return UserService.get_user_counts(db)

@router.get("/search", response_model=List[UserResponse])
def search_users(
    q: Optional[str] = None,
    role: Optional[UserRole] = None,
    is_active: Optional[bool] = None,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_role(AUTHORITY_ROLES))
):
    return UserService.search_users(db, q, role, is_active)

@router.get("/{user_id}", response_model=UserResponse)
def get_user(
    user_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_role(AUTHORITY_ROLES))
):
    user = UserService.get_user_by_id(db, user_id)
    if not user:
        raise HTTPException(status_code=404, detail=f"User with ID {user_id} not found.")
    return user

@router.put("/{user_id}", response_model=UserResponse)
def update_user(
    user_id: int,
    user_data: UserUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_role([UserRole.ADMIN]))
):
    try:
        user = UserService.update_user(db, user_id, user_data)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    if not user:
        raise HTTPException(status_code=404, detail=f"User with ID {user_id} not found.")
    return user

@router.post("/{user_id}/activate", response_model=UserResponse)
def activate_user(
    user_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_role([UserRole.ADMIN]))
):
    user = UserService.set_active(db, user_id, True, current_user.id)
    if not user:
        raise HTTPException(status_code=404, detail=f"User with ID {user_id} not found.")
    return user

@router.delete("/{user_id}", response_model=UserResponse)
def deactivate_user(
    user_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_role([UserRole.ADMIN]))
):
    """Soft delete: the account is deactivated"""
    try:
        user = UserService.set_active(db, user_id, False, current_user.id)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    if not user:
        raise HTTPException(status_code=404, detail=f"User with ID {user_id} not found.")
    return user
