from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
from noise_sentinel.core.database import get_db
from noise_sentinel.core.dependencies import require_role
from noise_sentinel.features.user.model import User
from noise_sentinel.features.admin.service import AdminService
from noise_sentinel.models.enums import UserRole

router = APIRouter()

@router.get("/statistics")
def get_system_statistics(
    db: Session = Depends(get_db),
    current_user: User = Depends(require_role([UserRole.ADMIN]))
):
    """System-wide statistics"""
    return AdminService.get_system_statistics(db)
