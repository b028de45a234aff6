from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session
from typing import List
from datetime import datetime
from noise_sentinel.core.database import get_db
from noise_sentinel.core.dependencies import get_current_user, require_role
from noise_sentinel.features.user.model import User
from noise_sentinel.features.user.service import UserService
from noise_sentinel.features.court_case.schema import (
    CaseCreate,
    CaseUpdate,
    AssignJudge,
    CaseResponse,
    CaseListItem,
)
from noise_sentinel.features.court_case.service import CaseService
from noise_sentinel.features.fir.schema import FirResponse
from noise_sentinel.models.enums import UserRole, CaseStatus, COURT_ROLES

router = APIRouter()

@router.post("/create", response_model=CaseResponse, status_code=status.HTTP_201_CREATED)
def create_case(
    data: CaseCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_role([UserRole.COURT_AUTHORITY]))
):
    """Open a court case for an FIR"""
    try:
        return CaseService.create_case(db, data)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))

@router.get("/list", response_model=List[CaseListItem])
def list_cases(
    db: Session = Depends(get_db),
    current_user: User = Depends(require_role([UserRole.COURT_AUTHORITY]))
):
    return CaseService.get_all_cases(db)

@router.get("/my-cases", response_model=List[CaseListItem])
def my_cases(
    db: Session = Depends(get_db),
    current_user: User = Depends(require_role([UserRole.JUDGE]))
):
    try:
        judge = UserService.require_judge_profile(current_user)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    return CaseService.get_cases_by_judge(db, judge.id)

@router.get("/firs-without-case", response_model=List[FirResponse])
def firs_without_case(
    db: Session = Depends(get_db),
    current_user: User = Depends(require_role([UserRole.COURT_AUTHORITY]))
):
    return CaseService.get_firs_without_case(db)

@router.get("/court/{court_id}", response_model=List[CaseListItem])
def cases_by_court(
    court_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_role(COURT_ROLES))
):
    return CaseService.get_cases_by_court(db, court_id)

@router.get("/status/{case_status}", response_model=List[CaseListItem])
def cases_by_status(
    case_status: CaseStatus,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_role(COURT_ROLES))
):
    return CaseService.get_cases_by_status(db, case_status)

@router.get("/hearings", response_model=List[CaseListItem])
def hearings_in_range(
    start_date: datetime,
    end_date: datetime,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_role(COURT_ROLES))
):
    try:
        return CaseService.get_hearings_in_range(db, start_date, end_date)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))

@router.get("/search", response_model=List[CaseListItem])
def search_cases(
    q: str,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_role([UserRole.COURT_AUTHORITY, UserRole.JUDGE]))
):
    return CaseService.search_cases(db, q)

@router.get("/number/{case_no}", response_model=CaseResponse)
def get_case_by_number(
    case_no: str,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_role(COURT_ROLES))
):
    case = CaseService.get_case_by_number(db, case_no)
    if not case:
        raise HTTPException(status_code=404, detail=f"Case with number '{case_no}' not found.")
    return case

@router.post("/{case_id}/assign-judge", response_model=CaseResponse)
def assign_judge(
    case_id: int,
    data: AssignJudge,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_role([UserRole.COURT_AUTHORITY]))
):
    try:
        case = CaseService.assign_judge(db, case_id, data.judge_id)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    if not case:
        raise HTTPException(status_code=404, detail=f"Case with ID {case_id} not found.")
    return case

@router.get("/{case_id}", response_model=CaseResponse)
def get_case(
    case_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    case = CaseService.get_case_by_id(db, case_id)
    if not case:
        raise HTTPException(status_code=404, detail=f"Case with ID {case_id} not found.")
    return case

@router.put("/{case_id}", response_model=CaseResponse)
def update_case(
    case_id: int,
    data: CaseUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_role(COURT_ROLES))
):
    """Update status, hearing date or verdict"""
    try:
        judge = None
        if current_user.role_name == UserRole.JUDGE.value:
            judge = UserService.require_judge_profile(current_user)
        case = CaseService.update_case(db, case_id, data, judge=judge)
    except PermissionError as e:
        raise HTTPException(status_code=403, detail=str(e))
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    if not case:
        raise HTTPException(status_code=404, detail=f"Case with ID {case_id} not found.")
    return case
