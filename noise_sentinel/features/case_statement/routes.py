from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session
from typing import List
from noise_sentinel.core.database import get_db
from noise_sentinel.core.dependencies import require_role
from noise_sentinel.features.user.model import User
from noise_sentinel.features.user.service import UserService
from noise_sentinel.features.case_statement.schema import (
    CaseStatementCreate,
    CaseStatementUpdate,
    CaseStatementResponse,
)
from noise_sentinel.features.case_statement.service import CaseStatementService
from noise_sentinel.models.enums import UserRole, COURT_ROLES

router = APIRouter()

@router.post("/create", response_model=CaseStatementResponse, status_code=status.HTTP_201_CREATED)
def create_statement(
    data: CaseStatementCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_role([UserRole.JUDGE]))
):
    try:
        judge = UserService.require_judge_profile(current_user)
        return CaseStatementService.create_statement(db, data, judge)
    except PermissionError as e:
        raise HTTPException(status_code=403, detail=str(e))
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))

@router.get("/list", response_model=List[CaseStatementResponse])
def list_statements(
    db: Session = Depends(get_db),
    current_user: User = Depends(require_role([UserRole.COURT_AUTHORITY]))
):
    return CaseStatementService.get_all_statements(db)

@router.get("/case/{case_id}", response_model=List[CaseStatementResponse])
def statements_by_case(
    case_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_role(COURT_ROLES))
):
    return CaseStatementService.get_statements_by_case(db, case_id)

@router.get("/case/{case_id}/latest", response_model=CaseStatementResponse)
def latest_statement(
    case_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_role(COURT_ROLES))
):
    statement = CaseStatementService.get_latest_statement(db, case_id)
    if not statement:
        raise HTTPException(status_code=404, detail=f"No statements found for case {case_id}.")
    return statement

@router.get("/{statement_id}", response_model=CaseStatementResponse)
def get_statement(
    statement_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_role(COURT_ROLES))
):
    statement = CaseStatementService.get_statement_by_id(db, statement_id)
    if not statement:
        raise HTTPException(status_code=404, detail=f"Case statement with ID {statement_id} not found.")
    return statement

@router.put("/{statement_id}", response_model=CaseStatementResponse)
def update_statement(
    statement_id: int,
    data: CaseStatementUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_role([UserRole.JUDGE]))
):
    try:
        judge = UserService.require_judge_profile(current_user)
        statement = CaseStatementService.update_statement(db, statement_id, data, judge)
    except PermissionError as e:
        raise HTTPException(status_code=403, detail=str(e))
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    if not statement:
        raise HTTPException(status_code=404, detail=f"Case statement with ID {statement_id} not found.")
    return statement

@router.delete("/{statement_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_statement(
    statement_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_role([UserRole.JUDGE]))
):
    try:
        judge = UserService.require_judge_profile(current_user)
        deleted = CaseStatementService.delete_statement(db, statement_id, judge)
    except PermissionError as e:
        raise HTTPException(status_code=403, detail=str(e))
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    if not deleted:
        raise HTTPException(status_code=404, detail=f"Case statement with ID {statement_id} not found.")
    return None
