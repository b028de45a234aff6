from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session
from typing import List, Optional
from datetime import datetime
from noise_sentinel.core.database import get_db
from noise_sentinel.core.dependencies import require_role
from noise_sentinel.features.user.model import User
from noise_sentinel.features.emission_report.schema import (
    EmissionReportCreate,
    EmissionReportResponse,
    EmissionReportVerification,
)
from noise_sentinel.features.emission_report.service import EmissionReportService
from noise_sentinel.models.enums import UserRole, ALL_ROLES, COURT_ROLES, STATION_ROLES

router = APIRouter()

@router.post("/create", response_model=EmissionReportResponse, status_code=status.HTTP_201_CREATED)
def create_report(
    data: EmissionReportCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_role([UserRole.POLICE_OFFICER]))
):
    """Record a device reading"""
    try:
        return EmissionReportService.create_report(db, data)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))

@router.get("/list", response_model=List[EmissionReportResponse])
def list_reports(
    db: Session = Depends(get_db),
    current_user: User = Depends(require_role(STATION_ROLES))
):
    return EmissionReportService.get_all_reports(db)

@router.get("/device/{device_id}", response_model=List[EmissionReportResponse])
def reports_by_device(
    device_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_role(STATION_ROLES))
):
    return EmissionReportService.get_reports_by_device(db, device_id)

@router.get("/date-range", response_model=List[EmissionReportResponse])
def reports_by_date_range(
    start_date: datetime,
    end_date: datetime,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_role(STATION_ROLES))
):
    try:
        return EmissionReportService.get_reports_by_date_range(db, start_date, end_date)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))

@router.get("/violations", response_model=List[EmissionReportResponse])
def violation_reports(
    threshold: Optional[float] = None,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_role(STATION_ROLES))
):
    return EmissionReportService.get_violation_reports(db, threshold)

@router.get("/without-challan", response_model=List[EmissionReportResponse])
def reports_without_challan(
    db: Session = Depends(get_db),
    current_user: User = Depends(require_role([UserRole.STATION_AUTHORITY, UserRole.POLICE_OFFICER]))
):
    return EmissionReportService.get_reports_without_challan(db)

@router.get("/{report_id}/verify", response_model=EmissionReportVerification)
def verify_report(
    report_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_role(COURT_ROLES))
):
    """Integrity check before the report is used as evidence"""
    result = EmissionReportService.verify_report(db, report_id)
    if not result:
        raise HTTPException(status_code=404, detail=f"Emission Report with ID {report_id} not found.")
    return result

@router.get("/{report_id}", response_model=EmissionReportResponse)
def get_report(
    report_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_role(ALL_ROLES))
):
    report = EmissionReportService.get_report_by_id(db, report_id)
    if not report:
        raise HTTPException(status_code=404, detail=f"Emission Report with ID {report_id} not found.")
    return report
