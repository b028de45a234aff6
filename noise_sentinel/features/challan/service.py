from sqlalchemy.orm import Session
from sqlalchemy import and_, or_
from noise_sentinel.features.challan.model import Challan
from noise_sentinel.features.challan.schema import ChallanCreate
from noise_sentinel.features.violation.model import Violation
from noise_sentinel.features.emission_report.model import EmissionReport
from noise_sentinel.features.vehicle.model import Vehicle
from noise_sentinel.features.vehicle.service import VehicleService
from noise_sentinel.features.accused.model import Accused
from noise_sentinel.features.accused.service import AccusedService
from noise_sentinel.features.user.model import PoliceOfficer
from noise_sentinel.core.evidence import compress_evidence
from noise_sentinel.core.config import settings
from noise_sentinel.core.logging import logger
from noise_sentinel.models.enums import ChallanStatus
from typing import Optional, List, Tuple
from datetime import datetime, timedelta

PAYABLE_STATUSES = (ChallanStatus.UNPAID, ChallanStatus.OVERDUE, ChallanStatus.DISPUTED)
DISPUTABLE_STATUSES = (ChallanStatus.UNPAID, ChallanStatus.OVERDUE)

class ChallanService:
    @staticmethod
    def create_challan(db: Session, data: ChallanCreate, officer: PoliceOfficer) -> Tuple[Challan, str]:
        """Issue a challan; returns the challan and the user-facing message"""
        violation = db.query(Violation).filter(Violation.id == data.violation_id).first()
        if not violation:
            raise ValueError(f"Violation with ID {data.violation_id} not found.")

        signature = None
        if data.emission_report_id is not None:
            report = db.query(EmissionReport).filter(EmissionReport.id == data.emission_report_id).first()
            if not report:
                raise ValueError(f"Emission Report with ID {data.emission_report_id} not found.")
            if db.query(Challan.id).filter(Challan.emission_report_id == report.id).first():
                raise ValueError(
                    f"Emission Report #{report.id} already has a challan. "
                    "Each emission report can only have one challan."
                )
            signature = report.digital_signature_value

        try:
            evidence = compress_evidence(data.evidence_path)
        except ValueError as e:
            raise ValueError(f"Failed to compress evidence image: {e}")

        if data.vehicle_id is not None and data.vehicle_input is not None:
            raise ValueError("Provide either VehicleId or VehicleInput, not both.")
        if data.accused_id is not None and data.accused_input is not None:
            raise ValueError("Provide either AccusedId or AccusedInput, not both.")

        # existing ids are checked before any new row is flushed
        if data.vehicle_id is not None:
            vehicle = db.query(Vehicle).filter(Vehicle.id == data.vehicle_id).first()
            if not vehicle:
                raise ValueError(f"Vehicle with ID {data.vehicle_id} not found.")
        elif data.vehicle_input is None:
            raise ValueError("Either VehicleId or VehicleInput must be provided.")

        if data.accused_id is not None:
            accused = db.query(Accused).filter(Accused.id == data.accused_id).first()
            if not accused:
                raise ValueError(f"Accused with ID {data.accused_id} not found.")
        elif data.accused_input is not None:
            accused = AccusedService.get_or_create(db, data.accused_input)
        else:
            raise ValueError("Either AccusedId or AccusedInput must be provided.")

        if data.vehicle_input is not None:
            vehicle = VehicleService.get_or_create(db, data.vehicle_input, owner_id=accused.id)

        if vehicle.owner_id is None:
            vehicle.owner_id = accused.id

        issue_datetime = datetime.utcnow()
        challan = Challan(
            officer_id=officer.id,
            accused_id=accused.id,
            vehicle_id=vehicle.id,
            violation_id=violation.id,
            emission_report_id=data.emission_report_id,
            evidence_path=evidence,
            issue_datetime=issue_datetime,
            due_datetime=issue_datetime + timedelta(days=settings.CHALLAN_DUE_DAYS),
            status=ChallanStatus.UNPAID,
            bank_details=data.bank_details or settings.DEFAULT_BANK_DETAILS,
            digital_signature_value=signature,
        )
        db.add(challan)
        db.commit()
        db.refresh(challan)

        logger.info(
            f"Challan {challan.id} issued by officer {officer.id} to vehicle {vehicle.plate_number} "
            f"for '{violation.violation_type}'"
        )
        if violation.is_cognizable:
            message = (
                f"COGNIZABLE VIOLATION - Challan #{challan.id} created successfully. "
                f"This violation is cognizable and eligible for FIR filing by Station Authority."
            )
        else:
            message = (
                f"Challan #{challan.id} created successfully. "
                f"Due date: {challan.due_datetime:%Y-%m-%d}."
            )
        return challan, message

    @staticmethod
    def get_challan_by_id(db: Session, challan_id: int) -> Optional[Challan]:
        return db.query(Challan).filter(Challan.id == challan_id).first()

    @staticmethod
    def get_all_challans(db: Session) -> List[Challan]:
        return db.query(Challan).order_by(Challan.issue_datetime.desc()).all()

    @staticmethod
    def get_challans_by_officer(db: Session, officer_id: int) -> List[Challan]:
        return (
            db.query(Challan)
            .filter(Challan.officer_id == officer_id)
            .order_by(Challan.issue_datetime.desc())
            .all()
        )

    @staticmethod
    def get_challans_by_station(db: Session, station_id: int) -> List[Challan]:
        return (
            db.query(Challan)
            .join(PoliceOfficer, Challan.officer_id == PoliceOfficer.id)
            .filter(PoliceOfficer.station_id == station_id)
            .order_by(Challan.issue_datetime.desc())
            .all()
        )

    @staticmethod
    def get_challans_by_vehicle(db: Session, vehicle_id: int) -> List[Challan]:
        return (
            db.query(Challan)
            .filter(Challan.vehicle_id == vehicle_id)
            .order_by(Challan.issue_datetime.desc())
            .all()
        )

    @staticmethod
    def get_challans_by_accused(db: Session, accused_id: int) -> List[Challan]:
        return (
            db.query(Challan)
            .filter(Challan.accused_id == accused_id)
            .order_by(Challan.issue_datetime.desc())
            .all()
        )

    @staticmethod
    def get_challans_by_status(db: Session, status: ChallanStatus) -> List[Challan]:
        return (
            db.query(Challan)
            .filter(Challan.status == status)
            .order_by(Challan.issue_datetime.desc())
            .all()
        )

    @staticmethod
    def get_challans_by_date_range(db: Session, start: datetime, end: datetime) -> List[Challan]:
        if start > end:
            raise ValueError("Start date must be before end date.")
        return (
            db.query(Challan)
            .filter(Challan.issue_datetime >= start, Challan.issue_datetime <= end)
            .order_by(Challan.issue_datetime.desc())
            .all()
        )

    @staticmethod
    def get_overdue_challans(db: Session) -> List[Challan]:
        now = datetime.utcnow()
        return (
            db.query(Challan)
            .filter(or_(
                Challan.status == ChallanStatus.OVERDUE,
                and_(Challan.status == ChallanStatus.UNPAID, Challan.due_datetime < now),
            ))
            .order_by(Challan.due_datetime)
            .all()
        )

    @staticmethod
    def search_by_plate_and_cnic(db: Session, plate_number: str, cnic: str) -> List[Challan]:
        """Public lookup: both the plate and the CNIC must match"""
        return (
            db.query(Challan)
            .join(Vehicle, Challan.vehicle_id == Vehicle.id)
            .join(Accused, Challan.accused_id == Accused.id)
            .filter(Vehicle.plate_number == plate_number, Accused.cnic == cnic)
            .order_by(Challan.issue_datetime.desc())
            .all()
        )

    @staticmethod
    def pay_challan(db: Session, challan_id: int) -> Optional[Challan]:
        challan = db.query(Challan).filter(Challan.id == challan_id).first()
        if not challan:
            return None
        if challan.status not in PAYABLE_STATUSES:
            raise ValueError(f"Challan #{challan.id} is already {challan.status.value}.")

        challan.status = ChallanStatus.PAID
        challan.paid_at = datetime.utcnow()
        db.commit()
        db.refresh(challan)
        logger.info(f"Challan {challan.id} marked as paid")
        return challan

    @staticmethod
    def dispute_challan(db: Session, challan_id: int, reason: str) -> Optional[Challan]:
        challan = db.query(Challan).filter(Challan.id == challan_id).first()
        if not challan:
            return None
        if challan.status not in DISPUTABLE_STATUSES:
            raise ValueError(
                f"Challan #{challan.id} cannot be disputed while {challan.status.value}."
            )

        challan.status = ChallanStatus.DISPUTED
        challan.disputed_at = datetime.utcnow()
        challan.dispute_reason = reason.strip()
        db.commit()
        db.refresh(challan)
        logger.info(f"Challan {challan.id} disputed")
        return challan

    @staticmethod
    def mark_overdue(db: Session) -> int:
        """Move unpaid challans past their due date to Overdue"""
        now = datetime.utcnow()
        challans = (
            db.query(Challan)
            .filter(Challan.status == ChallanStatus.UNPAID, Challan.due_datetime < now)
            .all()
        )
        for challan in challans:
            challan.status = ChallanStatus.OVERDUE
        db.commit()
        if challans:
            logger.info(f"Marked {len(challans)} challan(s) as overdue")
        return len(challans)
