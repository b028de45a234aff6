from sqlalchemy.orm import Session
from sqlalchemy import or_
from noise_sentinel.features.fir.model import Fir
from noise_sentinel.features.fir.schema import FirCreate, FirUpdate
from noise_sentinel.features.challan.model import Challan
from noise_sentinel.features.violation.model import Violation
from noise_sentinel.features.vehicle.model import Vehicle
from noise_sentinel.features.accused.model import Accused
from noise_sentinel.features.police_station.model import PoliceStation
from noise_sentinel.core.logging import logger
from noise_sentinel.models.enums import FirStatus
from typing import Optional, List
from datetime import datetime

class FirService:
    @staticmethod
    def generate_fir_number(db: Session, station: PoliceStation, year: int) -> str:
        """
        FIR-{station code without dashes}-{year}-{sequence}

        Codes such as LHR-001 and LHR001 share a prefix, so the sequence
        continues from the highest number already issued under it.
        """
        station_code = (station.station_code or "STATION").replace("-", "")
        prefix = f"FIR-{station_code}-{year}-"
        existing = db.query(Fir.fir_no).filter(Fir.fir_no.like(f"{prefix}%")).all()
        last = 0
        for (fir_no,) in existing:
            suffix = fir_no[len(prefix):]
            if suffix.isdigit():
                last = max(last, int(suffix))
        return f"{prefix}{last + 1:04d}"

    @staticmethod
    def create_fir(db: Session, data: FirCreate) -> Fir:
        challan = db.query(Challan).filter(Challan.id == data.challan_id).first()
        if not challan:
            raise ValueError(f"Challan with ID {data.challan_id} not found.")
        if not challan.violation or not challan.violation.is_cognizable:
            raise ValueError(
                f"Cannot create FIR for non-cognizable violation. "
                f"Violation type '{challan.violation_type}' is not cognizable."
            )
        if db.query(Fir.id).filter(Fir.challan_id == challan.id).first():
            raise ValueError(f"Challan #{challan.id} already has an FIR. Each challan can only have one FIR.")

        officer = challan.officer
        if not officer:
            raise ValueError("Police Officer information not found in challan.")
        if not officer.station:
            raise ValueError("Station information not found for the officer.")

        date_filed = datetime.utcnow()
        fir = Fir(
            fir_no=FirService.generate_fir_number(db, officer.station, date_filed.year),
            station_id=officer.station_id,
            challan_id=challan.id,
            informant_id=officer.id,
            date_filed=date_filed,
            fir_description=data.fir_description,
            fir_status=FirStatus.FILED,
            investigation_report=data.investigation_report,
        )
        db.add(fir)
        db.commit()
        db.refresh(fir)
        logger.info(f"FIR {fir.fir_no} filed for challan {challan.id}")
        return fir

    @staticmethod
    def get_fir_by_id(db: Session, fir_id: int) -> Optional[Fir]:
        return db.query(Fir).filter(Fir.id == fir_id).first()

    @staticmethod
    def get_fir_by_number(db: Session, fir_no: str) -> Optional[Fir]:
        return db.query(Fir).filter(Fir.fir_no == fir_no.strip().upper()).first()

    @staticmethod
    def get_all_firs(db: Session) -> List[Fir]:
        return db.query(Fir).order_by(Fir.date_filed.desc()).all()

    @staticmethod
    def get_firs_by_station(db: Session, station_id: int) -> List[Fir]:
        return db.query(Fir).filter(Fir.station_id == station_id).order_by(Fir.date_filed.desc()).all()

    @staticmethod
    def get_firs_by_informant(db: Session, informant_id: int) -> List[Fir]:
        return db.query(Fir).filter(Fir.informant_id == informant_id).order_by(Fir.date_filed.desc()).all()

    @staticmethod
    def get_firs_by_status(db: Session, fir_status: FirStatus) -> List[Fir]:
        return db.query(Fir).filter(Fir.fir_status == fir_status).order_by(Fir.date_filed.desc()).all()

    @staticmethod
    def get_firs_by_date_range(db: Session, start: datetime, end: datetime) -> List[Fir]:
        if start > end:
            raise ValueError("Start date must be before end date.")
        return (
            db.query(Fir)
            .filter(Fir.date_filed >= start, Fir.date_filed <= end)
            .order_by(Fir.date_filed.desc())
            .all()
        )

    @staticmethod
    def get_cognizable_challans_without_fir(db: Session) -> List[Challan]:
        return (
            db.query(Challan)
            .join(Violation, Challan.violation_id == Violation.id)
            .outerjoin(Fir, Fir.challan_id == Challan.id)
            .filter(Violation.is_cognizable.is_(True), Fir.id.is_(None))
            .order_by(Challan.issue_datetime.desc())
            .all()
        )

    @staticmethod
    def search_firs(db: Session, query_text: str) -> List[Fir]:
        """Match FIR number, accused name or vehicle plate"""
        pattern = f"%{query_text.strip()}%"
        return (
            db.query(Fir)
            .join(Challan, Fir.challan_id == Challan.id)
            .join(Accused, Challan.accused_id == Accused.id)
            .join(Vehicle, Challan.vehicle_id == Vehicle.id)
            .filter(or_(
                Fir.fir_no.ilike(pattern),
                Accused.full_name.ilike(pattern),
                Vehicle.plate_number.ilike(pattern),
            ))
            .order_by(Fir.date_filed.desc())
            .all()
        )

    @staticmethod
    def update_fir(db: Session, fir_id: int, data: FirUpdate) -> Optional[Fir]:
        fir = db.query(Fir).filter(Fir.id == fir_id).first()
        if not fir:
            return None
        if fir.fir_status == FirStatus.CLOSED and data.fir_status != FirStatus.CLOSED:
            raise ValueError(f"FIR {fir.fir_no} is closed and cannot be reopened.")

        fir.fir_status = data.fir_status
        if data.investigation_report is not None:
            fir.investigation_report = data.investigation_report
        db.commit()
        db.refresh(fir)
        logger.info(f"FIR {fir.fir_no} status set to {fir.fir_status.value}")
        return fir

    @staticmethod
    def escalate_fir(db: Session, fir_id: int) -> Optional[Fir]:
        """Forward an FIR to court"""
        fir = db.query(Fir).filter(Fir.id == fir_id).first()
        if not fir:
            return None
        if fir.fir_status == FirStatus.CLOSED:
            raise ValueError(f"FIR {fir.fir_no} is closed and cannot be forwarded to court.")
        if fir.fir_status == FirStatus.FORWARDED_TO_COURT:
            raise ValueError(f"FIR {fir.fir_no} has already been forwarded to court.")

        fir.fir_status = FirStatus.FORWARDED_TO_COURT
        db.commit()
        db.refresh(fir)
        logger.info(f"FIR {fir.fir_no} forwarded to court")
        return fir
