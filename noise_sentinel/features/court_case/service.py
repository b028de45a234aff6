from sqlalchemy.orm import Session
from sqlalchemy import or_
from noise_sentinel.features.court_case.model import Case
from noise_sentinel.features.court_case.schema import CaseCreate, CaseUpdate
from noise_sentinel.features.fir.model import Fir
from noise_sentinel.features.challan.model import Challan
from noise_sentinel.features.accused.model import Accused
from noise_sentinel.features.vehicle.model import Vehicle
from noise_sentinel.features.court.model import Court
from noise_sentinel.features.user.model import Judge
from noise_sentinel.core.config import settings
from noise_sentinel.core.logging import logger
from noise_sentinel.models.enums import CaseStatus
from typing import Optional, List
from datetime import datetime, timedelta

COURT_TYPE_ABBREVIATIONS = {
    "supreme court": "SC",
    "high court": "HC",
    "district court": "DC",
    "civil court": "CC",
    "sessions court": "SESS",
}

CITY_ABBREVIATIONS = [
    ("lahore", "LHR"),
    ("karachi", "KHI"),
    ("islamabad", "ISB"),
    ("rawalpindi", "RWP"),
    ("faisalabad", "FSD"),
    ("multan", "MUL"),
    ("peshawar", "PSH"),
    ("quetta", "QTA"),
]

def court_type_abbreviation(court_type_name: Optional[str]) -> str:
    return COURT_TYPE_ABBREVIATIONS.get((court_type_name or "").strip().lower(), "COURT")

def city_abbreviation(city: Optional[str]) -> str:
    city = (city or "City").strip() or "City"
    lowered = city.lower()
    for name, abbr in CITY_ABBREVIATIONS:
        if name in lowered:
            return abbr
    return city[:3].upper()

def status_from_verdict(verdict: str) -> CaseStatus:
    text = verdict.lower()
    # "not guilty" contains "guilty"
    if "not guilty" in text or "acquitted" in text:
        return CaseStatus.ACQUITTED
    if "convicted" in text or "guilty" in text:
        return CaseStatus.CONVICTED
    if "dismissed" in text:
        return CaseStatus.DISMISSED
    return CaseStatus.CLOSED

class CaseService:
    @staticmethod
    def generate_case_number(db: Session, court: Court, year: int) -> str:
        """CASE-{court type}-{city}-{year}-{sequence}"""
        prefix = (
            f"CASE-{court_type_abbreviation(court.court_type_name)}-"
            f"{city_abbreviation(court.location or court.district)}-{year}-"
        )
        existing = db.query(Case.case_no).filter(Case.case_no.like(f"{prefix}%")).all()
        last = 0
        for (case_no,) in existing:
            suffix = case_no[len(prefix):]
            if suffix.isdigit():
                last = max(last, int(suffix))
        return f"{prefix}{last + 1:04d}"

    @staticmethod
    def create_case(db: Session, data: CaseCreate) -> Case:
        fir = db.query(Fir).filter(Fir.id == data.fir_id).first()
        if not fir:
            raise ValueError(f"FIR with ID {data.fir_id} not found.")
        if db.query(Case.id).filter(Case.fir_id == fir.id).first():
            raise ValueError(f"FIR #{fir.id} ({fir.fir_no}) already has a case. Each FIR can only have one case.")

        judge = db.query(Judge).filter(Judge.id == data.judge_id).first()
        if not judge:
            raise ValueError(f"Judge with ID {data.judge_id} not found.")
        if not judge.court:
            raise ValueError("Court information not found for judge.")

        now = datetime.utcnow()
        case = Case(
            case_no=CaseService.generate_case_number(db, judge.court, now.year),
            fir_id=fir.id,
            judge_id=judge.id,
            case_type=data.case_type or "Traffic Violation",
            case_status=CaseStatus.PENDING,
            hearing_date=data.hearing_date or now + timedelta(days=settings.HEARING_DEFAULT_DAYS),
        )
        db.add(case)
        db.commit()
        db.refresh(case)
        logger.info(f"Case {case.case_no} opened for FIR {fir.fir_no}, judge {judge.id}")
        return case

    @staticmethod
    def get_case_by_id(db: Session, case_id: int) -> Optional[Case]:
        return db.query(Case).filter(Case.id == case_id).first()

    @staticmethod
    def get_case_by_number(db: Session, case_no: str) -> Optional[Case]:
        return db.query(Case).filter(Case.case_no == case_no.strip().upper()).first()

    @staticmethod
    def get_all_cases(db: Session) -> List[Case]:
        return db.query(Case).order_by(Case.id.desc()).all()

    @staticmethod
    def get_cases_by_judge(db: Session, judge_id: int) -> List[Case]:
        return db.query(Case).filter(Case.judge_id == judge_id).order_by(Case.hearing_date).all()

    @staticmethod
    def get_cases_by_court(db: Session, court_id: int) -> List[Case]:
        return (
            db.query(Case)
            .join(Judge, Case.judge_id == Judge.id)
            .filter(Judge.court_id == court_id)
            .order_by(Case.hearing_date)
            .all()
        )

    @staticmethod
    def get_cases_by_status(db: Session, case_status: CaseStatus) -> List[Case]:
        return db.query(Case).filter(Case.case_status == case_status).order_by(Case.hearing_date).all()

    @staticmethod
    def get_hearings_in_range(db: Session, start: datetime, end: datetime) -> List[Case]:
        if start > end:
            raise ValueError("Start date must be before end date.")
        return (
            db.query(Case)
            .filter(Case.hearing_date >= start, Case.hearing_date <= end)
            .order_by(Case.hearing_date)
            .all()
        )

    @staticmethod
    def get_firs_without_case(db: Session) -> List[Fir]:
        return (
            db.query(Fir)
            .outerjoin(Case, Case.fir_id == Fir.id)
            .filter(Case.id.is_(None))
            .order_by(Fir.date_filed.desc())
            .all()
        )

    @staticmethod
    def search_cases(db: Session, query_text: str) -> List[Case]:
        """Match case number, FIR number, accused name or CNIC, or vehicle plate"""
        pattern = f"%{query_text.strip()}%"
        return (
            db.query(Case)
            .join(Fir, Case.fir_id == Fir.id)
            .join(Challan, Fir.challan_id == Challan.id)
            .join(Accused, Challan.accused_id == Accused.id)
            .join(Vehicle, Challan.vehicle_id == Vehicle.id)
            .filter(or_(
                Case.case_no.ilike(pattern),
                Fir.fir_no.ilike(pattern),
                Accused.full_name.ilike(pattern),
                Accused.cnic.ilike(pattern),
                Vehicle.plate_number.ilike(pattern),
            ))
            .order_by(Case.hearing_date)
            .all()
        )

    @staticmethod
    def update_case(db: Session, case_id: int, data: CaseUpdate, judge: Optional[Judge] = None) -> Optional[Case]:
        """Update status, hearing date or verdict. A judge may only update their own cases."""
        case = db.query(Case).filter(Case.id == case_id).first()
        if not case:
            return None
        if judge is not None and case.judge_id != judge.id:
            raise PermissionError("You can only update cases assigned to you.")

        if data.case_status is not None:
            case.case_status = data.case_status
        if data.hearing_date is not None:
            case.hearing_date = data.hearing_date
        if data.verdict:
            case.verdict = data.verdict
            if data.case_status is None:
                case.case_status = status_from_verdict(data.verdict)

        db.commit()
        db.refresh(case)
        logger.info(f"Case {case.case_no} updated, status {case.case_status.value}")
        return case

    @staticmethod
    def assign_judge(db: Session, case_id: int, judge_id: int) -> Optional[Case]:
        case = db.query(Case).filter(Case.id == case_id).first()
        if not case:
            return None
        judge = db.query(Judge).filter(Judge.id == judge_id).first()
        if not judge:
            raise ValueError(f"Judge with ID {judge_id} not found.")

        case.judge_id = judge.id
        db.commit()
        db.refresh(case)
        logger.info(f"Case {case.case_no} assigned to judge {judge.id}")
        return case
