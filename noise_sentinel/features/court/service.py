from sqlalchemy.orm import Session
from sqlalchemy import func
from noise_sentinel.features.court.model import Court, CourtType
from noise_sentinel.features.court.schema import CourtCreate, CourtUpdate
from noise_sentinel.features.user.model import Judge
from noise_sentinel.core.logging import logger
from typing import Optional, List

DEFAULT_COURT_TYPES = [
    "Supreme Court",
    "High Court",
    "District Court",
    "Sessions Court",
    "Civil Court",
]

class CourtService:
    @staticmethod
    def seed_court_types(db: Session) -> None:
        existing = {ct.court_type_name for ct in db.query(CourtType).all()}
        for name in DEFAULT_COURT_TYPES:
            if name not in existing:
                db.add(CourtType(court_type_name=name))
                logger.info(f"Seeded court type '{name}'")
        db.commit()

    @staticmethod
    def get_court_types(db: Session) -> List[CourtType]:
        return db.query(CourtType).order_by(CourtType.id).all()

    @staticmethod
    def _check_name(db: Session, court_name: str, province: Optional[str], exclude_id: Optional[int] = None):
        query = db.query(Court).filter(
            func.lower(Court.court_name) == court_name.lower(),
            Court.province == province,
        )
        if exclude_id:
            query = query.filter(Court.id != exclude_id)
        if query.first():
            raise ValueError(f"Court '{court_name}' already exists in {province or 'this province'}.")

    @staticmethod
    def _check_type(db: Session, court_type_id: int):
        if not db.query(CourtType).filter(CourtType.id == court_type_id).first():
            raise ValueError(f"Court type with ID {court_type_id} not found.")

    @staticmethod
    def create_court(db: Session, data: CourtCreate) -> Court:
        CourtService._check_type(db, data.court_type_id)
        CourtService._check_name(db, data.court_name, data.province)
        court = Court(**data.model_dump())
        db.add(court)
        db.commit()
        db.refresh(court)
        logger.info(f"Court '{court.court_name}' created")
        return court

    @staticmethod
    def get_court_by_id(db: Session, court_id: int) -> Optional[Court]:
        return db.query(Court).filter(Court.id == court_id).first()

    @staticmethod
    def get_all_courts(db: Session) -> List[Court]:
        return db.query(Court).order_by(Court.court_name).all()

    @staticmethod
    def get_courts_by_type(db: Session, court_type_id: int) -> List[Court]:
        return db.query(Court).filter(Court.court_type_id == court_type_id).order_by(Court.court_name).all()

    @staticmethod
    def get_courts_by_province(db: Session, province: str) -> List[Court]:
        return (
            db.query(Court)
            .filter(func.lower(Court.province) == province.lower())
            .order_by(Court.court_name)
            .all()
        )

    @staticmethod
    def update_court(db: Session, court_id: int, data: CourtUpdate) -> Optional[Court]:
        court = db.query(Court).filter(Court.id == court_id).first()
        if not court:
            return None

        update_data = data.model_dump(exclude_unset=True)
        if update_data.get("court_type_id") is not None:
            CourtService._check_type(db, update_data["court_type_id"])
        new_name = update_data.get("court_name") or court.court_name
        new_province = update_data.get("province", court.province)
        if new_name != court.court_name or new_province != court.province:
            CourtService._check_name(db, new_name, new_province, exclude_id=court_id)

        for field, value in update_data.items():
            # required columns
            if value is None and field in ("court_name", "court_type_id"):
                continue
            setattr(court, field, value)

        db.commit()
        db.refresh(court)
        return court

    @staticmethod
    def delete_court(db: Session, court_id: int) -> bool:
        court = db.query(Court).filter(Court.id == court_id).first()
        if not court:
            return False

        judge_count = db.query(func.count(Judge.id)).filter(Judge.court_id == court_id).scalar()
        if judge_count:
            raise ValueError(
                f"Cannot delete court '{court.court_name}' because it has "
                f"{judge_count} judge(s) assigned. Please reassign or remove judges first."
            )

        db.delete(court)
        db.commit()
        logger.info(f"Court {court_id} deleted")
        return True
