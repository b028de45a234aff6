from sqlalchemy.orm import Session
from sqlalchemy import func
from noise_sentinel.features.violation.model import Violation
from noise_sentinel.features.violation.schema import ViolationCreate, ViolationUpdate
from noise_sentinel.features.challan.model import Challan
from noise_sentinel.core.logging import logger
from typing import Optional, List

class ViolationService:
    @staticmethod
    def _check_type_unique(db: Session, violation_type: str, exclude_id: Optional[int] = None):
        query = db.query(Violation).filter(func.lower(Violation.violation_type) == violation_type.strip().lower())
        if exclude_id:
            query = query.filter(Violation.id != exclude_id)
        if query.first():
            raise ValueError(f"A violation type with the name '{violation_type}' already exists.")

    @staticmethod
    def create_violation(db: Session, data: ViolationCreate) -> Violation:
        ViolationService._check_type_unique(db, data.violation_type)
        violation = Violation(**data.model_dump())
        violation.violation_type = violation.violation_type.strip()
        db.add(violation)
        db.commit()
        db.refresh(violation)
        logger.info(f"Violation type '{violation.violation_type}' created (cognizable={violation.is_cognizable})")
        return violation

    @staticmethod
    def get_violation_by_id(db: Session, violation_id: int) -> Optional[Violation]:
        return db.query(Violation).filter(Violation.id == violation_id).first()

    @staticmethod
    def get_all_violations(db: Session) -> List[Violation]:
        return db.query(Violation).order_by(Violation.violation_type).all()

    @staticmethod
    def get_cognizable_violations(db: Session) -> List[Violation]:
        return (
            db.query(Violation)
            .filter(Violation.is_cognizable.is_(True))
            .order_by(Violation.violation_type)
            .all()
        )

    @staticmethod
    def search_violations(db: Session, query_text: str) -> List[Violation]:
        pattern = f"%{query_text.strip()}%"
        return (
            db.query(Violation)
            .filter(Violation.violation_type.ilike(pattern))
            .order_by(Violation.violation_type)
            .all()
        )

    @staticmethod
    def update_violation(db: Session, violation_id: int, data: ViolationUpdate) -> Optional[Violation]:
        violation = db.query(Violation).filter(Violation.id == violation_id).first()
        if not violation:
            return None

        update_data = data.model_dump(exclude_unset=True)
        if update_data.get("violation_type"):
            ViolationService._check_type_unique(db, update_data["violation_type"], exclude_id=violation_id)
        for field, value in update_data.items():
            if value is None and field != "section_of_law":
                continue
            setattr(violation, field, value)

        db.commit()
        db.refresh(violation)
        return violation

    @staticmethod
    def delete_violation(db: Session, violation_id: int) -> bool:
        violation = db.query(Violation).filter(Violation.id == violation_id).first()
        if not violation:
            return False

        if db.query(Challan.id).filter(Challan.violation_id == violation_id).first():
            raise ValueError(
                f"Cannot delete violation '{violation.violation_type}' because it has challans linked. "
                f"Please remove or reassign challans first."
            )

        db.delete(violation)
        db.commit()
        logger.info(f"Violation type '{violation.violation_type}' deleted")
        return True
