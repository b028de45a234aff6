from sqlalchemy.orm import Session
from sqlalchemy import func
from noise_sentinel.features.accused.model import Accused
from noise_sentinel.features.accused.schema import AccusedCreate, AccusedUpdate, AccusedInput
from noise_sentinel.features.challan.model import Challan
from noise_sentinel.features.vehicle.model import Vehicle
from noise_sentinel.core.logging import logger
from typing import Optional, List

class AccusedService:
    @staticmethod
    def create_accused(db: Session, data: AccusedCreate) -> Accused:
        if db.query(Accused).filter(Accused.cnic == data.cnic).first():
            raise ValueError(f"Person with CNIC '{data.cnic}' already exists in the system.")
        accused = Accused(**data.model_dump())
        db.add(accused)
        db.commit()
        db.refresh(accused)
        logger.info(f"Accused record {accused.id} created")
        return accused

    @staticmethod
    def get_or_create(db: Session, data: AccusedInput) -> Accused:
        """Find by CNIC, refreshing contact details, or add a new person. Does not commit."""
        accused = db.query(Accused).filter(Accused.cnic == data.cnic).first()
        if accused:
            if data.contact:
                accused.contact = data.contact
            if data.address:
                accused.address = data.address
            return accused

        accused = Accused(**data.model_dump())
        db.add(accused)
        db.flush()
        return accused

    @staticmethod
    def get_accused_by_id(db: Session, accused_id: int) -> Optional[Accused]:
        return db.query(Accused).filter(Accused.id == accused_id).first()

    @staticmethod
    def get_accused_by_cnic(db: Session, cnic: str) -> Optional[Accused]:
        return db.query(Accused).filter(Accused.cnic == cnic.strip()).first()

    @staticmethod
    def get_all_accused(db: Session) -> List[Accused]:
        return db.query(Accused).order_by(Accused.full_name).all()

    @staticmethod
    def search_by_name(db: Session, name: str) -> List[Accused]:
        return (
            db.query(Accused)
            .filter(Accused.full_name.ilike(f"%{name.strip()}%"))
            .order_by(Accused.full_name)
            .all()
        )

    @staticmethod
    def get_by_province(db: Session, province: str) -> List[Accused]:
        return db.query(Accused).filter(func.lower(Accused.province) == province.lower()).all()

    @staticmethod
    def get_by_city(db: Session, city: str) -> List[Accused]:
        return db.query(Accused).filter(func.lower(Accused.city) == city.lower()).all()

    @staticmethod
    def update_accused(db: Session, accused_id: int, data: AccusedUpdate) -> Optional[Accused]:
        accused = db.query(Accused).filter(Accused.id == accused_id).first()
        if not accused:
            return None

        update_data = data.model_dump(exclude_unset=True)
        new_cnic = update_data.get("cnic")
        if new_cnic and new_cnic != accused.cnic:
            if db.query(Accused).filter(Accused.cnic == new_cnic, Accused.id != accused_id).first():
                raise ValueError(f"Person with CNIC '{new_cnic}' already exists.")
        for field, value in update_data.items():
            if value is None and field in ("full_name", "cnic"):
                continue
            setattr(accused, field, value)

        db.commit()
        db.refresh(accused)
        return accused

    @staticmethod
    def delete_accused(db: Session, accused_id: int) -> bool:
        accused = db.query(Accused).filter(Accused.id == accused_id).first()
        if not accused:
            return False

        challan_count = db.query(func.count(Challan.id)).filter(Challan.accused_id == accused_id).scalar()
        if challan_count:
            raise ValueError(
                f"Cannot delete person '{accused.full_name}' because they have {challan_count} violation(s) linked."
            )
        vehicle_count = db.query(func.count(Vehicle.id)).filter(Vehicle.owner_id == accused_id).scalar()
        if vehicle_count:
            raise ValueError(
                f"Cannot delete person '{accused.full_name}' because they own {vehicle_count} vehicle(s)."
            )

        db.delete(accused)
        db.commit()
        logger.info(f"Accused record {accused_id} deleted")
        return True
