from sqlalchemy.orm import Session
from sqlalchemy import func
from noise_sentinel.features.vehicle.model import Vehicle
from noise_sentinel.features.vehicle.schema import VehicleCreate, VehicleUpdate, VehicleInput
from noise_sentinel.features.accused.model import Accused
from noise_sentinel.features.challan.model import Challan
from noise_sentinel.core.validators import normalize_plate
from noise_sentinel.core.logging import logger
from typing import Optional, List
from datetime import datetime

class VehicleService:
    @staticmethod
    def _check_year(registration_year: Optional[int]):
        if registration_year is not None and registration_year > datetime.utcnow().year:
            raise ValueError("Vehicle registration year cannot be in the future.")

    @staticmethod
    def create_vehicle(db: Session, data: VehicleCreate) -> Vehicle:
        plate = normalize_plate(data.plate_number)
        if db.query(Vehicle).filter(Vehicle.plate_number == plate).first():
            raise ValueError(f"Vehicle with plate number '{plate}' already exists.")
        VehicleService._check_year(data.registration_year)
        if data.owner_id is not None:
            if not db.query(Accused).filter(Accused.id == data.owner_id).first():
                raise ValueError(f"Owner with ID {data.owner_id} not found.")

        vehicle = Vehicle(**data.model_dump())
        vehicle.plate_number = plate
        db.add(vehicle)
        db.commit()
        db.refresh(vehicle)
        logger.info(f"Vehicle {vehicle.plate_number} registered")
        return vehicle

    @staticmethod
    def get_or_create(db: Session, data: VehicleInput, owner_id: Optional[int] = None) -> Vehicle:
        """Find by plate, linking an owner if it has none, or add a new vehicle. Does not commit."""
        plate = normalize_plate(data.plate_number)
        vehicle = db.query(Vehicle).filter(Vehicle.plate_number == plate).first()
        if vehicle:
            if vehicle.owner_id is None and owner_id is not None:
                vehicle.owner_id = owner_id
            return vehicle

        VehicleService._check_year(data.registration_year)
        vehicle = Vehicle(**data.model_dump(), owner_id=owner_id)
        vehicle.plate_number = plate
        db.add(vehicle)
        db.flush()
        return vehicle

    @staticmethod
    def get_vehicle_by_id(db: Session, vehicle_id: int) -> Optional[Vehicle]:
        return db.query(Vehicle).filter(Vehicle.id == vehicle_id).first()

    @staticmethod
    def get_vehicle_by_plate(db: Session, plate_number: str) -> Optional[Vehicle]:
        return db.query(Vehicle).filter(Vehicle.plate_number == normalize_plate(plate_number)).first()

    @staticmethod
    def get_all_vehicles(db: Session) -> List[Vehicle]:
        return db.query(Vehicle).order_by(Vehicle.plate_number).all()

    @staticmethod
    def get_vehicles_by_owner(db: Session, owner_id: int) -> List[Vehicle]:
        return db.query(Vehicle).filter(Vehicle.owner_id == owner_id).all()

    @staticmethod
    def search_by_make(db: Session, make: str) -> List[Vehicle]:
        return (
            db.query(Vehicle)
            .filter(Vehicle.make.ilike(f"%{make.strip()}%"))
            .order_by(Vehicle.plate_number)
            .all()
        )

    @staticmethod
    def update_vehicle(db: Session, vehicle_id: int, data: VehicleUpdate) -> Optional[Vehicle]:
        vehicle = db.query(Vehicle).filter(Vehicle.id == vehicle_id).first()
        if not vehicle:
            return None

        update_data = data.model_dump(exclude_unset=True)
        new_plate = update_data.get("plate_number")
        if new_plate and new_plate != vehicle.plate_number:
            if db.query(Vehicle).filter(Vehicle.plate_number == new_plate, Vehicle.id != vehicle_id).first():
                raise ValueError(f"Vehicle with plate number '{new_plate}' already exists.")
        VehicleService._check_year(update_data.get("registration_year"))
        if update_data.get("owner_id") is not None:
            if not db.query(Accused).filter(Accused.id == update_data["owner_id"]).first():
                raise ValueError(f"Owner with ID {update_data['owner_id']} not found.")

        for field, value in update_data.items():
            if value is None and field == "plate_number":
                continue
            setattr(vehicle, field, value)

        db.commit()
        db.refresh(vehicle)
        return vehicle

    @staticmethod
    def delete_vehicle(db: Session, vehicle_id: int) -> bool:
        vehicle = db.query(Vehicle).filter(Vehicle.id == vehicle_id).first()
        if not vehicle:
            return False

        challan_count = db.query(func.count(Challan.id)).filter(Challan.vehicle_id == vehicle_id).scalar()
        if challan_count:
            raise ValueError(
                f"Cannot delete vehicle '{vehicle.plate_number}' because it has {challan_count} violation(s) linked."
            )

        db.delete(vehicle)
        db.commit()
        logger.info(f"Vehicle {vehicle_id} deleted")
        return True
