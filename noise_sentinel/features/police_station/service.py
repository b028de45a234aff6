from sqlalchemy.orm import Session
from sqlalchemy import func
from noise_sentinel.features.police_station.model import PoliceStation
from noise_sentinel.features.police_station.schema import PoliceStationCreate, PoliceStationUpdate
from noise_sentinel.features.user.model import PoliceOfficer
from noise_sentinel.core.logging import logger
from typing import Optional, List

class PoliceStationService:
    @staticmethod
    def _check_unique(db: Session, station_code: Optional[str], station_name: Optional[str],
                      province: Optional[str], exclude_id: Optional[int] = None):
        if station_code:
            query = db.query(PoliceStation).filter(func.upper(PoliceStation.station_code) == station_code.upper())
            if exclude_id:
                query = query.filter(PoliceStation.id != exclude_id)
            if query.first():
                raise ValueError(f"Station code '{station_code}' already exists.")
        if station_name:
            query = db.query(PoliceStation).filter(
                func.lower(PoliceStation.station_name) == station_name.lower(),
                PoliceStation.province == province,
            )
            if exclude_id:
                query = query.filter(PoliceStation.id != exclude_id)
            if query.first():
                raise ValueError(f"Police station '{station_name}' already exists in {province or 'this province'}.")

    @staticmethod
    def create_station(db: Session, data: PoliceStationCreate) -> PoliceStation:
        PoliceStationService._check_unique(db, data.station_code, data.station_name, data.province)
        station = PoliceStation(**data.model_dump(), is_active=True)
        station.station_code = station.station_code.strip().upper()
        db.add(station)
        db.commit()
        db.refresh(station)
        logger.info(f"Police station {station.station_code} created")
        return station

    @staticmethod
    def get_station_by_id(db: Session, station_id: int) -> Optional[PoliceStation]:
        return db.query(PoliceStation).filter(PoliceStation.id == station_id).first()

    @staticmethod
    def get_station_by_code(db: Session, station_code: str) -> Optional[PoliceStation]:
        return db.query(PoliceStation).filter(
            func.upper(PoliceStation.station_code) == station_code.strip().upper()
        ).first()

    @staticmethod
    def get_all_stations(db: Session, include_inactive: bool = False) -> List[PoliceStation]:
        query = db.query(PoliceStation)
        if not include_inactive:
            query = query.filter(PoliceStation.is_active.is_(True))
        return query.order_by(PoliceStation.station_name).all()

    @staticmethod
    def get_stations_by_province(db: Session, province: str) -> List[PoliceStation]:
        return (
            db.query(PoliceStation)
            .filter(func.lower(PoliceStation.province) == province.lower(), PoliceStation.is_active.is_(True))
            .order_by(PoliceStation.station_name)
            .all()
        )

    @staticmethod
    def update_station(db: Session, station_id: int, data: PoliceStationUpdate) -> Optional[PoliceStation]:
        station = db.query(PoliceStation).filter(PoliceStation.id == station_id).first()
        if not station:
            return None

        update_data = data.model_dump(exclude_unset=True)
        new_code = update_data.get("station_code")
        if new_code and new_code.upper() != station.station_code.upper():
            PoliceStationService._check_unique(db, new_code, None, None, exclude_id=station_id)
        new_name = update_data.get("station_name", station.station_name)
        new_province = update_data.get("province", station.province)
        if new_name != station.station_name or new_province != station.province:
            PoliceStationService._check_unique(db, None, new_name, new_province, exclude_id=station_id)

        for field, value in update_data.items():
            setattr(station, field, value)
        if new_code:
            station.station_code = new_code.strip().upper()

        db.commit()
        db.refresh(station)
        return station

    @staticmethod
    def delete_station(db: Session, station_id: int) -> bool:
        """Deactivate a station; rejected while officers are assigned"""
        station = db.query(PoliceStation).filter(PoliceStation.id == station_id).first()
        if not station:
            return False

        officer_count = (
            db.query(func.count(PoliceOfficer.id))
            .filter(PoliceOfficer.station_id == station_id)
            .scalar()
        )
        if officer_count:
            raise ValueError(
                f"Cannot delete police station '{station.station_name}' because it has "
                f"{officer_count} officer(s) assigned. Please reassign or remove officers first."
            )

        station.is_active = False
        db.commit()
        logger.info(f"Police station {station.station_code} deactivated")
        return True
