from sqlalchemy.orm import Session
from sqlalchemy import func
from noise_sentinel.features.iot_device.model import IotDevice
from noise_sentinel.features.iot_device.schema import IotDeviceRegister, IotDeviceUpdate
from noise_sentinel.features.user.model import PoliceOfficer
from noise_sentinel.core.logging import logger
from typing import Optional, List
from datetime import datetime

class IotDeviceService:
    @staticmethod
    def _check_name(db: Session, device_name: str, exclude_id: Optional[int] = None):
        query = db.query(IotDevice).filter(func.upper(IotDevice.device_name) == device_name.upper())
        if exclude_id:
            query = query.filter(IotDevice.id != exclude_id)
        if query.first():
            raise ValueError(f"IoT Device with name '{device_name}' already exists in the system.")

    @staticmethod
    def register_device(db: Session, data: IotDeviceRegister) -> IotDevice:
        IotDeviceService._check_name(db, data.device_name)
        device = IotDevice(
            **data.model_dump(),
            is_registered=True,
            is_active=True,
        )
        db.add(device)
        db.commit()
        db.refresh(device)
        logger.info(f"IoT device {device.device_name} registered (calibrated={device.is_calibrated})")
        return device

    @staticmethod
    def get_device_by_id(db: Session, device_id: int) -> Optional[IotDevice]:
        return db.query(IotDevice).filter(IotDevice.id == device_id).first()

    @staticmethod
    def get_device_by_name(db: Session, device_name: str) -> Optional[IotDevice]:
        return db.query(IotDevice).filter(func.upper(IotDevice.device_name) == device_name.upper()).first()

    @staticmethod
    def get_all_devices(db: Session, include_inactive: bool = False) -> List[IotDevice]:
        query = db.query(IotDevice)
        if not include_inactive:
            query = query.filter(IotDevice.is_active.is_(True))
        return query.order_by(IotDevice.device_name).all()

    @staticmethod
    def get_available_devices(db: Session) -> List[IotDevice]:
        """Active, calibrated and not paired with any officer"""
        return (
            db.query(IotDevice)
            .filter(
                IotDevice.is_active.is_(True),
                IotDevice.is_calibrated.is_(True),
                IotDevice.paired_officer_id.is_(None),
            )
            .order_by(IotDevice.device_name)
            .all()
        )

    @staticmethod
    def get_officer_devices(db: Session, officer_id: int) -> List[IotDevice]:
        return db.query(IotDevice).filter(IotDevice.paired_officer_id == officer_id).all()

    @staticmethod
    def update_device(db: Session, device_id: int, data: IotDeviceUpdate) -> Optional[IotDevice]:
        device = db.query(IotDevice).filter(IotDevice.id == device_id).first()
        if not device:
            return None

        update_data = data.model_dump(exclude_unset=True)
        new_name = update_data.get("device_name")
        if new_name and new_name.upper() != device.device_name.upper():
            IotDeviceService._check_name(db, new_name, exclude_id=device_id)
        for field, value in update_data.items():
            if value is None and field != "calibration_certificate_no":
                continue
            setattr(device, field, value)

        db.commit()
        db.refresh(device)
        return device

    @staticmethod
    def pair_device(db: Session, device_id: int, officer: PoliceOfficer) -> IotDevice:
        device = db.query(IotDevice).filter(IotDevice.id == device_id).first()
        if not device:
            raise ValueError(f"IoT Device with ID {device_id} not found.")
        if not device.is_active:
            raise ValueError(f"Device '{device.device_name}' is not active. Cannot pair.")
        if not device.is_calibrated:
            raise ValueError(f"Device '{device.device_name}' is not calibrated. Cannot use for readings.")
        if device.paired_officer_id == officer.id:
            raise ValueError(f"Device '{device.device_name}' is already paired with you.")
        if device.paired_officer_id is not None:
            raise ValueError(f"Device '{device.device_name}' is already paired with another officer.")

        device.paired_officer_id = officer.id
        device.pairing_datetime = datetime.utcnow()
        db.commit()
        db.refresh(device)
        logger.info(f"Device {device.device_name} paired with officer {officer.id}")
        return device

    @staticmethod
    def unpair_device(db: Session, device_id: int, officer: Optional[PoliceOfficer] = None) -> Optional[IotDevice]:
        """Release a device; an officer may only release their own pairing"""
        device = db.query(IotDevice).filter(IotDevice.id == device_id).first()
        if not device:
            return None
        if device.paired_officer_id is None:
            raise ValueError(f"Device '{device.device_name}' is not paired.")
        if officer is not None and device.paired_officer_id != officer.id:
            raise PermissionError(f"Device '{device.device_name}' is paired with another officer.")

        device.paired_officer_id = None
        device.pairing_datetime = None
        db.commit()
        db.refresh(device)
        logger.info(f"Device {device.device_name} unpaired")
        return device

    @staticmethod
    def deactivate_device(db: Session, device_id: int) -> bool:
        device = db.query(IotDevice).filter(IotDevice.id == device_id).first()
        if not device:
            return False
        device.is_active = False
        device.paired_officer_id = None
        device.pairing_datetime = None
        db.commit()
        logger.info(f"Device {device.device_name} deactivated")
        return True
