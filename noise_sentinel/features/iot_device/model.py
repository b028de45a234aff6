from sqlalchemy import Column, Integer, String, Boolean, DateTime, ForeignKey
from sqlalchemy.orm import relationship
from noise_sentinel.core.database import Base

class IotDevice(Base):
    __tablename__ = "iot_devices"

    id = Column(Integer, primary_key=True, index=True)
    device_name = Column(String(100), unique=True, index=True, nullable=False)
    firmware_version = Column(String(50), nullable=True)
    calibration_date = Column(DateTime, nullable=True)
    is_calibrated = Column(Boolean, default=False, nullable=False)
    calibration_certificate_no = Column(String(100), nullable=True)
    is_registered = Column(Boolean, default=True, nullable=False)
    is_active = Column(Boolean, default=True, nullable=False)
    paired_officer_id = Column(Integer, ForeignKey("police_officers.id"), nullable=True, index=True)
    pairing_datetime = Column(DateTime, nullable=True)

    paired_officer = relationship("PoliceOfficer", back_populates="paired_devices")
    emission_reports = relationship("EmissionReport", back_populates="device")

    @property
    def total_reports(self) -> int:
        return len(self.emission_reports)
