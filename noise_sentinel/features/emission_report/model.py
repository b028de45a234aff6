from sqlalchemy import Column, Integer, String, DateTime, ForeignKey, Numeric
from sqlalchemy.orm import relationship
from noise_sentinel.core.database import Base
from noise_sentinel.core.config import settings

class EmissionReport(Base):
    __tablename__ = "emission_reports"

    id = Column(Integer, primary_key=True, index=True)
    device_id = Column(Integer, ForeignKey("iot_devices.id"), nullable=False, index=True)
    co = Column(Numeric(10, 2), nullable=True)
    co2 = Column(Numeric(10, 2), nullable=True)
    hc = Column(Numeric(10, 2), nullable=True)
    nox = Column(Numeric(10, 2), nullable=True)
    sound_level_dba = Column(Numeric(10, 2), nullable=False)
    test_datetime = Column(DateTime, nullable=False, index=True)
    ml_classification = Column(String(100), nullable=True)
    digital_signature_value = Column(String(500), nullable=True)

    device = relationship("IotDevice", back_populates="emission_reports")
    challan = relationship("Challan", back_populates="emission_report", uselist=False)

    @property
    def device_name(self) -> str:
        return self.device.device_name if self.device else None

    @property
    def is_violation(self) -> bool:
        return self.sound_level_dba is not None and float(self.sound_level_dba) > settings.LEGAL_SOUND_LIMIT_DBA

    @property
    def has_challan(self) -> bool:
        return self.challan is not None
