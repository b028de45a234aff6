from sqlalchemy import Column, Integer, String, DateTime, ForeignKey, Text, Enum as SQLEnum
from sqlalchemy.orm import relationship
from noise_sentinel.core.database import Base
from noise_sentinel.models.enums import ChallanStatus
from noise_sentinel.core.evidence import decompress_evidence
from datetime import datetime

class Challan(Base):
    __tablename__ = "challans"

    id = Column(Integer, primary_key=True, index=True)
    officer_id = Column(Integer, ForeignKey("police_officers.id"), nullable=False, index=True)
    accused_id = Column(Integer, ForeignKey("accused.id"), nullable=False, index=True)
    vehicle_id = Column(Integer, ForeignKey("vehicles.id"), nullable=False, index=True)
    violation_id = Column(Integer, ForeignKey("violations.id"), nullable=False, index=True)
    emission_report_id = Column(Integer, ForeignKey("emission_reports.id"), unique=True, nullable=True)
    # gzip-compressed, base64-encoded evidence image
    evidence_path = Column(Text, nullable=True)
    issue_datetime = Column(DateTime, nullable=False)
    due_datetime = Column(DateTime, nullable=False)
    status = Column(
        SQLEnum(ChallanStatus, values_callable=lambda e: [m.value for m in e]),
        default=ChallanStatus.UNPAID,
        nullable=False,
    )
    bank_details = Column(String(200), nullable=True)
    digital_signature_value = Column(String(500), nullable=True)
    paid_at = Column(DateTime, nullable=True)
    disputed_at = Column(DateTime, nullable=True)
    dispute_reason = Column(Text, nullable=True)

    officer = relationship("PoliceOfficer", back_populates="challans")
    accused = relationship("Accused", back_populates="challans")
    vehicle = relationship("Vehicle", back_populates="challans")
    violation = relationship("Violation", back_populates="challans")
    emission_report = relationship("EmissionReport", back_populates="challan")
    fir = relationship("Fir", back_populates="challan", uselist=False)

    @property
    def is_overdue(self) -> bool:
        return (
            self.status == ChallanStatus.UNPAID
            and self.due_datetime is not None
            and self.due_datetime < datetime.utcnow()
        )

    @property
    def days_until_due(self) -> int:
        return (self.due_datetime - datetime.utcnow()).days

    @property
    def has_fir(self) -> bool:
        return self.fir is not None

    @property
    def fir_id(self):
        return self.fir.id if self.fir else None

    @property
    def evidence_image(self):
        return decompress_evidence(self.evidence_path)

    @property
    def officer_name(self):
        return self.officer.user.full_name if self.officer and self.officer.user else None

    @property
    def officer_badge_number(self):
        return self.officer.badge_number if self.officer else None

    @property
    def station_id(self):
        return self.officer.station_id if self.officer else None

    @property
    def station_name(self):
        return self.officer.station.station_name if self.officer and self.officer.station else None

    @property
    def accused_name(self):
        return self.accused.full_name if self.accused else None

    @property
    def accused_cnic(self):
        return self.accused.cnic if self.accused else None

    @property
    def accused_contact(self):
        return self.accused.contact if self.accused else None

    @property
    def vehicle_plate_number(self):
        return self.vehicle.plate_number if self.vehicle else None

    @property
    def vehicle_make(self):
        return self.vehicle.make if self.vehicle else None

    @property
    def vehicle_color(self):
        return self.vehicle.color if self.vehicle else None

    @property
    def violation_type(self):
        return self.violation.violation_type if self.violation else None

    @property
    def penalty_amount(self):
        return self.violation.penalty_amount if self.violation else None

    @property
    def is_cognizable(self) -> bool:
        return bool(self.violation and self.violation.is_cognizable)

    @property
    def device_name(self):
        return self.emission_report.device_name if self.emission_report else None

    @property
    def sound_level_dba(self):
        return self.emission_report.sound_level_dba if self.emission_report else None

    @property
    def ml_classification(self):
        return self.emission_report.ml_classification if self.emission_report else None

    @property
    def emission_test_datetime(self):
        return self.emission_report.test_datetime if self.emission_report else None
