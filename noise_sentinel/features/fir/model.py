from sqlalchemy import Column, Integer, String, DateTime, ForeignKey, Text, Enum as SQLEnum
from sqlalchemy.orm import relationship
from noise_sentinel.core.database import Base
from noise_sentinel.models.enums import FirStatus

class Fir(Base):
    __tablename__ = "firs"

    id = Column(Integer, primary_key=True, index=True)
    fir_no = Column(String(50), unique=True, index=True, nullable=False)
    station_id = Column(Integer, ForeignKey("police_stations.id"), nullable=False, index=True)
    challan_id = Column(Integer, ForeignKey("challans.id"), unique=True, nullable=False)
    informant_id = Column(Integer, ForeignKey("police_officers.id"), nullable=True, index=True)
    date_filed = Column(DateTime, nullable=False)
    fir_description = Column(Text, nullable=True)
    fir_status = Column(
        SQLEnum(FirStatus, values_callable=lambda e: [m.value for m in e]),
        default=FirStatus.FILED,
        nullable=False,
    )
    investigation_report = Column(Text, nullable=True)

    station = relationship("PoliceStation", back_populates="firs")
    challan = relationship("Challan", back_populates="fir")
    informant = relationship("PoliceOfficer")
    case = relationship("Case", back_populates="fir", uselist=False)

    @property
    def station_name(self):
        return self.station.station_name if self.station else None

    @property
    def informant_name(self):
        return self.informant.user.full_name if self.informant and self.informant.user else None

    @property
    def accused_name(self):
        return self.challan.accused_name if self.challan else None

    @property
    def vehicle_plate_number(self):
        return self.challan.vehicle_plate_number if self.challan else None

    @property
    def violation_type(self):
        return self.challan.violation_type if self.challan else None

    @property
    def has_case(self) -> bool:
        return self.case is not None

    @property
    def case_id(self):
        return self.case.id if self.case else None
