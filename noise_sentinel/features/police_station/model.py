from sqlalchemy import Column, Integer, String, Boolean, UniqueConstraint
from sqlalchemy.orm import relationship
from noise_sentinel.core.database import Base

class PoliceStation(Base):
    __tablename__ = "police_stations"
    __table_args__ = (
        UniqueConstraint("station_name", "province", name="uq_station_name_province"),
    )

    id = Column(Integer, primary_key=True, index=True)
    station_name = Column(String(100), nullable=False)
    station_code = Column(String(20), unique=True, index=True, nullable=False)
    location = Column(String(200), nullable=True)
    district = Column(String(50), nullable=True)
    province = Column(String(50), nullable=True)
    contact = Column(String(15), nullable=True)
    is_active = Column(Boolean, default=True, nullable=False)

    officers = relationship("PoliceOfficer", back_populates="station")
    firs = relationship("Fir", back_populates="station")

    @property
    def officer_count(self) -> int:
        return len(self.officers)
