from sqlalchemy import Column, Integer, String, ForeignKey
from sqlalchemy.orm import relationship
from noise_sentinel.core.database import Base

class Vehicle(Base):
    __tablename__ = "vehicles"

    id = Column(Integer, primary_key=True, index=True)
    plate_number = Column(String(50), unique=True, index=True, nullable=False)
    make = Column(String(50), nullable=True)
    color = Column(String(30), nullable=True)
    chassis_no = Column(String(50), nullable=True)
    engine_no = Column(String(50), nullable=True)
    registration_year = Column(Integer, nullable=True)
    owner_id = Column(Integer, ForeignKey("accused.id"), nullable=True, index=True)

    owner = relationship("Accused", back_populates="vehicles")
    challans = relationship("Challan", back_populates="vehicle")

    @property
    def owner_name(self) -> str:
        return self.owner.full_name if self.owner else None

    @property
    def owner_cnic(self) -> str:
        return self.owner.cnic if self.owner else None

    @property
    def total_challans(self) -> int:
        return len(self.challans)
