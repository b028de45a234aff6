from sqlalchemy import Column, Integer, String
from sqlalchemy.orm import relationship
from noise_sentinel.core.database import Base

class Accused(Base):
    __tablename__ = "accused"

    id = Column(Integer, primary_key=True, index=True)
    full_name = Column(String(100), nullable=False)
    cnic = Column(String(15), unique=True, index=True, nullable=False)
    city = Column(String(50), nullable=True)
    province = Column(String(50), nullable=True)
    address = Column(String(200), nullable=True)
    contact = Column(String(20), nullable=True)

    vehicles = relationship("Vehicle", back_populates="owner")
    challans = relationship("Challan", back_populates="accused")

    @property
    def total_challans(self) -> int:
        return len(self.challans)

    @property
    def total_vehicles(self) -> int:
        return len(self.vehicles)
