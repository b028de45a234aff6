from sqlalchemy import Column, Integer, String, Boolean, Numeric, Text
from sqlalchemy.orm import relationship
from noise_sentinel.core.database import Base

class Violation(Base):
    __tablename__ = "violations"

    id = Column(Integer, primary_key=True, index=True)
    violation_type = Column(String(100), unique=True, nullable=False)
    description = Column(Text, nullable=True)
    penalty_amount = Column(Numeric(10, 2), nullable=False)
    section_of_law = Column(String(100), nullable=True)
    # cognizable offenses may be escalated to an FIR
    is_cognizable = Column(Boolean, default=False, nullable=False)

    challans = relationship("Challan", back_populates="violation")

    @property
    def total_challans(self) -> int:
        return len(self.challans)
