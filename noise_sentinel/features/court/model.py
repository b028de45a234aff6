from sqlalchemy import Column, Integer, String, ForeignKey, UniqueConstraint
from sqlalchemy.orm import relationship
from noise_sentinel.core.database import Base

class CourtType(Base):
    __tablename__ = "court_types"

    id = Column(Integer, primary_key=True, index=True)
    court_type_name = Column(String(50), unique=True, nullable=False)

    courts = relationship("Court", back_populates="court_type")

class Court(Base):
    __tablename__ = "courts"
    __table_args__ = (
        UniqueConstraint("court_name", "province", name="uq_court_name_province"),
    )

    id = Column(Integer, primary_key=True, index=True)
    court_name = Column(String(100), nullable=False)
    court_type_id = Column(Integer, ForeignKey("court_types.id"), nullable=False, index=True)
    location = Column(String(200), nullable=True)
    district = Column(String(50), nullable=True)
    province = Column(String(50), nullable=True)

    court_type = relationship("CourtType", back_populates="courts")
    judges = relationship("Judge", back_populates="court")

    @property
    def court_type_name(self) -> str:
        return self.court_type.court_type_name if self.court_type else None

    @property
    def judge_count(self) -> int:
        return len(self.judges)
