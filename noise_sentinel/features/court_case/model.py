from sqlalchemy import Column, Integer, String, DateTime, ForeignKey, Text, Enum as SQLEnum
from sqlalchemy.orm import relationship
from noise_sentinel.core.database import Base
from noise_sentinel.models.enums import CaseStatus

class Case(Base):
    __tablename__ = "cases"

    id = Column(Integer, primary_key=True, index=True)
    case_no = Column(String(50), unique=True, index=True, nullable=False)
    fir_id = Column(Integer, ForeignKey("firs.id"), unique=True, nullable=False)
    judge_id = Column(Integer, ForeignKey("judges.id"), nullable=True, index=True)
    case_type = Column(String(50), nullable=True)
    case_status = Column(
        SQLEnum(CaseStatus, values_callable=lambda e: [m.value for m in e]),
        default=CaseStatus.PENDING,
        nullable=False,
    )
    hearing_date = Column(DateTime, nullable=True)
    verdict = Column(Text, nullable=True)

    fir = relationship("Fir", back_populates="case")
    judge = relationship("Judge", back_populates="cases")
    statements = relationship(
        "CaseStatement",
        back_populates="case",
        order_by="CaseStatement.statement_date",
        cascade="all, delete-orphan",
    )

    @property
    def fir_no(self):
        return self.fir.fir_no if self.fir else None

    @property
    def challan_id(self):
        return self.fir.challan_id if self.fir else None

    @property
    def accused_name(self):
        return self.fir.accused_name if self.fir else None

    @property
    def vehicle_plate_number(self):
        return self.fir.vehicle_plate_number if self.fir else None

    @property
    def violation_type(self):
        return self.fir.violation_type if self.fir else None

    @property
    def judge_name(self):
        return self.judge.user.full_name if self.judge and self.judge.user else None

    @property
    def court_id(self):
        return self.judge.court_id if self.judge else None

    @property
    def court_name(self):
        return self.judge.court.court_name if self.judge and self.judge.court else None

    @property
    def statement_count(self) -> int:
        return len(self.statements)
