from sqlalchemy import Column, Integer, String, DateTime, ForeignKey, Text
from sqlalchemy.orm import relationship
from noise_sentinel.core.database import Base

class CaseStatement(Base):
    __tablename__ = "case_statements"

    id = Column(Integer, primary_key=True, index=True)
    case_id = Column(Integer, ForeignKey("cases.id"), nullable=False, index=True)
    statement_by = Column(String(100), nullable=True)
    statement_text = Column(Text, nullable=False)
    statement_date = Column(DateTime, nullable=False)

    case = relationship("Case", back_populates="statements")

    @property
    def case_no(self):
        return self.case.case_no if self.case else None
