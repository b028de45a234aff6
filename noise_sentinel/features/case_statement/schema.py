from pydantic import BaseModel, Field
from typing import Optional
from datetime import datetime

class CaseStatementCreate(BaseModel):
    case_id: int
    statement_text: str = Field(..., min_length=20, max_length=5000)
    statement_by: Optional[str] = Field(None, max_length=100)

class CaseStatementUpdate(BaseModel):
    statement_text: str = Field(..., min_length=20, max_length=5000)

class CaseStatementResponse(BaseModel):
    id: int
    case_id: int
    case_no: Optional[str] = None
    statement_by: Optional[str]
    statement_text: str
    statement_date: datetime

    class Config:
        from_attributes = True
