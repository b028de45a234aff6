from sqlalchemy.orm import Session
from noise_sentinel.features.case_statement.model import CaseStatement
from noise_sentinel.features.case_statement.schema import CaseStatementCreate, CaseStatementUpdate
from noise_sentinel.features.court_case.model import Case
from noise_sentinel.features.user.model import Judge
from noise_sentinel.core.logging import logger
from typing import Optional, List
from datetime import datetime

class CaseStatementService:
    @staticmethod
    def _check_owner(case: Case, judge: Judge, action: str):
        if case.judge_id != judge.id:
            raise PermissionError(f"You can only {action} statements for cases assigned to you.")

    @staticmethod
    def create_statement(db: Session, data: CaseStatementCreate, judge: Judge) -> CaseStatement:
        case = db.query(Case).filter(Case.id == data.case_id).first()
        if not case:
            raise ValueError(f"Case with ID {data.case_id} not found.")
        CaseStatementService._check_owner(case, judge, "create")

        statement_by = (data.statement_by or "").strip() or judge.user.full_name
        statement = CaseStatement(
            case_id=case.id,
            statement_by=statement_by,
            statement_text=data.statement_text,
            statement_date=datetime.utcnow(),
        )
        db.add(statement)
        db.commit()
        db.refresh(statement)
        logger.info(f"Statement {statement.id} recorded on case {case.case_no}")
        return statement

    @staticmethod
    def get_statement_by_id(db: Session, statement_id: int) -> Optional[CaseStatement]:
        return db.query(CaseStatement).filter(CaseStatement.id == statement_id).first()

    @staticmethod
    def get_statements_by_case(db: Session, case_id: int) -> List[CaseStatement]:
        return (
            db.query(CaseStatement)
            .filter(CaseStatement.case_id == case_id)
            .order_by(CaseStatement.statement_date)
            .all()
        )

    @staticmethod
    def get_latest_statement(db: Session, case_id: int) -> Optional[CaseStatement]:
        return (
            db.query(CaseStatement)
            .filter(CaseStatement.case_id == case_id)
            .order_by(CaseStatement.statement_date.desc(), CaseStatement.id.desc())
            .first()
        )

    @staticmethod
    def get_all_statements(db: Session) -> List[CaseStatement]:
        return db.query(CaseStatement).order_by(CaseStatement.statement_date.desc()).all()

    @staticmethod
    def update_statement(db: Session, statement_id: int, data: CaseStatementUpdate, judge: Judge) -> Optional[CaseStatement]:
        statement = db.query(CaseStatement).filter(CaseStatement.id == statement_id).first()
        if not statement:
            return None
        CaseStatementService._check_owner(statement.case, judge, "update")

        statement.statement_text = data.statement_text
        db.commit()
        db.refresh(statement)
        return statement

    @staticmethod
    def delete_statement(db: Session, statement_id: int, judge: Judge) -> bool:
        statement = db.query(CaseStatement).filter(CaseStatement.id == statement_id).first()
        if not statement:
            return False
        CaseStatementService._check_owner(statement.case, judge, "delete")

        db.delete(statement)
        db.commit()
        logger.info(f"Statement {statement_id} deleted")
        return True
