from sqlalchemy.orm import Session
from sqlalchemy import func, or_
from noise_sentinel.features.user.model import User, Role, PoliceOfficer, Judge
from noise_sentinel.features.user.schema import (
    UserCreate,
    UserUpdate,
    JudgeCreate,
    PoliceOfficerCreate,
    ChangePassword,
)
from noise_sentinel.features.police_station.model import PoliceStation
from noise_sentinel.features.court.model import Court
from noise_sentinel.core.security import get_password_hash, verify_password
from noise_sentinel.core.logging import logger
from noise_sentinel.models.enums import UserRole
from typing import Optional, List
from datetime import datetime

OFFICER_FIELDS = ("station_id", "cnic", "contact_no", "badge_number", "rank", "is_investigation_officer")
JUDGE_FIELDS = ("court_id", "cnic", "contact_no", "rank", "service_status")

class UserService:
    @staticmethod
    def seed_roles(db: Session) -> None:
        """Insert any missing role rows"""
        existing = {r.role_name for r in db.query(Role).all()}
        for role in UserRole:
            if role.value not in existing:
                db.add(Role(role_name=role.value))
                logger.info(f"Seeded role '{role.value}'")
        db.commit()

    @staticmethod
    def get_role(db: Session, role: UserRole) -> Role:
        db_role = db.query(Role).filter(Role.role_name == role.value).first()
        if not db_role:
            raise ValueError(f"Role '{role.value}' is not configured.")
        return db_role

    @staticmethod
    def admin_exists(db: Session) -> bool:
        return (
            db.query(User)
            .join(Role)
            .filter(Role.role_name == UserRole.ADMIN.value)
            .first()
            is not None
        )

    @staticmethod
    def _ensure_unique(db: Session, username: Optional[str], email: Optional[str], exclude_user_id: Optional[int] = None):
        if username:
            query = db.query(User).filter(func.lower(User.username) == username.lower())
            if exclude_user_id:
                query = query.filter(User.id != exclude_user_id)
            if query.first():
                raise ValueError(f"Username '{username}' already exists.")
        if email:
            query = db.query(User).filter(func.lower(User.email) == email.lower())
            if exclude_user_id:
                query = query.filter(User.id != exclude_user_id)
            if query.first():
                raise ValueError(f"Email '{email}' already exists.")

    @staticmethod
    def _build_user(db: Session, user_data: UserCreate, role: UserRole) -> User:
        UserService._ensure_unique(db, user_data.username, user_data.email)
        return User(
            full_name=user_data.full_name.strip(),
            email=user_data.email.lower(),
            username=user_data.username.strip(),
            password_hash=get_password_hash(user_data.password),
            role_id=UserService.get_role(db, role).id,
            is_active=True,
        )

    @staticmethod
    def create_user(db: Session, user_data: UserCreate, role: UserRole) -> User:
        """Create an account without a profile (Admin and the two authorities)"""
        db_user = UserService._build_user(db, user_data, role)
        db.add(db_user)
        db.commit()
        db.refresh(db_user)
        logger.info(f"Created {role.value} account '{db_user.username}' (id={db_user.id})")
        return db_user

    @staticmethod
    def create_judge(db: Session, judge_data: JudgeCreate) -> User:
        """Create a Judge account and its profile"""
        court = db.query(Court).filter(Court.id == judge_data.court_id).first()
        if not court:
            raise ValueError(f"Court with ID {judge_data.court_id} not found.")

        db_user = UserService._build_user(db, judge_data, UserRole.JUDGE)
        db_user.judge = Judge(
            court_id=court.id,
            cnic=judge_data.cnic,
            contact_no=judge_data.contact_no,
            rank=judge_data.rank,
            service_status=judge_data.service_status,
        )
        db.add(db_user)
        db.commit()
        db.refresh(db_user)
        logger.info(f"Created judge '{db_user.username}' at court {court.court_name}")
        return db_user

    @staticmethod
    def create_police_officer(db: Session, officer_data: PoliceOfficerCreate) -> User:
        """Create a Police Officer account and its profile"""
        station = db.query(PoliceStation).filter(PoliceStation.id == officer_data.station_id).first()
        if not station:
            raise ValueError(f"Police station with ID {officer_data.station_id} not found.")
        if not station.is_active:
            raise ValueError(f"Police station '{station.station_name}' is not active.")

        if officer_data.badge_number:
            if db.query(PoliceOfficer).filter(PoliceOfficer.badge_number == officer_data.badge_number).first():
                raise ValueError(f"Badge number '{officer_data.badge_number}' already exists.")

        db_user = UserService._build_user(db, officer_data, UserRole.POLICE_OFFICER)
        db_user.police_officer = PoliceOfficer(
            station_id=station.id,
            cnic=officer_data.cnic,
            contact_no=officer_data.contact_no,
            badge_number=officer_data.badge_number,
            rank=officer_data.rank,
            is_investigation_officer=officer_data.is_investigation_officer,
            posting_date=officer_data.posting_date or datetime.utcnow(),
        )
        db.add(db_user)
        db.commit()
        db.refresh(db_user)
        logger.info(f"Created police officer '{db_user.username}' at station {station.station_code}")
        return db_user

    @staticmethod
    def get_user_by_id(db: Session, user_id: int) -> Optional[User]:
        return db.query(User).filter(User.id == user_id).first()

    @staticmethod
    def get_users_by_role(db: Session, role: UserRole, include_inactive: bool = True) -> List[User]:
        query = db.query(User).join(Role).filter(Role.role_name == role.value)
        if not include_inactive:
            query = query.filter(User.is_active.is_(True))
        return query.order_by(User.full_name).all()

    @staticmethod
    def search_users(
        db: Session,
        query_text: Optional[str] = None,
        role: Optional[UserRole] = None,
        is_active: Optional[bool] = None,
    ) -> List[User]:
        """Search by name, username or e-mail"""
        query = db.query(User).join(Role)
        if query_text:
            pattern = f"%{query_text.strip()}%"
            query = query.filter(or_(
                User.full_name.ilike(pattern),
                User.username.ilike(pattern),
                User.email.ilike(pattern),
            ))
        if role:
            query = query.filter(Role.role_name == role.value)
        if is_active is not None:
            query = query.filter(User.is_active.is_(is_active))
        return query.order_by(User.full_name).all()

    @staticmethod
    def get_user_counts(db: Session) -> dict:
        total = db.query(func.count(User.id)).scalar() or 0
        active = db.query(func.count(User.id)).filter(User.is_active.is_(True)).scalar() or 0
        rows = (
            db.query(Role.role_name, func.count(User.id))
            .outerjoin(User, User.role_id == Role.id)
            .group_by(Role.role_name)
            .all()
        )
        by_role = {role.value: 0 for role in UserRole}
        by_role.update({name: count for name, count in rows})
        return {
            "total": total,
            "active": active,
            "inactive": total - active,
            "by_role": by_role,
        }

    @staticmethod
    def update_user(db: Session, user_id: int, user_data: UserUpdate) -> Optional[User]:
        """Update account fields and the officer or judge profile"""
        db_user = db.query(User).filter(User.id == user_id).first()
        if not db_user:
            return None

        update_data = user_data.model_dump(exclude_unset=True)

        if "email" in update_data and update_data["email"]:
            UserService._ensure_unique(db, None, update_data["email"], exclude_user_id=user_id)
            db_user.email = update_data["email"].lower()
        if update_data.get("full_name"):
            db_user.full_name = update_data["full_name"].strip()

        if db_user.police_officer:
            if update_data.get("station_id") is not None:
                station = db.query(PoliceStation).filter(PoliceStation.id == update_data["station_id"]).first()
                if not station or not station.is_active:
                    raise ValueError(f"Police station with ID {update_data['station_id']} not found or inactive.")
            badge = update_data.get("badge_number")
            if badge and badge != db_user.police_officer.badge_number:
                if db.query(PoliceOfficer).filter(PoliceOfficer.badge_number == badge).first():
                    raise ValueError(f"Badge number '{badge}' already exists.")
            for field in OFFICER_FIELDS:
                if field in update_data and update_data[field] is not None:
                    setattr(db_user.police_officer, field, update_data[field])

        if db_user.judge:
            if update_data.get("court_id") is not None:
                if not db.query(Court).filter(Court.id == update_data["court_id"]).first():
                    raise ValueError(f"Court with ID {update_data['court_id']} not found.")
            for field in JUDGE_FIELDS:
                if field in update_data and update_data[field] is not None:
                    setattr(db_user.judge, field, update_data[field])

        db.commit()
        db.refresh(db_user)
        return db_user

    @staticmethod
    def set_active(db: Session, user_id: int, is_active: bool, acting_user_id: int) -> Optional[User]:
        """Activate or deactivate an account (soft delete)"""
        db_user = db.query(User).filter(User.id == user_id).first()
        if not db_user:
            return None
        if not is_active and db_user.id == acting_user_id:
            raise ValueError("You cannot deactivate your own account.")
        db_user.is_active = is_active
        db.commit()
        db.refresh(db_user)
        logger.info(f"User {db_user.username} {'activated' if is_active else 'deactivated'} by user {acting_user_id}")
        return db_user

    @staticmethod
    def authenticate_user(db: Session, username_or_email: str, password: str) -> Optional[User]:
        """Look up by username, then by e-mail, and check the password"""
        login = (username_or_email or "").strip()
        user = db.query(User).filter(User.username == login).first()
        if not user:
            user = db.query(User).filter(User.email == login.lower()).first()

        if not user or not verify_password(password, user.password_hash):
            logger.warning(f"Failed login attempt for '{login}'")
            return None

        return user

    @staticmethod
    def change_password(db: Session, user: User, data: ChangePassword) -> None:
        if not verify_password(data.current_password, user.password_hash):
            raise ValueError("Current password is incorrect.")
        if data.current_password == data.new_password:
            raise ValueError("New password must be different from the current password.")

        user.password_hash = get_password_hash(data.new_password)
        user.last_password_changed_at = datetime.utcnow()
        user.must_change_password = False
        db.commit()
        logger.info(f"Password changed for user {user.username}")

    @staticmethod
    def require_officer_profile(user: User) -> PoliceOfficer:
        if not user.police_officer:
            raise ValueError("Police Officer profile not found.")
        return user.police_officer

    @staticmethod
    def require_judge_profile(user: User) -> Judge:
        if not user.judge:
            raise ValueError("Judge profile not found.")
        return user.judge
