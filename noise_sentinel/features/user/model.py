from sqlalchemy import Column, Integer, String, Boolean, DateTime, ForeignKey
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
from noise_sentinel.core.database import Base

class Role(Base):
    __tablename__ = "roles"

    id = Column(Integer, primary_key=True, index=True)
    role_name = Column(String(50), unique=True, nullable=False)

    users = relationship("User", back_populates="role")

class User(Base):
    __tablename__ = "users"

    id = Column(Integer, primary_key=True, index=True)
    full_name = Column(String(100), nullable=False)
    email = Column(String(100), unique=True, index=True, nullable=False)
    username = Column(String(50), unique=True, index=True, nullable=False)
    password_hash = Column(String(255), nullable=False)
    is_active = Column(Boolean, default=True, nullable=False)
    role_id = Column(Integer, ForeignKey("roles.id"), nullable=False)
    created_at = Column(DateTime, server_default=func.now(), nullable=False)
    last_password_changed_at = Column(DateTime, nullable=True)
    must_change_password = Column(Boolean, default=False, nullable=False)

    role = relationship("Role", back_populates="users")
    police_officer = relationship("PoliceOfficer", back_populates="user", uselist=False)
    judge = relationship("Judge", back_populates="user", uselist=False)

    @property
    def role_name(self) -> str:
        return self.role.role_name if self.role else None

class PoliceOfficer(Base):
    __tablename__ = "police_officers"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id"), unique=True, nullable=False)
    station_id = Column(Integer, ForeignKey("police_stations.id"), nullable=True, index=True)
    cnic = Column(String(15), nullable=True)
    contact_no = Column(String(15), nullable=True)
    badge_number = Column(String(20), unique=True, nullable=True)
    rank = Column(String(50), nullable=True)
    is_investigation_officer = Column(Boolean, default=False, nullable=False)
    posting_date = Column(DateTime, nullable=True)

    user = relationship("User", back_populates="police_officer")
    station = relationship("PoliceStation", back_populates="officers")
    challans = relationship("Challan", back_populates="officer")
    paired_devices = relationship("IotDevice", back_populates="paired_officer")

class Judge(Base):
    __tablename__ = "judges"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id"), unique=True, nullable=False)
    court_id = Column(Integer, ForeignKey("courts.id"), nullable=True, index=True)
    cnic = Column(String(15), nullable=True)
    contact_no = Column(String(15), nullable=True)
    rank = Column(String(50), nullable=True)
    service_status = Column(Boolean, default=True, nullable=False)

    user = relationship("User", back_populates="judge")
    court = relationship("Court", back_populates="judges")
    cases = relationship("Case", back_populates="judge")
