from sqlalchemy.orm import Session
from sqlalchemy import func
from noise_sentinel.features.user.model import User, Role
from noise_sentinel.features.police_station.model import PoliceStation
from noise_sentinel.features.court.model import Court
from noise_sentinel.features.iot_device.model import IotDevice
from noise_sentinel.features.emission_report.model import EmissionReport
from noise_sentinel.features.challan.model import Challan
from noise_sentinel.features.violation.model import Violation
from noise_sentinel.features.fir.model import Fir
from noise_sentinel.features.court_case.model import Case
from noise_sentinel.core.config import settings
from noise_sentinel.models.enums import UserRole, ChallanStatus, FirStatus, CaseStatus
from typing import Dict

class AdminService:
    @staticmethod
    def _count_by(db: Session, column, enum_cls) -> Dict[str, int]:
        rows = db.query(column, func.count()).group_by(column).all()
        counts = {member.value: 0 for member in enum_cls}
        for value, count in rows:
            counts[value.value if hasattr(value, "value") else value] = count
        return counts

    @staticmethod
    def get_system_statistics(db: Session) -> Dict:
        """System-wide counts for the admin dashboard"""

        # users
        total_users = db.query(func.count(User.id)).scalar() or 0
        active_users = db.query(func.count(User.id)).filter(User.is_active.is_(True)).scalar() or 0
        role_rows = (
            db.query(Role.role_name, func.count(User.id))
            .outerjoin(User, User.role_id == Role.id)
            .group_by(Role.role_name)
            .all()
        )
        by_role = {role.value: 0 for role in UserRole}
        by_role.update({name: count for name, count in role_rows})

        # infrastructure
        total_stations = db.query(func.count(PoliceStation.id)).scalar() or 0
        active_stations = db.query(func.count(PoliceStation.id)).filter(PoliceStation.is_active.is_(True)).scalar() or 0
        total_courts = db.query(func.count(Court.id)).scalar() or 0

        # devices
        total_devices = db.query(func.count(IotDevice.id)).scalar() or 0
        active_devices = db.query(func.count(IotDevice.id)).filter(IotDevice.is_active.is_(True)).scalar() or 0
        paired_devices = db.query(func.count(IotDevice.id)).filter(IotDevice.paired_officer_id.isnot(None)).scalar() or 0

        # emission reports
        total_reports = db.query(func.count(EmissionReport.id)).scalar() or 0
        violation_reports = (
            db.query(func.count(EmissionReport.id))
            .filter(EmissionReport.sound_level_dba > settings.LEGAL_SOUND_LIMIT_DBA)
            .scalar()
        ) or 0

        # challans and penalties
        total_challans = db.query(func.count(Challan.id)).scalar() or 0
        challans_by_status = AdminService._count_by(db, Challan.status, ChallanStatus)
        penalty = (
            db.query(func.sum(Violation.penalty_amount))
            .select_from(Challan)
            .join(Violation, Challan.violation_id == Violation.id)
        )
        total_penalties = penalty.scalar() or 0
        paid_penalties = penalty.filter(Challan.status == ChallanStatus.PAID).scalar() or 0

        # FIRs and cases
        total_firs = db.query(func.count(Fir.id)).scalar() or 0
        total_cases = db.query(func.count(Case.id)).scalar() or 0

        return {
            "users": {
                "total": total_users,
                "active": active_users,
                "inactive": total_users - active_users,
                "by_role": by_role,
            },
            "stations": {
                "total": total_stations,
                "active": active_stations,
            },
            "courts": {
                "total": total_courts,
            },
            "devices": {
                "total": total_devices,
                "active": active_devices,
                "paired": paired_devices,
            },
            "emission_reports": {
                "total": total_reports,
                "violations": violation_reports,
            },
            "challans": {
                "total": total_challans,
                "by_status": challans_by_status,
                "penalties": {
                    "total": float(total_penalties),
                    "paid": float(paid_penalties),
                    "outstanding": float(total_penalties) - float(paid_penalties),
                },
            },
            "firs": {
                "total": total_firs,
                "by_status": AdminService._count_by(db, Fir.fir_status, FirStatus),
            },
            "cases": {
                "total": total_cases,
                "by_status": AdminService._count_by(db, Case.case_status, CaseStatus),
            },
        }
