from sqlalchemy.orm import Session
from noise_sentinel.features.emission_report.model import EmissionReport
from noise_sentinel.features.emission_report.schema import EmissionReportCreate
from noise_sentinel.features.iot_device.model import IotDevice
from noise_sentinel.features.challan.model import Challan
from noise_sentinel.core.config import settings
from noise_sentinel.core.logging import logger
from typing import Optional, List
from datetime import datetime, timedelta, timezone
from decimal import Decimal, ROUND_HALF_UP
import base64
import hashlib

TWO_PLACES = Decimal("0.01")

def _quantize(value: Optional[Decimal]) -> Optional[Decimal]:
    if value is None:
        return None
    return Decimal(value).quantize(TWO_PLACES, rounding=ROUND_HALF_UP)

def _to_naive_utc(value: datetime) -> datetime:
    if value.tzinfo is not None:
        return value.astimezone(timezone.utc).replace(tzinfo=None)
    return value

def generate_signature(device_id: int, co, co2, hc, nox, sound_level_dba, test_datetime: datetime) -> str:
    """base64(SHA-256) over the device id, the readings and the test time"""
    def fmt(value):
        return "NULL" if value is None else f"{_quantize(value):.2f}"

    data_to_sign = "|".join([
        str(device_id),
        fmt(co),
        fmt(co2),
        fmt(hc),
        fmt(nox),
        fmt(sound_level_dba),
        _to_naive_utc(test_datetime).isoformat(),
    ])
    digest = hashlib.sha256(data_to_sign.encode("utf-8")).digest()
    return base64.b64encode(digest).decode("ascii")

class EmissionReportService:
    @staticmethod
    def create_report(db: Session, data: EmissionReportCreate) -> EmissionReport:
        device = db.query(IotDevice).filter(IotDevice.id == data.device_id).first()
        if not device:
            raise ValueError(f"IoT Device with ID {data.device_id} not found.")
        if not device.is_registered:
            raise ValueError(f"Device '{device.device_name}' is not registered. Cannot create emission report.")
        if not device.is_calibrated:
            raise ValueError(f"Device '{device.device_name}' is not calibrated. Readings may be inaccurate.")
        if not device.is_active:
            raise ValueError(f"Device '{device.device_name}' is not active. Cannot create emission report.")

        test_datetime = _to_naive_utc(data.test_datetime)
        if test_datetime > datetime.utcnow():
            raise ValueError("Test date/time cannot be in the future.")

        window = timedelta(minutes=settings.DUPLICATE_READING_WINDOW_MINUTES)
        duplicate = (
            db.query(EmissionReport.id)
            .filter(
                EmissionReport.device_id == device.id,
                EmissionReport.test_datetime >= test_datetime - window,
                EmissionReport.test_datetime <= test_datetime + window,
            )
            .first()
        )
        if duplicate:
            raise ValueError(
                f"A similar emission report was created less than "
                f"{settings.DUPLICATE_READING_WINDOW_MINUTES} minutes ago. Possible duplicate detected."
            )

        readings = {
            "co": _quantize(data.co),
            "co2": _quantize(data.co2),
            "hc": _quantize(data.hc),
            "nox": _quantize(data.nox),
            "sound_level_dba": _quantize(data.sound_level_dba),
        }
        report = EmissionReport(
            device_id=device.id,
            test_datetime=test_datetime,
            ml_classification=data.ml_classification,
            digital_signature_value=generate_signature(device.id, test_datetime=test_datetime, **readings),
            **readings,
        )
        db.add(report)
        db.commit()
        db.refresh(report)
        logger.info(
            f"Emission report {report.id} recorded by device {device.device_name}: "
            f"{report.sound_level_dba} dBA (violation={report.is_violation})"
        )
        return report

    @staticmethod
    def get_report_by_id(db: Session, report_id: int) -> Optional[EmissionReport]:
        return db.query(EmissionReport).filter(EmissionReport.id == report_id).first()

    @staticmethod
    def get_all_reports(db: Session) -> List[EmissionReport]:
        return db.query(EmissionReport).order_by(EmissionReport.test_datetime.desc()).all()

    @staticmethod
    def get_reports_by_device(db: Session, device_id: int) -> List[EmissionReport]:
        return (
            db.query(EmissionReport)
            .filter(EmissionReport.device_id == device_id)
            .order_by(EmissionReport.test_datetime.desc())
            .all()
        )

    @staticmethod
    def get_reports_by_date_range(db: Session, start: datetime, end: datetime) -> List[EmissionReport]:
        if start > end:
            raise ValueError("Start date must be before end date.")
        return (
            db.query(EmissionReport)
            .filter(
                EmissionReport.test_datetime >= _to_naive_utc(start),
                EmissionReport.test_datetime <= _to_naive_utc(end),
            )
            .order_by(EmissionReport.test_datetime.desc())
            .all()
        )

    @staticmethod
    def get_violation_reports(db: Session, threshold: Optional[float] = None) -> List[EmissionReport]:
        """Reports above the sound threshold (legal limit by default)"""
        if threshold is None:
            threshold = settings.LEGAL_SOUND_LIMIT_DBA
        return (
            db.query(EmissionReport)
            .filter(EmissionReport.sound_level_dba > threshold)
            .order_by(EmissionReport.sound_level_dba.desc())
            .all()
        )

    @staticmethod
    def get_reports_without_challan(db: Session) -> List[EmissionReport]:
        return (
            db.query(EmissionReport)
            .outerjoin(Challan, Challan.emission_report_id == EmissionReport.id)
            .filter(Challan.id.is_(None))
            .order_by(EmissionReport.test_datetime.desc())
            .all()
        )

    @staticmethod
    def verify_report(db: Session, report_id: int) -> Optional[dict]:
        """Recompute the signature and compare it with the stored one"""
        report = db.query(EmissionReport).filter(EmissionReport.id == report_id).first()
        if not report:
            return None

        computed = generate_signature(
            report.device_id,
            report.co,
            report.co2,
            report.hc,
            report.nox,
            report.sound_level_dba,
            report.test_datetime,
        )
        stored = report.digital_signature_value or ""
        is_match = computed == stored
        if not is_match:
            logger.warning(f"Emission report {report.id} failed integrity verification")

        return {
            "emission_report_id": report.id,
            "is_authentic": is_match,
            "digital_signature_match": is_match,
            "data_integrity": "Intact - No tampering detected" if is_match else "COMPROMISED - Data has been modified",
            "stored_signature": stored,
            "computed_signature": computed,
            "verified_at": datetime.utcnow(),
            "admissible_in_court": is_match,
            "verification_message": (
                "Emission report is authentic and has not been tampered with. Admissible as court evidence."
                if is_match
                else "WARNING: Emission report integrity compromised. NOT admissible as court evidence."
            ),
        }
