from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from noise_sentinel.core.config import settings
from noise_sentinel.core.database import engine, Base, SessionLocal
from noise_sentinel.core.exceptions import register_exception_handlers
from noise_sentinel.core.logging import setup_logging, logger
from noise_sentinel.core.security import get_password_hash
from noise_sentinel.api.v1 import api_router
from noise_sentinel.features.user.model import User, Role, PoliceOfficer, Judge
from noise_sentinel.features.police_station.model import PoliceStation
from noise_sentinel.features.court.model import Court, CourtType
from noise_sentinel.features.violation.model import Violation
from noise_sentinel.features.iot_device.model import IotDevice
from noise_sentinel.features.emission_report.model import EmissionReport
from noise_sentinel.features.accused.model import Accused
from noise_sentinel.features.vehicle.model import Vehicle
from noise_sentinel.features.challan.model import Challan
from noise_sentinel.features.fir.model import Fir
from noise_sentinel.features.court_case.model import Case
from noise_sentinel.features.case_statement.model import CaseStatement
from noise_sentinel.features.user.service import UserService
from noise_sentinel.features.court.service import CourtService
from noise_sentinel.models.enums import UserRole

setup_logging()

# Create tables that do not exist yet
Base.metadata.create_all(bind=engine)

def seed_defaults():
    """Seed roles, court types and the default admin account"""
    db = SessionLocal()
    try:
        UserService.seed_roles(db)
        CourtService.seed_court_types(db)

        if UserService.admin_exists(db):
            logger.info("Default admin account already exists")
            return

        admin = User(
            full_name="System Administrator",
            username=settings.DEFAULT_ADMIN_USERNAME,
            email=settings.DEFAULT_ADMIN_EMAIL.lower(),
            password_hash=get_password_hash(settings.DEFAULT_ADMIN_PASSWORD),
            role_id=UserService.get_role(db, UserRole.ADMIN).id,
            is_active=True,
            must_change_password=True,
        )
        db.add(admin)
        db.commit()
        logger.info(f"Created default admin account '{admin.username}'")
    except Exception:
        db.rollback()
        raise
    finally:
        db.close()

seed_defaults()

app = FastAPI(
    title=settings.PROJECT_NAME,
    description="Traffic noise and emission enforcement: devices, challans, FIRs and court cases",
    version="1.0.0"
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

register_exception_handlers(app)

app.include_router(api_router, prefix="/api/v1")

@app.get("/health")
async def health_check():
    """Liveness check"""
    return {
        "status": "success",
        "service": settings.PROJECT_NAME,
        "version": "1.0.0"
    }

if __name__ == "__main__":
    import uvicorn
    uvicorn.run(
        app,
        host="0.0.0.0",
        port=8000,
    )
