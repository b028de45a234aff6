from fastapi import APIRouter
from noise_sentinel.features.auth.routes import router as auth_router
from noise_sentinel.features.user.routes import router as users_router
from noise_sentinel.features.police_station.routes import router as police_stations_router
from noise_sentinel.features.court.routes import router as courts_router
from noise_sentinel.features.violation.routes import router as violations_router
from noise_sentinel.features.iot_device.routes import router as iot_devices_router
from noise_sentinel.features.emission_report.routes import router as emission_reports_router
from noise_sentinel.features.accused.routes import router as accused_router
from noise_sentinel.features.vehicle.routes import router as vehicles_router
from noise_sentinel.features.challan.routes import router as challans_router
from noise_sentinel.features.fir.routes import router as firs_router
from noise_sentinel.features.court_case.routes import router as cases_router
from noise_sentinel.features.case_statement.routes import router as case_statements_router
from noise_sentinel.features.admin.routes import router as admin_router

api_router = APIRouter()

api_router.include_router(auth_router, prefix="/auth", tags=["Authentication"])
api_router.include_router(users_router, prefix="/users", tags=["Users"])
api_router.include_router(police_stations_router, prefix="/police-stations", tags=["Police Stations"])
api_router.include_router(courts_router, prefix="/courts", tags=["Courts"])
api_router.include_router(violations_router, prefix="/violations", tags=["Violations"])
api_router.include_router(iot_devices_router, prefix="/iot-devices", tags=["IoT Devices"])
api_router.include_router(emission_reports_router, prefix="/emission-reports", tags=["Emission Reports"])
api_router.include_router(accused_router, prefix="/accused", tags=["Accused"])
api_router.include_router(vehicles_router, prefix="/vehicles", tags=["Vehicles"])
api_router.include_router(challans_router, prefix="/challans", tags=["Challans"])
api_router.include_router(firs_router, prefix="/firs", tags=["FIRs"])
api_router.include_router(cases_router, prefix="/cases", tags=["Cases"])
api_router.include_router(case_statements_router, prefix="/case-statements", tags=["Case Statements"])
api_router.include_router(admin_router, prefix="/admin", tags=["Admin"])
