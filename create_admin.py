"""
Create an Admin account from the command line
"""
import argparse
import getpass
from sqlalchemy.orm import Session
from noise_sentinel.core.database import SessionLocal, Base, engine
from noise_sentinel.core.logging import setup_logging, logger
from noise_sentinel.core.security import get_password_hash
from noise_sentinel.features.user.model import User
from noise_sentinel.features.user.schema import UserCreate
from noise_sentinel.features.user.service import UserService
from noise_sentinel.models.enums import UserRole

# import all models so relationships resolve
from noise_sentinel.features.police_station import model as police_station_model  # noqa: F401
from noise_sentinel.features.court import model as court_model  # noqa: F401
from noise_sentinel.features.violation import model as violation_model  # noqa: F401
from noise_sentinel.features.iot_device import model as iot_device_model  # noqa: F401
from noise_sentinel.features.emission_report import model as emission_report_model  # noqa: F401
from noise_sentinel.features.accused import model as accused_model  # noqa: F401
from noise_sentinel.features.vehicle import model as vehicle_model  # noqa: F401
from noise_sentinel.features.challan import model as challan_model  # noqa: F401
from noise_sentinel.features.fir import model as fir_model  # noqa: F401
from noise_sentinel.features.court_case import model as court_case_model  # noqa: F401
from noise_sentinel.features.case_statement import model as case_statement_model  # noqa: F401

def create_admin(full_name: str, username: str, email: str, password: str):
    db: Session = SessionLocal()

    try:
        Base.metadata.create_all(bind=engine)
        UserService.seed_roles(db)

        existing_admin = db.query(User).filter(User.username == username).first()
        if existing_admin:
            print(f"Account '{existing_admin.username}' already exists ({existing_admin.role_name}).")
            choice = input("Reset its password? (y/n): ").strip().lower()
            if choice == "y":
                existing_admin.password_hash = get_password_hash(password)
                existing_admin.must_change_password = True
                db.commit()
                logger.info(f"Password reset for '{existing_admin.username}'")
            return

        admin = UserService.create_user(
            db,
            UserCreate(full_name=full_name, username=username, email=email, password=password),
            UserRole.ADMIN,
        )

        print("=" * 50)
        print("Admin account created")
        print(f"   Username: {admin.username}")
        print(f"   Email:    {admin.email}")
        print("=" * 50)
        print("Change the password after the first login.")

    except ValueError as e:
        db.rollback()
        logger.error(f"Could not create admin: {e}")
    finally:
        db.close()

if __name__ == "__main__":
    setup_logging()
    parser = argparse.ArgumentParser(description="Create a NoiseSentinel admin account")
    parser.add_argument("--full-name", default="System Administrator")
    parser.add_argument("--username", default="admin")
    parser.add_argument("--email", default="admin@noisesentinel.pk")
    args = parser.parse_args()
    password = getpass.getpass("Password: ")
    create_admin(args.full_name, args.username, args.email, password)
