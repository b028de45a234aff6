from enum import Enum

class UserRole(str, Enum):
    ADMIN = "Admin"
    COURT_AUTHORITY = "Court Authority"
    STATION_AUTHORITY = "Station Authority"
    JUDGE = "Judge"
    POLICE_OFFICER = "Police Officer"

# Role groups used by route guards
AUTHORITY_ROLES = [UserRole.ADMIN, UserRole.COURT_AUTHORITY, UserRole.STATION_AUTHORITY]
COURT_ROLES = [UserRole.ADMIN, UserRole.COURT_AUTHORITY, UserRole.JUDGE]
STATION_ROLES = [UserRole.ADMIN, UserRole.STATION_AUTHORITY, UserRole.POLICE_OFFICER]
ALL_ROLES = list(UserRole)

class ChallanStatus(str, Enum):
    UNPAID = "Unpaid"
    PAID = "Paid"
    DISPUTED = "Disputed"
    OVERDUE = "Overdue"

class FirStatus(str, Enum):
    FILED = "Filed"
    UNDER_INVESTIGATION = "Under Investigation"
    FORWARDED_TO_COURT = "Forwarded to Court"
    CLOSED = "Closed"

class CaseStatus(str, Enum):
    PENDING = "Pending"
    HEARING_SCHEDULED = "Hearing Scheduled"
    CONVICTED = "Convicted"
    ACQUITTED = "Acquitted"
    DISMISSED = "Dismissed"
    CLOSED = "Closed"
