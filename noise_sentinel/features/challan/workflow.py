"""
Step-by-step challan builder used by officer clients.

The flow moves through four states:

    VIOLATION -> VEHICLE -> ACCUSED -> REVIEW

Vehicle and accused lookups fall back to "new record" input when nothing
matches. ``build()`` produces the single ``ChallanCreate`` request that
``ChallanService.create_challan`` accepts. ``ChallanWizard.run`` drives the
whole flow from a single ``ChallanGuidedCreate`` request.
"""
from enum import Enum
from typing import Optional, List
from sqlalchemy.orm import Session
from noise_sentinel.features.challan.schema import ChallanCreate, ChallanGuidedCreate
from noise_sentinel.features.violation.model import Violation
from noise_sentinel.features.violation.service import ViolationService
from noise_sentinel.features.vehicle.model import Vehicle
from noise_sentinel.features.vehicle.schema import VehicleInput
from noise_sentinel.features.vehicle.service import VehicleService
from noise_sentinel.features.accused.model import Accused
from noise_sentinel.features.accused.schema import AccusedInput
from noise_sentinel.features.accused.service import AccusedService
from noise_sentinel.core.validators import validate_cnic, normalize_plate


class WizardStep(str, Enum):
    VIOLATION = "violation"
    VEHICLE = "vehicle"
    ACCUSED = "accused"
    REVIEW = "review"


STEP_ORDER = [WizardStep.VIOLATION, WizardStep.VEHICLE, WizardStep.ACCUSED, WizardStep.REVIEW]


class WizardStepError(ValueError):
    """An action was attempted outside its step."""


class ChallanWizard:
    def __init__(self, db: Session, emission_report_id: Optional[int] = None):
        self.db = db
        self.emission_report_id = emission_report_id
        self.step = WizardStep.VIOLATION
        self._violations: Optional[List[Violation]] = None

        self.violation_id: Optional[int] = None
        self.vehicle_id: Optional[int] = None
        self.vehicle_input: Optional[VehicleInput] = None
        self.accused_id: Optional[int] = None
        self.accused_input: Optional[AccusedInput] = None
        self.evidence_path: Optional[str] = None
        self.bank_details: Optional[str] = None

        # set when a lookup missed and new details are required
        self.pending_plate: Optional[str] = None
        self.pending_cnic: Optional[str] = None

    def _require(self, step: WizardStep):
        if self.step != step:
            raise WizardStepError(f"Expected step '{self.step.value}', not '{step.value}'.")

    def _advance(self):
        self.step = STEP_ORDER[STEP_ORDER.index(self.step) + 1]

    # violation

    def violations(self) -> List[Violation]:
        """Catalogue of violations, fetched once per wizard"""
        if self._violations is None:
            self._violations = ViolationService.get_all_violations(self.db)
        return self._violations

    def select_violation(self, violation_id: int) -> Violation:
        self._require(WizardStep.VIOLATION)
        violation = next((v for v in self.violations() if v.id == violation_id), None)
        if violation is None:
            raise ValueError(f"Violation with ID {violation_id} not found.")
        self.violation_id = violation.id
        self._advance()
        return violation

    # vehicle

    def lookup_vehicle(self, plate_number: str) -> Optional[Vehicle]:
        """Existing vehicle moves the wizard on; a miss asks for new vehicle details"""
        self._require(WizardStep.VEHICLE)
        plate = normalize_plate(plate_number)
        vehicle = VehicleService.get_vehicle_by_plate(self.db, plate)
        if vehicle is None:
            self.pending_plate = plate
            return None
        self.vehicle_id = vehicle.id
        self.vehicle_input = None
        self.pending_plate = None
        self._advance()
        return vehicle

    def provide_vehicle(self, vehicle_input: VehicleInput):
        self._require(WizardStep.VEHICLE)
        if self.pending_plate and vehicle_input.plate_number != self.pending_plate:
            raise ValueError(
                f"Plate number '{vehicle_input.plate_number}' does not match the searched plate '{self.pending_plate}'."
            )
        self.vehicle_input = vehicle_input
        self.vehicle_id = None
        self.pending_plate = None
        self._advance()

    # accused

    def lookup_accused(self, cnic: str) -> Optional[Accused]:
        """Existing person moves the wizard on; a miss asks for new accused details"""
        self._require(WizardStep.ACCUSED)
        cnic = validate_cnic(cnic)
        accused = AccusedService.get_accused_by_cnic(self.db, cnic)
        if accused is None:
            self.pending_cnic = cnic
            return None
        self.accused_id = accused.id
        self.accused_input = None
        self.pending_cnic = None
        self._advance()
        return accused

    def provide_accused(self, accused_input: AccusedInput):
        self._require(WizardStep.ACCUSED)
        if self.pending_cnic and accused_input.cnic != self.pending_cnic:
            raise ValueError(
                f"CNIC '{accused_input.cnic}' does not match the searched CNIC '{self.pending_cnic}'."
            )
        self.accused_input = accused_input
        self.accused_id = None
        self.pending_cnic = None
        self._advance()

    # review

    def set_details(self, evidence_path: Optional[str] = None, bank_details: Optional[str] = None):
        self._require(WizardStep.REVIEW)
        self.evidence_path = evidence_path
        self.bank_details = bank_details

    def back(self):
        """Return to the previous step, keeping what was entered"""
        index = STEP_ORDER.index(self.step)
        if index == 0:
            raise WizardStepError("Already at the first step.")
        self.step = STEP_ORDER[index - 1]

    def build(self) -> ChallanCreate:
        self._require(WizardStep.REVIEW)
        return ChallanCreate(
            violation_id=self.violation_id,
            emission_report_id=self.emission_report_id,
            vehicle_id=self.vehicle_id,
            vehicle_input=self.vehicle_input,
            accused_id=self.accused_id,
            accused_input=self.accused_input,
            evidence_path=self.evidence_path,
            bank_details=self.bank_details,
        )

    @classmethod
    def run(cls, db: Session, data: ChallanGuidedCreate) -> ChallanCreate:
        """Walk every step from one guided request"""
        wizard = cls(db, emission_report_id=data.emission_report_id)
        wizard.select_violation(data.violation_id)

        if wizard.lookup_vehicle(data.plate_number) is None:
            if data.vehicle_input is None:
                raise ValueError(
                    f"No vehicle found with plate number '{wizard.pending_plate}'. Vehicle details are required."
                )
            wizard.provide_vehicle(data.vehicle_input)

        if wizard.lookup_accused(data.cnic) is None:
            if data.accused_input is None:
                raise ValueError(
                    f"No accused found with CNIC '{wizard.pending_cnic}'. Accused details are required."
                )
            wizard.provide_accused(data.accused_input)

        wizard.set_details(data.evidence_path, data.bank_details)
        return wizard.build()
