import pytest

from conftest import API, ACCUSED_INPUT, VEHICLE_INPUT, issue_challan
from noise_sentinel.features.accused.schema import AccusedInput
from noise_sentinel.features.challan.service import ChallanService
from noise_sentinel.features.challan.workflow import ChallanWizard, WizardStep, WizardStepError
from noise_sentinel.features.user.model import PoliceOfficer
from noise_sentinel.features.vehicle.schema import VehicleInput


def test_new_vehicle_and_accused(db, officer, noise_violation, report):
    wizard = ChallanWizard(db, emission_report_id=report["id"])
    assert [v.id for v in wizard.violations()] == [noise_violation["id"]]

    wizard.select_violation(noise_violation["id"])
    assert wizard.step == WizardStep.VEHICLE

    assert wizard.lookup_vehicle("lea-1234") is None
    assert wizard.pending_plate == "LEA-1234"
    wizard.provide_vehicle(VehicleInput(**VEHICLE_INPUT))
    assert wizard.step == WizardStep.ACCUSED

    assert wizard.lookup_accused("35201-7654321-3") is None
    wizard.provide_accused(AccusedInput(**ACCUSED_INPUT))
    assert wizard.step == WizardStep.REVIEW

    request = wizard.build()
    assert request.emission_report_id == report["id"]
    assert request.vehicle_id is None
    assert request.accused_input.cnic == "35201-7654321-3"

    officer_profile = db.query(PoliceOfficer).filter(PoliceOfficer.id == officer["police_officer"]["id"]).first()
    challan, message = ChallanService.create_challan(db, request, officer_profile)
    assert challan.emission_report_id == report["id"]
    assert challan.vehicle.plate_number == "LEA-1234"
    assert message.startswith(f"Challan #{challan.id} created successfully.")


def test_existing_records_skip_new_details(client, db, officer_headers, noise_violation):
    first = issue_challan(client, officer_headers, noise_violation["id"])

    wizard = ChallanWizard(db)
    wizard.select_violation(noise_violation["id"])
    vehicle = wizard.lookup_vehicle("LEA-1234")
    assert vehicle.id == first["vehicle_id"]
    accused = wizard.lookup_accused("35201-7654321-3")
    assert accused.id == first["accused_id"]

    wizard.set_details(bank_details="Account: 123, Bank: NBP")
    request = wizard.build()
    assert request.vehicle_id == first["vehicle_id"]
    assert request.accused_id == first["accused_id"]
    assert request.vehicle_input is None
    assert request.bank_details == "Account: 123, Bank: NBP"


def test_steps_are_enforced(db, noise_violation):
    wizard = ChallanWizard(db)
    with pytest.raises(WizardStepError):
        wizard.lookup_vehicle("LEA-1234")
    with pytest.raises(WizardStepError):
        wizard.build()
    with pytest.raises(WizardStepError):
        wizard.back()

    with pytest.raises(ValueError):
        wizard.select_violation(999)
    assert wizard.step == WizardStep.VIOLATION


def test_back_keeps_entries(db, noise_violation):
    wizard = ChallanWizard(db)
    wizard.select_violation(noise_violation["id"])
    wizard.back()
    assert wizard.step == WizardStep.VIOLATION
    assert wizard.violation_id == noise_violation["id"]


def test_new_details_must_match_searched_values(db, noise_violation):
    wizard = ChallanWizard(db)
    wizard.select_violation(noise_violation["id"])
    wizard.lookup_vehicle("ABC-999")
    with pytest.raises(ValueError):
        wizard.provide_vehicle(VehicleInput(**VEHICLE_INPUT))

    wizard.provide_vehicle(VehicleInput(**dict(VEHICLE_INPUT, plate_number="abc-999")))
    with pytest.raises(ValueError):
        wizard.lookup_accused("not-a-cnic")
    wizard.lookup_accused("11111-1111111-1")
    with pytest.raises(ValueError):
        wizard.provide_accused(AccusedInput(**ACCUSED_INPUT))


def test_guided_create_adds_missing_records(client, officer_headers, cognizable_violation, report):
    response = client.post(
        f"{API}/challans/guided-create",
        json={
            "violation_id": cognizable_violation["id"],
            "emission_report_id": report["id"],
            "plate_number": "lea-1234",
            "vehicle_input": VEHICLE_INPUT,
            "cnic": "35201-7654321-3",
            "accused_input": ACCUSED_INPUT,
        },
        headers=officer_headers,
    )
    assert response.status_code == 201, response.text
    challan = response.json()["challan"]
    assert challan["emission_report_id"] == report["id"]
    assert challan["vehicle_plate_number"] == "LEA-1234"
    assert challan["accused_cnic"] == "35201-7654321-3"


def test_guided_create_reuses_existing_records(client, officer_headers, noise_violation):
    first = issue_challan(client, officer_headers, noise_violation["id"])
    response = client.post(
        f"{API}/challans/guided-create",
        json={"violation_id": noise_violation["id"], "plate_number": "LEA-1234", "cnic": "35201-7654321-3"},
        headers=officer_headers,
    )
    assert response.status_code == 201, response.text
    challan = response.json()["challan"]
    assert challan["vehicle_id"] == first["vehicle_id"]
    assert challan["accused_id"] == first["accused_id"]


def test_guided_create_needs_details_on_a_miss(client, officer_headers, noise_violation):
    response = client.post(
        f"{API}/challans/guided-create",
        json={"violation_id": noise_violation["id"], "plate_number": "abc-999", "cnic": "35201-7654321-3"},
        headers=officer_headers,
    )
    assert response.status_code == 400
    assert response.json()["message"] == (
        "No vehicle found with plate number 'ABC-999'. Vehicle details are required."
    )

    response = client.post(
        f"{API}/challans/guided-create",
        json={
            "violation_id": noise_violation["id"],
            "plate_number": "lea-1234",
            "vehicle_input": VEHICLE_INPUT,
            "cnic": "35201-765432-3",
        },
        headers=officer_headers,
    )
    assert response.status_code == 400
    assert client.get(f"{API}/vehicles/plate/LEA-1234", headers=officer_headers).status_code == 404
