# tests/test_repository.py
from datetime import date, time

import pytest

from carerecords.models import Patient
from carerecords.models.schemas import APPOINTMENT_SCHEMA, FACILITY_SCHEMA, PATIENT_SCHEMA
from carerecords.services.repository import RecordRepository

PATIENT_ROWS = [
    "P001,Margaret,Hughes,1956-03-14,4857773456,F,07700 900123,m@example.com,\"44 Elm St, Birmingham\",B2 4QA,David,0770,2010-06-01,S001",
    "P005,Ahmed,Khan,1988-11-02,9434765919,M,07700 900789,a@example.com,7 Park Lane,B5 7RS,Sana,0771,2019-01-15,S001",
]


@pytest.fixture
def patients(resolver, codec):
    return RecordRepository(PATIENT_SCHEMA, resolver.entity_file("patients"), codec)


def test_short_rows_are_dropped(patients, write_entity):
    write_entity("patients", PATIENT_ROWS + ["P009,Too,Short"])

    assert patients.load_all() == 2
    assert [p.patient_id for p in patients.get_all()] == ["P001", "P005"]


def test_stray_quote_costs_only_its_own_row(patients, write_entity):
    damaged = PATIENT_ROWS[0].replace('"44 Elm St, Birmingham"', 'Flat 5" Elm Rd')
    write_entity("patients", [damaged] + PATIENT_ROWS[1:] + [PATIENT_ROWS[1].replace("P005", "P007")])

    assert patients.load_all() == 2
    assert [p.patient_id for p in patients.get_all()] == ["P005", "P007"]


def test_load_decodes_typed_fields(patients, write_entity):
    write_entity("patients", PATIENT_ROWS)
    patients.load_all()

    p = patients.get_by_id("P001")
    assert p.date_of_birth == date(1956, 3, 14)
    assert p.address == "44 Elm St, Birmingham"
    assert patients.parse_warnings == []


def test_next_id_follows_highest(patients, write_entity):
    write_entity("patients", PATIENT_ROWS)
    patients.load_all()
    assert patients.next_id() == "P006"


def test_next_id_on_empty_repository(patients):
    assert patients.next_id() == "P001"


def test_facility_ids_are_not_generated(resolver, codec):
    facilities = RecordRepository(FACILITY_SCHEMA, resolver.entity_file("facilities"), codec)
    with pytest.raises(ValueError):
        facilities.next_id()


def test_lenient_parse_records_warnings(resolver, codec, write_entity):
    write_entity(
        "appointments",
        ["A001,P001,C001,S001,04/03/2025,9am,fifteen,Routine,Scheduled,Checkup,,2025-03-01,2025-03-01"],
    )
    appointments = RecordRepository(APPOINTMENT_SCHEMA, resolver.entity_file("appointments"), codec)

    assert appointments.load_all() == 1
    a = appointments.get_by_id("A001")
    assert a.appointment_date is None
    assert a.appointment_time is None
    assert a.duration_minutes == 0
    assert a.created_date == date(2025, 3, 1)
    assert {w.column for w in appointments.parse_warnings} == {
        "appointment_date",
        "appointment_time",
        "duration_minutes",
    }
    assert all(w.record_id == "A001" for w in appointments.parse_warnings)


def test_empty_optional_date_is_not_a_warning(resolver, codec, write_entity):
    write_entity(
        "appointments",
        ["A001,P001,C001,S001,2025-03-04,09:30,15,Routine,Scheduled,Checkup,,,"],
    )
    appointments = RecordRepository(APPOINTMENT_SCHEMA, resolver.entity_file("appointments"), codec)
    appointments.load_all()

    a = appointments.get_by_id("A001")
    assert a.appointment_time == time(9, 30)
    assert a.last_modified is None
    assert appointments.parse_warnings == []


def test_missing_file_raises(patients):
    with pytest.raises(FileNotFoundError):
        patients.load_all()


def test_no_path_configured():
    repo = RecordRepository(PATIENT_SCHEMA)
    with pytest.raises(ValueError):
        repo.load_all()


def test_delete_missing_id_leaves_collection(patients, patient):
    patients.add(patient)
    assert patients.delete("P999") is False
    assert patients.count() == 1


def test_delete_removes_first_match_only(patients, patient):
    patients.add(patient)
    patients.add(patient)
    assert patients.delete("P001") is True
    assert len(patients) == 1


def test_records_are_copies(patients, patient):
    patients.add(patient)
    patient.first_name = "Changed"
    assert patients.get_by_id("P001").first_name == "Margaret"

    fetched = patients.get_by_id("P001")
    fetched.first_name = "Also changed"
    assert patients.get_all()[0].first_name == "Margaret"


def test_update_and_modify(patients, patient):
    patients.add(patient)

    updated = patient.model_copy(update={"phone_number": "0121 000 0000"})
    assert patients.update(updated) is True
    assert patients.get_by_id("P001").phone_number == "0121 000 0000"

    assert patients.modify("P001", postcode="B1 1AA") is True
    assert patients.get_by_id("P001").postcode == "B1 1AA"

    assert patients.update(Patient(patient_id="P404")) is False
    assert patients.modify("P404", postcode="X") is False


def test_queries(patients, patient):
    patients.add(patient)
    patients.add(Patient(patient_id="P002", first_name="Ahmed", last_name="Khan", gender="m", gp_surgery_id="S002"))

    assert [p.patient_id for p in patients.find_by("gp_surgery_id", "S002")] == ["P002"]
    assert [p.patient_id for p in patients.find_by_category("gender", "M")] == ["P002"]
    assert [p.patient_id for p in patients.find_by_date("date_of_birth", date(1956, 3, 14))] == ["P001"]
    assert [p.patient_id for p in patients.search("HUGH", ("first_name", "last_name"))] == ["P001"]
    assert patients.filter(lambda p: p.date_of_birth is None)[0].patient_id == "P002"


def test_save_then_load(patients, patient, resolver, codec):
    tricky = patient.model_copy(update={"address": 'Flat 2, "The Maltings"', "patient_id": "P002"})
    patients.add(patient)
    patients.add(tricky)
    patients.save_all()

    reloaded = RecordRepository(PATIENT_SCHEMA, resolver.entity_file("patients"), codec)
    assert reloaded.load_all() == 2
    assert reloaded.get_all() == patients.get_all()


def test_append_to_file(patients, patient, write_entity):
    write_entity("patients", PATIENT_ROWS)
    assert patients.append_to_file([patient.model_copy(update={"patient_id": "P010"})]) == 1
    assert patients.count() == 0

    patients.load_all()
    assert patients.next_id() == "P011"


def test_replace_all_and_clear(patients, patient):
    patients.replace_all([patient])
    assert patients.count() == 1
    patients.clear()
    assert patients.get_all() == []


def test_to_frame(patients, patient):
    patients.add(patient)
    frame = patients.to_frame()

    assert list(frame.columns) == list(PATIENT_SCHEMA.columns)
    assert frame.loc[0, "patient_id"] == "P001"
    assert frame.loc[0, "date_of_birth"] == "1956-03-14"
