# tests/conftest.py
from datetime import date, datetime

import pytest

from carerecords.models import Clinician, Facility, Patient, Referral
from carerecords.models.schemas import get_schema
from carerecords.paths import FilePathResolver
from carerecords.store import RecordStore
from carerecords.utils.csv_codec import CsvCodec

FIXED_NOW = datetime(2025, 3, 4, 9, 15, 30)


@pytest.fixture
def fixed_clock():
    return lambda: FIXED_NOW


@pytest.fixture
def codec():
    return CsvCodec(trim_quoted=True)


@pytest.fixture
def resolver(tmp_path):
    """Resolver rooted at a throwaway directory, with the data dir in place."""
    resolver = FilePathResolver(tmp_path)
    resolver.ensure_data_dir()
    return resolver


@pytest.fixture
def write_entity(resolver):
    """Write raw CSV lines for an entity, header included."""

    def _write(entity, lines, header=None):
        header = header if header is not None else ",".join(get_schema(entity).columns)
        path = resolver.entity_file(entity)
        path.write_text("\n".join([header] + list(lines)) + "\n", encoding="utf-8")
        return path

    return _write


@pytest.fixture
def store(resolver, codec, fixed_clock):
    return RecordStore(resolver=resolver, codec=codec, strict_transitions=False, clock=fixed_clock)


@pytest.fixture
def patient():
    return Patient(
        patient_id="P001",
        first_name="Margaret",
        last_name="Hughes",
        date_of_birth=date(1956, 3, 14),
        nhs_number="4857773456",
        gender="F",
        phone_number="07700 900123",
        email="m.hughes@example.com",
        address="44 Elm Street, Birmingham",
        postcode="B2 4QA",
        emergency_contact_name="David Hughes",
        emergency_contact_phone="07700 900456",
        registration_date=date(2010, 6, 1),
        gp_surgery_id="S001",
    )


@pytest.fixture
def gp():
    return Clinician(
        clinician_id="C001",
        first_name="Sarah",
        last_name="Okafor",
        title="GP",
        speciality="General Practice",
        email="s.okafor@riverside.nhs.uk",
        workplace_id="S001",
        workplace_type="GP Surgery",
    )


@pytest.fixture
def consultant():
    return Clinician(
        clinician_id="C002",
        first_name="James",
        last_name="Whitfield",
        title="Consultant",
        speciality="Cardiology",
        email="j.whitfield@citygeneral.nhs.uk",
        workplace_id="H001",
        workplace_type="Hospital",
    )


@pytest.fixture
def surgery():
    return Facility(
        facility_id="S001",
        facility_name="Riverside Medical Practice",
        facility_type="GP Surgery",
        address="12 River Road, Birmingham",
    )


@pytest.fixture
def hospital():
    return Facility(
        facility_id="H001",
        facility_name="City General Hospital",
        facility_type="Hospital",
        address="1 Hospital Way, Birmingham",
        capacity=850,
    )


@pytest.fixture
def make_referral():
    def _make(referral_id="R001", **overrides):
        values = dict(
            referral_id=referral_id,
            patient_id="P001",
            referring_clinician_id="C001",
            referred_to_clinician_id="C002",
            referring_facility_id="S001",
            referred_to_facility_id="H001",
            referral_date=date(2025, 3, 1),
            urgency_level="Urgent",
            referral_reason="Suspected angina",
            clinical_summary="Exertional chest tightness for three weeks.",
            requested_investigations="ECG",
            status="New",
            appointment_id="A001",
            notes="Patient anxious, please expedite",
            created_date=date(2025, 3, 1),
            last_updated=date(2025, 3, 1),
        )
        values.update(overrides)
        return Referral(**values)

    return _make
