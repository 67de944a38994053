# seed_records.py
import sys
from datetime import date, time

from carerecords.main import create_store
from carerecords.models import Appointment, Clinician, Facility, Patient, Prescription, Referral, Staff

# Small sample data set
FACILITIES = [
    Facility(
        facility_id="S001", facility_name="Riverside Medical Practice", facility_type="GP Surgery",
        address="12 River Road, Birmingham", postcode="B1 1AA", phone_number="0121 496 0000",
        email="reception@riverside.nhs.uk", opening_hours="Mon-Fri 08:00-18:30",
        manager_name="Helen Carter", capacity=0, specialities_offered="General Practice|Minor Surgery",
    ),
    Facility(
        facility_id="H001", facility_name="City General Hospital", facility_type="Hospital",
        address="1 Hospital Way, Birmingham", postcode="B15 2TH", phone_number="0121 496 1000",
        email="info@citygeneral.nhs.uk", opening_hours="24 hours",
        manager_name="Dr. Paul Reid", capacity=850, specialities_offered="Cardiology|Orthopaedics|Neurology",
    ),
]

CLINICIANS = [
    Clinician(
        clinician_id="C001", first_name="Sarah", last_name="Okafor", title="GP", speciality="General Practice",
        gmc_number="GMC1234567", phone_number="0121 496 0001", email="s.okafor@riverside.nhs.uk",
        workplace_id="S001", workplace_type="GP Surgery", employment_status="Full-time",
        start_date=date(2015, 9, 1),
    ),
    Clinician(
        clinician_id="C002", first_name="James", last_name="Whitfield", title="Consultant", speciality="Cardiology",
        gmc_number="GMC7654321", phone_number="0121 496 1001", email="j.whitfield@citygeneral.nhs.uk",
        workplace_id="H001", workplace_type="Hospital", employment_status="Full-time",
        start_date=date(2011, 4, 4),
    ),
]

PATIENTS = [
    Patient(
        patient_id="P001", first_name="Margaret", last_name="Hughes", date_of_birth=date(1956, 3, 14),
        nhs_number="4857773456", gender="F", phone_number="07700 900123", email="m.hughes@example.com",
        address="44 Elm Street, Birmingham", postcode="B2 4QA", emergency_contact_name="David Hughes",
        emergency_contact_phone="07700 900456", registration_date=date(2010, 6, 1), gp_surgery_id="S001",
    ),
    Patient(
        patient_id="P002", first_name="Ahmed", last_name="Khan", date_of_birth=date(1988, 11, 2),
        nhs_number="9434765919", gender="M", phone_number="07700 900789", email="a.khan@example.com",
        address="7 Park Lane, Birmingham", postcode="B5 7RS", emergency_contact_name="Sana Khan",
        emergency_contact_phone="07700 900012", registration_date=date(2019, 1, 15), gp_surgery_id="S001",
    ),
]

APPOINTMENTS = [
    Appointment(
        appointment_id="A001", patient_id="P001", clinician_id="C001", facility_id="S001",
        appointment_date=date(2025, 2, 10), appointment_time=time(9, 30), duration_minutes=15,
        appointment_type="Routine Consultation", status="Scheduled", reason_for_visit="Chest tightness on exertion",
        notes="", created_date=date(2025, 2, 1), last_modified=date(2025, 2, 1),
    ),
]

PRESCRIPTIONS = [
    Prescription(
        prescription_id="RX001", patient_id="P001", clinician_id="C001", appointment_id="A001",
        prescription_date=date(2025, 2, 10), medication_name="Glyceryl trinitrate spray", dosage="400mcg",
        frequency="As required", duration_days=30, quantity="1 spray", instructions="Use at onset of chest pain",
        pharmacy_name="Boots Pharmacy", status="Issued", issue_date=date(2025, 2, 10), collection_date=None,
    ),
]

REFERRALS = [
    Referral(
        referral_id="R001", patient_id="P001", referring_clinician_id="C001", referred_to_clinician_id="C002",
        referring_facility_id="S001", referred_to_facility_id="H001", referral_date=date(2025, 2, 10),
        urgency_level="Urgent", referral_reason="Suspected angina",
        clinical_summary="Exertional chest tightness for three weeks, relieved by rest.",
        requested_investigations="ECG, exercise tolerance test", status="New", appointment_id="A001",
        notes="", created_date=date(2025, 2, 10), last_updated=date(2025, 2, 10),
    ),
]

STAFF = [
    Staff(
        staff_id="ST001", first_name="Emma", last_name="Lewis", role="Receptionist", department="Front Desk",
        facility_id="S001", phone_number="0121 496 0002", email="e.lewis@riverside.nhs.uk",
        employment_status="Part-time", start_date=date(2021, 3, 8), line_manager="Helen Carter",
        access_level="Standard",
    ),
]


def seed(base_dir=None):
    store = create_store(base_dir)
    for record in FACILITIES:
        store.facilities.add(record)
    for record in CLINICIANS:
        store.clinicians.add(record)
    for record in PATIENTS:
        store.patients.add(record)
    for record in APPOINTMENTS:
        store.appointments.add(record)
    for record in PRESCRIPTIONS:
        store.prescriptions.add(record)
    for record in STAFF:
        store.staff.add(record)
    store.referral_manager.set_referrals(REFERRALS)

    store.save_all_data()
    print(f"✅ Seeded sample records into {store.resolver.data_dir}")
    return store


if __name__ == "__main__":
    seed(sys.argv[1] if len(sys.argv) > 1 else None)
