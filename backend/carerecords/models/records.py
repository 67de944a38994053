# carerecords/models/records.py
from datetime import date, time
from typing import List, Optional

from pydantic import BaseModel


def _same(value: Optional[str], expected: str) -> bool:
    return (value or "").lower() == expected.lower()


class Patient(BaseModel):
    patient_id: str = ""
    first_name: str = ""
    last_name: str = ""
    date_of_birth: Optional[date] = None
    nhs_number: str = ""
    gender: str = ""
    phone_number: str = ""
    email: str = ""
    address: str = ""
    postcode: str = ""
    emergency_contact_name: str = ""
    emergency_contact_phone: str = ""
    registration_date: Optional[date] = None
    gp_surgery_id: str = ""

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}"

    @property
    def label(self) -> str:
        return f"{self.full_name} ({self.nhs_number})"


class Clinician(BaseModel):
    clinician_id: str = ""
    first_name: str = ""
    last_name: str = ""
    title: str = ""
    speciality: str = ""
    gmc_number: str = ""
    phone_number: str = ""
    email: str = ""
    workplace_id: str = ""
    workplace_type: str = ""
    employment_status: str = ""
    start_date: Optional[date] = None

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}"

    @property
    def label(self) -> str:
        return f"{self.title} {self.full_name}"

    @property
    def is_gp(self) -> bool:
        return _same(self.title, "GP")

    @property
    def is_specialist(self) -> bool:
        return _same(self.title, "Consultant")

    @property
    def is_nurse(self) -> bool:
        # "Nurse", "Senior Nurse", "Practice Nurse", "Staff Nurse"
        return "nurse" in (self.title or "").lower()


class Facility(BaseModel):
    facility_id: str = ""
    facility_name: str = ""
    facility_type: str = ""
    address: str = ""
    postcode: str = ""
    phone_number: str = ""
    email: str = ""
    opening_hours: str = ""
    manager_name: str = ""
    capacity: int = 0
    specialities_offered: str = ""

    @property
    def specialities(self) -> List[str]:
        if not self.specialities_offered:
            return []
        return self.specialities_offered.split("|")

    @property
    def is_gp_surgery(self) -> bool:
        return _same(self.facility_type, "GP Surgery")

    @property
    def is_hospital(self) -> bool:
        return _same(self.facility_type, "Hospital")

    @property
    def label(self) -> str:
        return f"{self.facility_id} - {self.facility_name}"


class Appointment(BaseModel):
    appointment_id: str = ""
    patient_id: str = ""
    clinician_id: str = ""
    facility_id: str = ""
    appointment_date: Optional[date] = None
    appointment_time: Optional[time] = None
    duration_minutes: int = 0
    appointment_type: str = ""
    status: str = ""
    reason_for_visit: str = ""
    notes: str = ""
    created_date: Optional[date] = None
    last_modified: Optional[date] = None

    @property
    def is_scheduled(self) -> bool:
        return _same(self.status, "Scheduled")

    @property
    def is_cancelled(self) -> bool:
        return _same(self.status, "Cancelled")

    @property
    def is_completed(self) -> bool:
        return _same(self.status, "Completed")

    @property
    def label(self) -> str:
        when = self.appointment_time.strftime("%H:%M") if self.appointment_time else None
        return f"{self.appointment_id} - {self.appointment_date} {when}"


class Prescription(BaseModel):
    prescription_id: str = ""
    patient_id: str = ""
    clinician_id: str = ""
    appointment_id: str = ""
    prescription_date: Optional[date] = None
    medication_name: str = ""
    dosage: str = ""
    frequency: str = ""
    duration_days: int = 0
    quantity: str = ""
    instructions: str = ""
    pharmacy_name: str = ""
    status: str = ""
    issue_date: Optional[date] = None
    collection_date: Optional[date] = None

    @property
    def is_issued(self) -> bool:
        return _same(self.status, "Issued")

    @property
    def is_collected(self) -> bool:
        return _same(self.status, "Collected")

    @property
    def label(self) -> str:
        return f"{self.prescription_id} - {self.medication_name} ({self.dosage})"


class Referral(BaseModel):
    referral_id: str = ""
    patient_id: str = ""
    referring_clinician_id: str = ""
    referred_to_clinician_id: str = ""
    referring_facility_id: str = ""
    referred_to_facility_id: str = ""
    referral_date: Optional[date] = None
    urgency_level: str = ""
    referral_reason: str = ""
    clinical_summary: str = ""
    requested_investigations: str = ""
    status: str = ""
    appointment_id: str = ""
    notes: str = ""
    created_date: Optional[date] = None
    last_updated: Optional[date] = None

    @property
    def is_urgent(self) -> bool:
        return _same(self.urgency_level, "Urgent")

    @property
    def is_routine(self) -> bool:
        return _same(self.urgency_level, "Routine")

    @property
    def is_new(self) -> bool:
        return _same(self.status, "New")

    @property
    def is_pending(self) -> bool:
        return _same(self.status, "Pending")

    @property
    def is_in_progress(self) -> bool:
        return _same(self.status, "In Progress")

    @property
    def is_completed(self) -> bool:
        return _same(self.status, "Completed")

    @property
    def label(self) -> str:
        return f"{self.referral_id} - {self.referral_reason} ({self.urgency_level})"


class Staff(BaseModel):
    staff_id: str = ""
    first_name: str = ""
    last_name: str = ""
    role: str = ""
    department: str = ""
    facility_id: str = ""
    phone_number: str = ""
    email: str = ""
    employment_status: str = ""
    start_date: Optional[date] = None
    line_manager: str = ""
    access_level: str = ""

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}"

    @property
    def is_manager(self) -> bool:
        return _same(self.access_level, "Manager")

    @property
    def is_receptionist(self) -> bool:
        return _same(self.role, "Receptionist")

    @property
    def label(self) -> str:
        return f"{self.staff_id} - {self.full_name} ({self.role})"
