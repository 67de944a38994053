# carerecords/services/entities.py
"""Entity-specific queries layered on the generic repository."""
from datetime import date
from typing import List, Optional

from carerecords.models.records import Appointment, Clinician, Facility, Patient, Prescription, Staff
from carerecords.models.schemas import (
    APPOINTMENT_SCHEMA,
    CLINICIAN_SCHEMA,
    FACILITY_SCHEMA,
    PATIENT_SCHEMA,
    PRESCRIPTION_SCHEMA,
    STAFF_SCHEMA,
)
from carerecords.services.repository import PathLike, RecordRepository
from carerecords.utils.csv_codec import CsvCodec

NAME_FIELDS = ("first_name", "last_name")


def _search_full_name(repo: RecordRepository, term: str):
    needle = (term or "").lower()
    return repo.filter(
        lambda r: any(needle in (getattr(r, f) or "").lower() for f in NAME_FIELDS)
        or needle in r.full_name.lower()
    )


class PatientRepository(RecordRepository[Patient]):
    def __init__(self, path: Optional[PathLike] = None, codec: Optional[CsvCodec] = None):
        super().__init__(PATIENT_SCHEMA, path, codec)

    def by_nhs_number(self, nhs_number: str) -> Optional[Patient]:
        matches = self.find_by("nhs_number", nhs_number)
        return matches[0] if matches else None

    def by_gp_surgery(self, gp_surgery_id: str) -> List[Patient]:
        return self.find_by("gp_surgery_id", gp_surgery_id)

    def search_by_name(self, term: str) -> List[Patient]:
        return _search_full_name(self, term)


class ClinicianRepository(RecordRepository[Clinician]):
    def __init__(self, path: Optional[PathLike] = None, codec: Optional[CsvCodec] = None):
        super().__init__(CLINICIAN_SCHEMA, path, codec)

    def gps(self) -> List[Clinician]:
        return self.filter(lambda c: c.is_gp)

    def specialists(self) -> List[Clinician]:
        return self.filter(lambda c: c.is_specialist)

    def nurses(self) -> List[Clinician]:
        return self.filter(lambda c: c.is_nurse)

    def by_workplace(self, workplace_id: str) -> List[Clinician]:
        return self.find_by("workplace_id", workplace_id)

    def by_speciality(self, speciality: str) -> List[Clinician]:
        return self.find_by_category("speciality", speciality)

    def search_by_name(self, term: str) -> List[Clinician]:
        return _search_full_name(self, term)


class FacilityRepository(RecordRepository[Facility]):
    def __init__(self, path: Optional[PathLike] = None, codec: Optional[CsvCodec] = None):
        super().__init__(FACILITY_SCHEMA, path, codec)

    def gp_surgeries(self) -> List[Facility]:
        return self.filter(lambda f: f.is_gp_surgery)

    def hospitals(self) -> List[Facility]:
        return self.filter(lambda f: f.is_hospital)

    def search_by_name(self, term: str) -> List[Facility]:
        return self.search(term, ("facility_name",))


class AppointmentRepository(RecordRepository[Appointment]):
    def __init__(self, path: Optional[PathLike] = None, codec: Optional[CsvCodec] = None):
        super().__init__(APPOINTMENT_SCHEMA, path, codec)

    def by_patient(self, patient_id: str) -> List[Appointment]:
        return self.find_by("patient_id", patient_id)

    def by_clinician(self, clinician_id: str) -> List[Appointment]:
        return self.find_by("clinician_id", clinician_id)

    def by_date(self, day: date) -> List[Appointment]:
        return self.find_by_date("appointment_date", day)

    def by_status(self, status: str) -> List[Appointment]:
        return self.find_by_category("status", status)

    def scheduled(self) -> List[Appointment]:
        return self.filter(lambda a: a.is_scheduled)

    def cancel(self, appointment_id: str) -> bool:
        return self.modify(appointment_id, status="Cancelled", last_modified=date.today())


class PrescriptionRepository(RecordRepository[Prescription]):
    def __init__(self, path: Optional[PathLike] = None, codec: Optional[CsvCodec] = None):
        super().__init__(PRESCRIPTION_SCHEMA, path, codec)

    def by_patient(self, patient_id: str) -> List[Prescription]:
        return self.find_by("patient_id", patient_id)

    def by_clinician(self, clinician_id: str) -> List[Prescription]:
        return self.find_by("clinician_id", clinician_id)

    def by_status(self, status: str) -> List[Prescription]:
        return self.find_by_category("status", status)

    def issued(self) -> List[Prescription]:
        return self.filter(lambda p: p.is_issued)

    def search_by_medication(self, term: str) -> List[Prescription]:
        return self.search(term, ("medication_name",))

    def mark_collected(self, prescription_id: str) -> bool:
        return self.modify(prescription_id, status="Collected", collection_date=date.today())


class StaffRepository(RecordRepository[Staff]):
    def __init__(self, path: Optional[PathLike] = None, codec: Optional[CsvCodec] = None):
        super().__init__(STAFF_SCHEMA, path, codec)

    def by_facility(self, facility_id: str) -> List[Staff]:
        return self.find_by("facility_id", facility_id)

    def by_role(self, role: str) -> List[Staff]:
        return self.find_by_category("role", role)

    def by_department(self, department: str) -> List[Staff]:
        return self.find_by_category("department", department)

    def search_by_name(self, term: str) -> List[Staff]:
        return _search_full_name(self, term)
