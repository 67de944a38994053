# carerecords/services/__init__.py
from .entities import (
    AppointmentRepository,
    ClinicianRepository,
    FacilityRepository,
    PatientRepository,
    PrescriptionRepository,
    StaffRepository,
)
from .referral_manager import ReferralManager, ReferralStatus, UrgencyLevel
from .repository import RecordRepository

__all__ = [
    "AppointmentRepository",
    "ClinicianRepository",
    "FacilityRepository",
    "PatientRepository",
    "PrescriptionRepository",
    "StaffRepository",
    "ReferralManager",
    "ReferralStatus",
    "UrgencyLevel",
    "RecordRepository",
]
