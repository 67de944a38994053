# carerecords/models/__init__.py
from .records import Appointment, Clinician, Facility, Patient, Prescription, Referral, Staff
from .schemas import SCHEMAS, SchemaDescriptor, get_schema

__all__ = [
    "Appointment",
    "Clinician",
    "Facility",
    "Patient",
    "Prescription",
    "Referral",
    "Staff",
    "SCHEMAS",
    "SchemaDescriptor",
    "get_schema",
]
