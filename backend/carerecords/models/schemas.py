# carerecords/models/schemas.py
"""
Schema descriptors: the column list of each entity file plus the
row <-> record conversion the generic repository needs.

Column order is the on-disk compatibility contract. Record field names are
the column names, so one descriptor per entity is enough to drive both
directions of the mapping.
"""
from dataclasses import dataclass, field
from typing import Dict, FrozenSet, Generic, List, Optional, Sequence, Tuple, Type, TypeVar

from pydantic import BaseModel

from carerecords.exceptions import UnknownEntityError
from carerecords.models.records import (
    Appointment,
    Clinician,
    Facility,
    Patient,
    Prescription,
    Referral,
    Staff,
)
from carerecords.utils.parsing import (
    WarningSink,
    format_date,
    format_time,
    parse_date,
    parse_int,
    parse_time,
)

RecordT = TypeVar("RecordT", bound=BaseModel)


@dataclass(frozen=True)
class SchemaDescriptor(Generic[RecordT]):
    entity: str
    model: Type[RecordT]
    columns: Tuple[str, ...]
    id_prefix: Optional[str] = None  # None: IDs are supplied by the caller
    id_width: int = 3
    date_columns: FrozenSet[str] = field(default_factory=frozenset)
    time_columns: FrozenSet[str] = field(default_factory=frozenset)
    int_columns: FrozenSet[str] = field(default_factory=frozenset)
    min_columns: Optional[int] = None

    @property
    def id_field(self) -> str:
        return self.columns[0]

    @property
    def required_columns(self) -> int:
        return self.min_columns if self.min_columns is not None else len(self.columns)

    def record_id(self, record: RecordT) -> str:
        return getattr(record, self.id_field)

    def decode_row(self, row: Sequence[str], sink: Optional[WarningSink] = None) -> RecordT:
        """Build a record from a CSV row; malformed cells fall back to defaults."""
        record_id = row[0] if row else ""
        values = {}
        for index, column in enumerate(self.columns):
            if index >= len(row):
                break
            cell = row[index]
            if column in self.date_columns:
                values[column] = parse_date(cell, column, sink, record_id)
            elif column in self.time_columns:
                values[column] = parse_time(cell, column, sink, record_id)
            elif column in self.int_columns:
                values[column] = parse_int(cell, column, sink, record_id)
            else:
                values[column] = cell
        return self.model(**values)

    def encode_row(self, record: RecordT) -> List[str]:
        row = []
        for column in self.columns:
            value = getattr(record, column)
            if column in self.date_columns:
                row.append(format_date(value))
            elif column in self.time_columns:
                row.append(format_time(value))
            elif value is None:
                row.append("")
            else:
                row.append(str(value))
        return row


# ------------------------------- Entity schemas -------------------------------
PATIENT_SCHEMA = SchemaDescriptor(
    entity="patients",
    model=Patient,
    id_prefix="P",
    columns=(
        "patient_id", "first_name", "last_name", "date_of_birth", "nhs_number",
        "gender", "phone_number", "email", "address", "postcode",
        "emergency_contact_name", "emergency_contact_phone", "registration_date", "gp_surgery_id",
    ),
    date_columns=frozenset({"date_of_birth", "registration_date"}),
)

CLINICIAN_SCHEMA = SchemaDescriptor(
    entity="clinicians",
    model=Clinician,
    id_prefix="C",
    columns=(
        "clinician_id", "first_name", "last_name", "title", "speciality", "gmc_number",
        "phone_number", "email", "workplace_id", "workplace_type", "employment_status", "start_date",
    ),
    date_columns=frozenset({"start_date"}),
)

FACILITY_SCHEMA = SchemaDescriptor(
    entity="facilities",
    model=Facility,
    id_prefix=None,
    columns=(
        "facility_id", "facility_name", "facility_type", "address", "postcode", "phone_number",
        "email", "opening_hours", "manager_name", "capacity", "specialities_offered",
    ),
    int_columns=frozenset({"capacity"}),
)

APPOINTMENT_SCHEMA = SchemaDescriptor(
    entity="appointments",
    model=Appointment,
    id_prefix="A",
    columns=(
        "appointment_id", "patient_id", "clinician_id", "facility_id", "appointment_date",
        "appointment_time", "duration_minutes", "appointment_type", "status", "reason_for_visit",
        "notes", "created_date", "last_modified",
    ),
    date_columns=frozenset({"appointment_date", "created_date", "last_modified"}),
    time_columns=frozenset({"appointment_time"}),
    int_columns=frozenset({"duration_minutes"}),
)

PRESCRIPTION_SCHEMA = SchemaDescriptor(
    entity="prescriptions",
    model=Prescription,
    id_prefix="RX",
    columns=(
        "prescription_id", "patient_id", "clinician_id", "appointment_id", "prescription_date",
        "medication_name", "dosage", "frequency", "duration_days", "quantity", "instructions",
        "pharmacy_name", "status", "issue_date", "collection_date",
    ),
    date_columns=frozenset({"prescription_date", "issue_date", "collection_date"}),
    int_columns=frozenset({"duration_days"}),
)

REFERRAL_SCHEMA = SchemaDescriptor(
    entity="referrals",
    model=Referral,
    id_prefix="R",
    columns=(
        "referral_id", "patient_id", "referring_clinician_id", "referred_to_clinician_id",
        "referring_facility_id", "referred_to_facility_id", "referral_date", "urgency_level",
        "referral_reason", "clinical_summary", "requested_investigations", "status",
        "appointment_id", "notes", "created_date", "last_updated",
    ),
    date_columns=frozenset({"referral_date", "created_date", "last_updated"}),
)

STAFF_SCHEMA = SchemaDescriptor(
    entity="staff",
    model=Staff,
    id_prefix="ST",
    columns=(
        "staff_id", "first_name", "last_name", "role", "department", "facility_id",
        "phone_number", "email", "employment_status", "start_date", "line_manager", "access_level",
    ),
    date_columns=frozenset({"start_date"}),
)

SCHEMAS: Dict[str, SchemaDescriptor] = {
    schema.entity: schema
    for schema in (
        PATIENT_SCHEMA,
        CLINICIAN_SCHEMA,
        FACILITY_SCHEMA,
        APPOINTMENT_SCHEMA,
        PRESCRIPTION_SCHEMA,
        REFERRAL_SCHEMA,
        STAFF_SCHEMA,
    )
}


def get_schema(entity: str) -> SchemaDescriptor:
    try:
        return SCHEMAS[entity]
    except KeyError:
        raise UnknownEntityError(f"No schema registered for entity '{entity}'") from None
