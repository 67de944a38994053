# carerecords/services/referral_manager.py
import logging
from datetime import datetime
from pathlib import Path
from typing import Callable, Dict, FrozenSet, List, Optional

import pandas as pd

from carerecords import config
from carerecords.exceptions import InvalidStatusTransition
from carerecords.models.records import Clinician, Facility, Patient, Referral
from carerecords.models.schemas import REFERRAL_SCHEMA
from carerecords.paths import FilePathResolver
from carerecords.services.audit import AuditLog
from carerecords.services.ehr_gateway import EHRGateway, LoggingEHRGateway
from carerecords.services.letters import letter_filename, render_referral_letter
from carerecords.services.repository import PathLike, RecordRepository
from carerecords.utils.csv_codec import CsvCodec
from carerecords.utils.parsing import ParseWarning

logger = logging.getLogger(__name__)


class ReferralStatus:
    NEW = "New"
    PENDING = "Pending"
    IN_PROGRESS = "In Progress"
    COMPLETED = "Completed"

    ALL = (NEW, PENDING, IN_PROGRESS, COMPLETED)


class UrgencyLevel:
    URGENT = "Urgent"
    ROUTINE = "Routine"
    NON_URGENT = "Non-urgent"

    ALL = (URGENT, ROUTINE, NON_URGENT)


# Strict mode only: a referral moves forward through the workflow, never back.
_ORDER = [s.lower() for s in ReferralStatus.ALL]
ALLOWED_TRANSITIONS: Dict[str, FrozenSet[str]] = {
    status: frozenset(_ORDER[index:]) for index, status in enumerate(_ORDER)
}


def is_transition_allowed(old_status: Optional[str], new_status: str) -> bool:
    new_key = (new_status or "").lower()
    if new_key not in _ORDER:
        return False
    old_key = (old_status or "").lower()
    # Unrecognised legacy statuses may move to any known status.
    if old_key not in ALLOWED_TRANSITIONS:
        return True
    return new_key in ALLOWED_TRANSITIONS[old_key]


class ReferralManager:
    """
    Owns the referral collection, its audit trail and letter generation.

    Every mutating call writes exactly one audit entry as part of the same
    call; lookups that miss return ``None``/``False`` and write nothing.
    One instance is meant to serve the whole process: obtain it through
    ``RecordStore.referral_manager`` rather than constructing it ad hoc.
    """

    def __init__(
        self,
        path: Optional[PathLike] = None,
        codec: Optional[CsvCodec] = None,
        resolver: Optional[FilePathResolver] = None,
        ehr_gateway: Optional[EHRGateway] = None,
        strict_transitions: Optional[bool] = None,
        clock: Optional[Callable[[], datetime]] = None,
    ):
        self._clock = clock or datetime.now
        self._referrals: RecordRepository[Referral] = RecordRepository(REFERRAL_SCHEMA, path, codec)
        self._audit = AuditLog(clock=self._clock)
        self.resolver = resolver or FilePathResolver()
        self.ehr_gateway = ehr_gateway or LoggingEHRGateway()
        self.strict_transitions = config.STRICT_STATUS if strict_transitions is None else strict_transitions
        self._audit.record("ReferralManager initialized")

    # ------------------------------- Persistence -------------------------------
    def load(self, path: Optional[PathLike] = None) -> int:
        count = self._referrals.load_all(path)
        self._audit.record(f"Referral queue loaded with {count} referrals")
        return count

    def save(self, path: Optional[PathLike] = None) -> None:
        self._referrals.save_all(path)

    def set_referrals(self, referrals: List[Referral]) -> None:
        self._referrals.replace_all(referrals)
        self._audit.record(f"Referral queue loaded with {len(referrals)} referrals")

    @property
    def parse_warnings(self) -> List[ParseWarning]:
        return self._referrals.parse_warnings

    # ------------------------------- Queries -------------------------------
    def get_all_referrals(self) -> List[Referral]:
        return self._referrals.get_all()

    def get_referral_by_id(self, referral_id: str) -> Optional[Referral]:
        return self._referrals.get_by_id(referral_id)

    def get_referrals_by_patient(self, patient_id: str) -> List[Referral]:
        return self._referrals.find_by("patient_id", patient_id)

    def get_urgent_referrals(self) -> List[Referral]:
        return self._referrals.filter(lambda r: r.is_urgent)

    def get_referrals_by_urgency(self, urgency_level: str) -> List[Referral]:
        return self._referrals.find_by_category("urgency_level", urgency_level)

    def get_referrals_by_status(self, status: str) -> List[Referral]:
        return self._referrals.find_by_category("status", status)

    def referral_count(self) -> int:
        return self._referrals.count()

    def next_referral_id(self) -> str:
        return self._referrals.next_id()

    def to_frame(self) -> pd.DataFrame:
        return self._referrals.to_frame()

    # ------------------------------- Mutations -------------------------------
    def add_referral(self, referral: Referral) -> None:
        self._referrals.add(referral)
        self._audit.record(f"Referral added: {referral.referral_id} - {referral.referral_reason}")

    def create_referral(
        self,
        patient_id: str,
        referring_clinician_id: str,
        referred_to_clinician_id: str,
        referring_facility_id: str,
        referred_to_facility_id: str,
        urgency_level: str,
        referral_reason: str,
        clinical_summary: str,
        requested_investigations: str,
        notes: Optional[str] = None,
    ) -> Referral:
        """Build a new referral with the next ID and today's dates, and add it."""
        today = self._clock().date()
        referral = Referral(
            referral_id=self.next_referral_id(),
            patient_id=patient_id,
            referring_clinician_id=referring_clinician_id,
            referred_to_clinician_id=referred_to_clinician_id,
            referring_facility_id=referring_facility_id,
            referred_to_facility_id=referred_to_facility_id,
            referral_date=today,
            urgency_level=urgency_level,
            referral_reason=referral_reason,
            clinical_summary=clinical_summary,
            requested_investigations=requested_investigations,
            status=ReferralStatus.NEW,
            notes=notes or "",
            created_date=today,
            last_updated=today,
        )
        self.add_referral(referral)
        return referral

    def remove_referral(self, referral_id: str) -> bool:
        removed = self._referrals.delete(referral_id)
        if removed:
            self._audit.record(f"Referral removed: {referral_id}")
        return removed

    def update_referral(self, referral: Referral) -> bool:
        updated = self._referrals.update(referral)
        if updated:
            self._audit.record(f"Referral updated: {referral.referral_id}")
        return updated

    def update_referral_status(self, referral_id: str, new_status: str) -> bool:
        """
        Set a referral's status and stamp ``last_updated``.

        Returns False when the referral does not exist. In strict mode a
        backwards or unknown status raises ``InvalidStatusTransition``.
        """
        current = self._referrals.get_by_id(referral_id)
        if current is None:
            return False
        old_status = current.status
        if self.strict_transitions and not is_transition_allowed(old_status, new_status):
            raise InvalidStatusTransition(referral_id, old_status, new_status)

        self._referrals.modify(referral_id, status=new_status, last_updated=self._clock().date())
        self._audit.record(f"Referral {referral_id} status changed from {old_status} to {new_status}")
        return True

    def clear_all_referrals(self) -> None:
        self._referrals.clear()
        self._audit.record("All referrals cleared from queue")

    # ------------------------------- Documents & EHR -------------------------------
    def generate_referral_letter(
        self,
        referral: Referral,
        patient: Optional[Patient] = None,
        referring_clinician: Optional[Clinician] = None,
        referred_to_clinician: Optional[Clinician] = None,
        referring_facility: Optional[Facility] = None,
        referred_to_facility: Optional[Facility] = None,
    ) -> Path:
        """
        Write the referral letter to a new file in the output directory and
        return its path. Raises ``FileExistsError`` rather than overwrite an
        earlier letter generated in the same second.
        """
        generated_at = self._clock()
        content = render_referral_letter(
            referral,
            patient,
            referring_clinician,
            referred_to_clinician,
            referring_facility,
            referred_to_facility,
            generated_at=generated_at,
        )
        target = self.resolver.output_file(letter_filename(referral.referral_id, generated_at))
        with open(target, "x", encoding="utf-8") as f:
            f.write(content)
        logger.info(f"Referral letter written to {target}")

        self._audit.record(f"Referral letter generated for {referral.referral_id} at {target}")
        return target

    def update_ehr(self, referral: Referral) -> None:
        self.ehr_gateway.push_referral(referral)
        self._audit.record(
            f"EHR updated for referral: {referral.referral_id} - Patient: {referral.patient_id} - Status: {referral.status}"
        )

    # ------------------------------- Audit -------------------------------
    def get_audit_log(self) -> List[str]:
        return self._audit.entries()
