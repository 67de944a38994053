# carerecords/store.py
import logging
import threading
from datetime import datetime
from pathlib import Path
from typing import Callable, Dict, Optional

import pandas as pd

from carerecords.models.records import Referral
from carerecords.paths import FilePathResolver
from carerecords.services.ehr_gateway import EHRGateway
from carerecords.services.entities import (
    AppointmentRepository,
    ClinicianRepository,
    FacilityRepository,
    PatientRepository,
    PrescriptionRepository,
    StaffRepository,
)
from carerecords.services.referral_manager import ReferralManager
from carerecords.services.repository import RecordRepository
from carerecords.utils.csv_codec import CsvCodec

logger = logging.getLogger(__name__)


class RecordStore:
    """
    Application context: one repository per entity plus the referral manager.

    Build one store at startup and pass it to whatever needs record access.
    The referral manager is created on first use, exactly once, even when
    several threads ask for it at the same time.
    """

    def __init__(
        self,
        resolver: Optional[FilePathResolver] = None,
        codec: Optional[CsvCodec] = None,
        ehr_gateway: Optional[EHRGateway] = None,
        strict_transitions: Optional[bool] = None,
        clock: Optional[Callable[[], datetime]] = None,
    ):
        self.resolver = resolver or FilePathResolver()
        self.codec = codec or CsvCodec()
        self._ehr_gateway = ehr_gateway
        self._strict_transitions = strict_transitions
        self._clock = clock

        self.patients = PatientRepository(self.resolver.entity_file("patients"), self.codec)
        self.clinicians = ClinicianRepository(self.resolver.entity_file("clinicians"), self.codec)
        self.facilities = FacilityRepository(self.resolver.entity_file("facilities"), self.codec)
        self.appointments = AppointmentRepository(self.resolver.entity_file("appointments"), self.codec)
        self.prescriptions = PrescriptionRepository(self.resolver.entity_file("prescriptions"), self.codec)
        self.staff = StaffRepository(self.resolver.entity_file("staff"), self.codec)

        self._referral_manager: Optional[ReferralManager] = None
        self._manager_lock = threading.Lock()

    # ------------------------------- Referral manager -------------------------------
    @property
    def referral_manager(self) -> ReferralManager:
        if self._referral_manager is None:
            with self._manager_lock:
                if self._referral_manager is None:
                    self._referral_manager = ReferralManager(
                        path=self.resolver.entity_file("referrals"),
                        codec=self.codec,
                        resolver=self.resolver,
                        ehr_gateway=self._ehr_gateway,
                        strict_transitions=self._strict_transitions,
                        clock=self._clock,
                    )
        return self._referral_manager

    def repositories(self) -> Dict[str, RecordRepository]:
        return {
            "patients": self.patients,
            "clinicians": self.clinicians,
            "facilities": self.facilities,
            "appointments": self.appointments,
            "prescriptions": self.prescriptions,
            "staff": self.staff,
        }

    # ------------------------------- Load / save -------------------------------
    def load_all_data(self) -> Dict[str, int]:
        """Load every entity file. A missing or unreadable file aborts with OSError."""
        counts = {name: repo.load_all() for name, repo in self.repositories().items()}
        counts["referrals"] = self.referral_manager.load()
        logger.info(
            "Data loaded: " + ", ".join(f"{name}={count}" for name, count in counts.items())
        )
        return counts

    def save_all_data(self) -> None:
        """Rewrite every entity file from memory."""
        self.resolver.ensure_data_dir()
        for repo in self.repositories().values():
            repo.save_all()
        self.referral_manager.save()
        logger.info(f"All data saved to {self.resolver.data_dir}")

    def summary_frame(self) -> pd.DataFrame:
        """Record and parse-warning counts per entity."""
        rows = [
            {"entity": name, "records": repo.count(), "parse_warnings": len(repo.parse_warnings)}
            for name, repo in self.repositories().items()
        ]
        manager = self.referral_manager
        rows.append(
            {"entity": "referrals", "records": manager.referral_count(), "parse_warnings": len(manager.parse_warnings)}
        )
        return pd.DataFrame(rows, columns=["entity", "records", "parse_warnings"])

    # ------------------------------- Referral letters -------------------------------
    def resolve_letter_parties(self, referral: Referral) -> Dict[str, object]:
        """Look up the soft references a letter needs. Dangling IDs resolve to None."""
        return {
            "patient": self.patients.get_by_id(referral.patient_id),
            "referring_clinician": self.clinicians.get_by_id(referral.referring_clinician_id),
            "referred_to_clinician": self.clinicians.get_by_id(referral.referred_to_clinician_id),
            "referring_facility": self.facilities.get_by_id(referral.referring_facility_id),
            "referred_to_facility": self.facilities.get_by_id(referral.referred_to_facility_id),
        }

    def generate_referral_letter(self, referral_id: str) -> Optional[Path]:
        """Resolve a stored referral's parties and write its letter. None if the referral is unknown."""
        manager = self.referral_manager
        referral = manager.get_referral_by_id(referral_id)
        if referral is None:
            return None
        return manager.generate_referral_letter(referral, **self.resolve_letter_parties(referral))
