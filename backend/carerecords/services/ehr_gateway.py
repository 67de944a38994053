# carerecords/services/ehr_gateway.py
"""Boundary to the external electronic health record system."""
import logging
from abc import ABC, abstractmethod

from carerecords.models.records import Referral

logger = logging.getLogger(__name__)


class EHRGateway(ABC):
    @abstractmethod
    def push_referral(self, referral: Referral) -> None:
        """Send the referral's current state to the EHR."""


class LoggingEHRGateway(EHRGateway):
    """Stand-in gateway: no EHR is connected, the update is only logged."""

    def push_referral(self, referral: Referral) -> None:
        logger.info(
            f"EHR update for referral {referral.referral_id} "
            f"(patient {referral.patient_id}, status {referral.status})"
        )
