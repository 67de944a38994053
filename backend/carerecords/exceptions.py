# carerecords/exceptions.py


class CareRecordsError(Exception):
    """Base class for errors raised by the record core."""


class UnknownEntityError(CareRecordsError, KeyError):
    """A logical entity name that has no registered schema or data file."""


class InvalidStatusTransition(CareRecordsError, ValueError):
    """Raised in strict mode when a referral status change is not allowed."""

    def __init__(self, referral_id: str, old_status: str, new_status: str):
        self.referral_id = referral_id
        self.old_status = old_status
        self.new_status = new_status
        super().__init__(
            f"Referral {referral_id}: status change from '{old_status}' to '{new_status}' is not allowed"
        )
