# carerecords/services/letters.py
from datetime import datetime
from typing import List, Optional

from carerecords import config
from carerecords.models.records import Clinician, Facility, Patient, Referral

RULE_WIDTH = 60


def _text(value) -> str:
    if value is None:
        return ""
    return str(value)


def _section(title: str) -> List[str]:
    return ["-" * RULE_WIDTH, title, "-" * RULE_WIDTH]


def _facility_lines(facility: Optional[Facility]) -> List[str]:
    if facility is None:
        return ["Facility: ", "Address: "]
    return [f"Facility: {_text(facility.facility_name)}", f"Address: {_text(facility.address)}"]


def render_referral_letter(
    referral: Referral,
    patient: Optional[Patient] = None,
    referring_clinician: Optional[Clinician] = None,
    referred_to_clinician: Optional[Clinician] = None,
    referring_facility: Optional[Facility] = None,
    referred_to_facility: Optional[Facility] = None,
    generated_at: Optional[datetime] = None,
) -> str:
    """
    Render the plain-text referral letter.

    Any party that could not be resolved keeps its labels with blank values,
    so the layout is the same whatever is missing.
    """
    generated_at = generated_at or datetime.now()
    lines: List[str] = [
        "=" * RULE_WIDTH,
        "                 REFERRAL LETTER",
        "=" * RULE_WIDTH,
        "",
        f"Referral ID: {_text(referral.referral_id)}",
        f"Date: {_text(referral.referral_date)}",
        f"Urgency: {_text(referral.urgency_level)}",
        "",
    ]

    # Patient
    lines += _section("PATIENT DETAILS")
    if patient is not None:
        lines += [
            f"Name: {patient.full_name}",
            f"Date of Birth: {_text(patient.date_of_birth)}",
            f"NHS Number: {_text(patient.nhs_number)}",
            f"Address: {_text(patient.address)}",
            f"Phone: {_text(patient.phone_number)}",
        ]
    else:
        lines += ["Name: ", "Date of Birth: ", "NHS Number: ", "Address: ", "Phone: "]
    lines.append("")

    # Referring side
    lines += _section("REFERRING CLINICIAN")
    if referring_clinician is not None:
        lines += [
            f"Name: {referring_clinician.full_name}",
            f"Title: {_text(referring_clinician.title)}",
            f"Email: {_text(referring_clinician.email)}",
        ]
    else:
        lines += ["Name: ", "Title: ", "Email: "]
    lines += _facility_lines(referring_facility)
    lines.append("")

    # Receiving side
    lines += _section("REFERRED TO")
    if referred_to_clinician is not None:
        lines += [
            f"Name: {referred_to_clinician.full_name}",
            f"Speciality: {_text(referred_to_clinician.speciality)}",
            f"Email: {_text(referred_to_clinician.email)}",
        ]
    else:
        lines += ["Name: ", "Speciality: ", "Email: "]
    lines += _facility_lines(referred_to_facility)
    lines.append("")

    # Clinical information
    lines += _section("CLINICAL INFORMATION")
    lines += [
        f"Reason for Referral: {_text(referral.referral_reason)}",
        "",
        "Clinical Summary:",
        _text(referral.clinical_summary),
        "",
        f"Requested Investigations: {_text(referral.requested_investigations)}",
        "",
    ]
    if referral.notes:
        lines.append(f"Additional Notes: {referral.notes}")
    lines.append("")

    lines += [
        "=" * RULE_WIDTH,
        "This referral was generated by the Healthcare Management System",
        f"Generated on: {generated_at.strftime(config.LETTER_FOOTER_TIMESTAMP)}",
        "=" * RULE_WIDTH,
    ]
    return "\n".join(lines) + "\n"


def letter_filename(referral_id: str, generated_at: datetime) -> str:
    return f"referral_{referral_id}_{generated_at.strftime(config.LETTER_FILENAME_TIMESTAMP)}.txt"
