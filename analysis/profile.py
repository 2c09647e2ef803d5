"""Profile formatting: age and display strings."""

from __future__ import annotations

from datetime import date, datetime

from .dto import AuditSummary, ExperienceSummary, ProfileSummary, UserProfile
from .errors import FormatError
from .units import KILOBYTE, MEGABYTE, format_magnitude


def parse_date_of_birth(raw: object) -> date:
    """Parse a provider birth date.

    Args:
        raw: ISO date (`1990-05-01`) or ISO datetime (`1990-05-01T00:00:00Z`).

    Returns:
        The calendar date part.

    Raises:
        FormatError: When the value is missing or not an ISO date/datetime.
    """

    if isinstance(raw, datetime):
        return raw.date()
    if isinstance(raw, date):
        return raw
    if not isinstance(raw, str) or not raw.strip():
        raise FormatError("missing birth date", field="attrs.dateOfBirth")

    text = raw.strip()
    if text.endswith(("Z", "z")):
        text = f"{text[:-1]}+00:00"
    try:
        if "T" in text or " " in text:
            return datetime.fromisoformat(text).date()
        return date.fromisoformat(text)
    except ValueError as exc:
        raise FormatError(f"malformed birth date {raw!r}", field="attrs.dateOfBirth") from exc


def calculate_age(date_of_birth: date, *, today: date) -> int:
    """Return whole years between `date_of_birth` and `today`.

    One year is subtracted when this year's birthday has not occurred yet.

    Raises:
        FormatError: When the birth date lies after `today`.
    """

    if date_of_birth > today:
        raise FormatError(
            f"birth date {date_of_birth.isoformat()} is after {today.isoformat()}",
            field="attrs.dateOfBirth",
        )
    age = today.year - date_of_birth.year
    if (today.month, today.day) < (date_of_birth.month, date_of_birth.day):
        age -= 1
    return age


def build_profile_summary(
    profile: UserProfile,
    experience: ExperienceSummary,
    audits: AuditSummary,
    *,
    today: date,
) -> ProfileSummary:
    """Combine the profile with both summaries into display fields.

    Raises:
        FormatError: When the age cannot be computed from the birth date.
    """

    return ProfileSummary(
        full_name=profile.full_name,
        age=calculate_age(profile.date_of_birth, today=today),
        project_count=experience.project_count,
        total_experience_text=format_magnitude(experience.total_experience, KILOBYTE),
        audit_given_text=format_magnitude(audits.given_total, MEGABYTE),
        audit_received_text=format_magnitude(audits.received_total, MEGABYTE),
        audit_ratio_text=f"{audits.audit_ratio:.2f}",
    )
