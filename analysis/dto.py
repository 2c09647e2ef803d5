"""DTO types returned by the analysis layer.

DTOs are plain data containers used to transport transaction summaries to the
dashboard. They intentionally avoid any Django dependencies.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from decimal import Decimal
from typing import Literal

TransactionType = Literal["xp", "up", "down"]

XP: TransactionType = "xp"
AUDIT_GIVEN: TransactionType = "up"
AUDIT_RECEIVED: TransactionType = "down"


@dataclass(frozen=True, slots=True)
class TransactionRecord:
    """One provider-reported transaction.

    Attributes:
        type: Discriminator (`xp` experience granted, `up` audit given,
            `down` audit received). Unknown types are carried but ignored.
        amount: Non-negative byte-style magnitude of points.
        object_name: Project name, present for `xp` records.
    """

    type: str
    amount: int
    object_name: str | None = None


@dataclass(frozen=True, slots=True)
class UserProfile:
    """Profile snapshot returned alongside the transactions."""

    first_name: str
    last_name: str
    audit_ratio: float
    date_of_birth: date

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}".strip()


@dataclass(frozen=True, slots=True)
class UserData:
    """Parsed result of a single user query."""

    profile: UserProfile
    transactions: tuple[TransactionRecord, ...] = ()


@dataclass(frozen=True, slots=True)
class ChartColor:
    """A translucent fill and an opaque border sharing the same hue."""

    fill: str
    border: str


@dataclass(frozen=True, slots=True)
class AggregatedDataset:
    """Chart-ready, co-indexed labels, values and colors.

    Raises:
        ValueError: When the three sequences differ in length.
    """

    labels: tuple[str, ...] = ()
    values: tuple[Decimal | int, ...] = ()
    colors: tuple[ChartColor, ...] = ()

    def __post_init__(self) -> None:
        if not len(self.labels) == len(self.values) == len(self.colors):
            raise ValueError(
                "labels, values and colors must have equal length "
                f"(got {len(self.labels)}, {len(self.values)}, {len(self.colors)})."
            )

    def __len__(self) -> int:
        return len(self.labels)


@dataclass(frozen=True, slots=True)
class ExperienceSummary:
    """Per-project experience dataset plus the scalars shown in text.

    Attributes:
        dataset: Project names and kB values, sorted ascending by amount.
        total_experience: Sum of raw (pre-conversion) amounts.
        project_count: Number of `xp` records.
    """

    dataset: AggregatedDataset
    total_experience: int
    project_count: int


@dataclass(frozen=True, slots=True)
class AuditSummary:
    """Audit activity dataset plus raw totals and the provider audit ratio.

    Attributes:
        dataset: Two entries, audits done and audits received (counts).
        given_total: Sum of `up` amounts.
        received_total: Sum of `down` amounts.
        given_count: Number of `up` records.
        received_count: Number of `down` records.
        audit_ratio: Provider ratio rounded to two decimal places.
    """

    dataset: AggregatedDataset
    given_total: int
    received_total: int
    given_count: int
    received_count: int
    audit_ratio: Decimal


@dataclass(frozen=True, slots=True)
class ProfileSummary:
    """Display-ready profile fields for one render pass."""

    full_name: str
    age: int
    project_count: int
    total_experience_text: str
    audit_given_text: str
    audit_received_text: str
    audit_ratio_text: str
