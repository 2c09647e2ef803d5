"""Transaction aggregation for the dashboard charts.

Both summaries are pure: they take the raw transaction list and return every
derived value (dataset, totals, counts) instead of updating shared counters,
so repeated renders can never observe stale aggregates.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable
from decimal import Decimal
from typing import Final

from .colors import generate_color
from .dto import (
    AUDIT_GIVEN,
    AUDIT_RECEIVED,
    XP,
    AggregatedDataset,
    AuditSummary,
    ChartColor,
    ExperienceSummary,
    TransactionRecord,
)
from .units import KILOBYTE, round_ratio, to_display_magnitude

AUDITS_DONE_LABEL: Final[str] = "Audits done"
AUDITS_RECEIVED_LABEL: Final[str] = "Audits received"

ColorFactory = Callable[[], ChartColor]


def sort_by_amount(records: Iterable[TransactionRecord]) -> list[TransactionRecord]:
    """Return records sorted ascending by amount.

    `sorted` is stable, so records with equal amounts keep the provider's
    (chronological) order.
    """

    return sorted(records, key=lambda record: record.amount)


def summarize_experience(
    records: Iterable[TransactionRecord],
    *,
    color_factory: ColorFactory = generate_color,
) -> ExperienceSummary:
    """Summarize experience grants into a per-project dataset.

    Args:
        records: Raw transaction records in provider order.
        color_factory: Callable producing one color per dataset entry.

    Returns:
        ExperienceSummary whose dataset is sorted ascending by raw amount, with
        values converted to kB (two decimal places).
    """

    experience = [record for record in sort_by_amount(records) if record.type == XP]

    labels = tuple(record.object_name or "" for record in experience)
    values = tuple(to_display_magnitude(record.amount, KILOBYTE) for record in experience)
    colors = tuple(color_factory() for _ in experience)

    return ExperienceSummary(
        dataset=AggregatedDataset(labels=labels, values=values, colors=colors),
        total_experience=sum(record.amount for record in experience),
        project_count=len(experience),
    )


def summarize_audits(
    records: Iterable[TransactionRecord],
    *,
    audit_ratio: float | Decimal,
    color_factory: ColorFactory = generate_color,
) -> AuditSummary:
    """Summarize audits given and received.

    Args:
        records: Raw transaction records in provider order.
        audit_ratio: Provider-supplied audit ratio (authoritative, not recomputed).
        color_factory: Callable producing one color per dataset entry.

    Returns:
        AuditSummary with a two-entry count dataset and raw byte totals.
    """

    given_total = received_total = 0
    given_count = received_count = 0
    for record in sort_by_amount(records):
        if record.type == AUDIT_GIVEN:
            given_total += record.amount
            given_count += 1
        elif record.type == AUDIT_RECEIVED:
            received_total += record.amount
            received_count += 1

    dataset = AggregatedDataset(
        labels=(AUDITS_DONE_LABEL, AUDITS_RECEIVED_LABEL),
        values=(given_count, received_count),
        colors=(color_factory(), color_factory()),
    )
    return AuditSummary(
        dataset=dataset,
        given_total=given_total,
        received_total=received_total,
        given_count=given_count,
        received_count=received_count,
        audit_ratio=round_ratio(audit_ratio),
    )
