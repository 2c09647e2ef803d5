"""Chart.js configuration rendering for the dashboard charts."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Final, Literal, TypedDict

from analysis.dto import AggregatedDataset, AuditSummary, ExperienceSummary, ProfileSummary

ChartType = Literal["bar", "doughnut"]

EXPERIENCE_CONTAINER_ID: Final[str] = "chartContainer1"
AUDIT_CONTAINER_ID: Final[str] = "chartContainer2"


class ChartDataset(TypedDict):
    """A Chart.js dataset payload."""

    data: list[float]
    backgroundColor: list[str]
    borderColor: list[str]
    borderWidth: int


class ChartData(TypedDict):
    """Labels plus datasets for one chart."""

    labels: list[str]
    datasets: list[ChartDataset]


class ChartConfig(TypedDict):
    """The object handed to `new Chart(canvas, config)`."""

    type: ChartType
    data: ChartData
    options: dict[str, object]


@dataclass(frozen=True, slots=True)
class RenderedChart:
    """A chart panel: where it goes, what its header says, and its config.

    Attributes:
        container_id: DOM id of the container the chart is appended to.
        chart_id: DOM id of the chart wrapper.
        headers: Header lines shown above the canvas.
        config: Chart.js configuration.
    """

    container_id: str
    chart_id: str
    headers: tuple[str, ...]
    config: ChartConfig


def chart_config(dataset: AggregatedDataset, *, chart_type: ChartType) -> ChartConfig:
    """Build a Chart.js config from a co-indexed dataset with the legend hidden."""

    return {
        "type": chart_type,
        "data": {
            "labels": list(dataset.labels),
            "datasets": [
                {
                    "data": [float(value) for value in dataset.values],
                    "backgroundColor": [color.fill for color in dataset.colors],
                    "borderColor": [color.border for color in dataset.colors],
                    "borderWidth": 1,
                }
            ],
        },
        "options": {"plugins": {"legend": {"display": False}}},
    }


def build_dashboard_charts(
    experience: ExperienceSummary,
    audits: AuditSummary,
    profile: ProfileSummary,
) -> tuple[RenderedChart, ...]:
    """Render the experience bar chart and the audit doughnut chart.

    Args:
        experience: Experience summary for the bar chart.
        audits: Audit summary for the doughnut chart.
        profile: Display strings used in the chart headers.

    Returns:
        The two RenderedChart panels, experience first.
    """

    return (
        RenderedChart(
            container_id=EXPERIENCE_CONTAINER_ID,
            chart_id="projects",
            headers=(f"Total xp: {profile.total_experience_text} kB",),
            config=chart_config(experience.dataset, chart_type="bar"),
        ),
        RenderedChart(
            container_id=AUDIT_CONTAINER_ID,
            chart_id="auditRatio",
            headers=(
                f"Total Audit XP: {profile.audit_given_text} MB",
                f"Audit XP Received: {profile.audit_received_text} MB",
                f"Audit Ratio: {profile.audit_ratio_text}",
            ),
            config=chart_config(audits.dataset, chart_type="doughnut"),
        ),
    )


def chart_payload(charts: tuple[RenderedChart, ...]) -> dict[str, ChartConfig]:
    """Key chart configs by container id for the client-side script."""

    return {chart.container_id: chart.config for chart in charts}
