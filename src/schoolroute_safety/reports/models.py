"""User-submitted hazard reports and their admin review workflow."""

from dataclasses import dataclass, field
from datetime import datetime, timedelta, timezone
from typing import Dict, Iterable, List, Optional

import pandas as pd

from ..safety.models import ReportType, SegmentReport, Severity


DANGER_TYPES = ("traffic", "crime", "disaster", "other")
REPORT_STATUSES = ("pending", "approved", "resolved")
DANGER_LEVELS = (1, 2, 3, 4, 5)

DATE_RANGES = {
    "today": timedelta(days=1),
    "week": timedelta(days=7),
    "month": timedelta(days=30),
}

# Allowed admin review transitions
STATUS_TRANSITIONS = {
    "pending": "approved",
    "approved": "resolved",
}


@dataclass
class DangerReport:
    """A hazard reported by a user at a geographic point."""

    id: str
    user_id: str
    title: str
    latitude: float
    longitude: float
    danger_type: str  # traffic, crime, disaster, other
    danger_level: int  # 1 (minor) .. 5 (severe)
    status: str = "pending"
    description: Optional[str] = None
    image_url: Optional[str] = None
    processed_image_urls: List[str] = field(default_factory=list)
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    def __repr__(self) -> str:
        return (
            f"DangerReport(id={self.id}, type={self.danger_type}, "
            f"level={self.danger_level}, status={self.status})"
        )

    @property
    def severity(self) -> Severity:
        """Map the 1-5 danger level onto the scorer's severity scale."""
        if self.danger_level >= 4:
            return Severity.HIGH
        elif self.danger_level == 3:
            return Severity.MEDIUM
        return Severity.LOW

    def to_segment_report(self) -> SegmentReport:
        return SegmentReport(
            type=ReportType.parse(self.danger_type),
            severity=self.severity,
        )

    def approve(self, when: Optional[datetime] = None):
        """Approve a pending report."""
        self._transition("approved", when)

    def resolve(self, when: Optional[datetime] = None):
        """Mark an approved report as resolved."""
        self._transition("resolved", when)

    def _transition(self, target: str, when: Optional[datetime]):
        if STATUS_TRANSITIONS.get(self.status) != target:
            raise ValueError(
                f"Cannot change report {self.id} from '{self.status}' to '{target}'"
            )
        self.status = target
        self.updated_at = when or _utcnow()


def _optional(value):
    """Convert pandas missing values to None."""
    if value is None:
        return None
    if isinstance(value, float) and pd.isna(value):
        return None
    return value


def _parse_timestamp(value) -> Optional[datetime]:
    """Parse a timestamp into a naive UTC datetime."""
    value = _optional(value)
    if value is None or value == "":
        return None
    ts = pd.Timestamp(value)
    if ts.tzinfo is not None:
        ts = ts.tz_convert(None)
    return ts.to_pydatetime()


def _utcnow() -> datetime:
    return datetime.now(timezone.utc).replace(tzinfo=None)


def load_reports_csv(csv_file: str) -> List[DangerReport]:
    """
    Load hazard reports from a CSV export of the reports table.

    Required columns: id, latitude, longitude, danger_type. Missing
    optional columns take their defaults (level 1, status pending).

    Args:
        csv_file: Path to CSV file

    Returns:
        List of DangerReport

    Raises:
        FileNotFoundError: If the file does not exist
        ValueError: If required columns are missing
    """
    print(f"Loading hazard reports from {csv_file}...")
    df = pd.read_csv(csv_file, dtype={"id": str, "user_id": str})

    missing = {"id", "latitude", "longitude", "danger_type"} - set(df.columns)
    if missing:
        raise ValueError(
            f"Reports CSV is missing columns: {', '.join(sorted(missing))}"
        )

    reports = []
    for row in df.to_dict(orient="records"):
        processed = _optional(row.get("processed_image_urls"))
        reports.append(DangerReport(
            id=str(row["id"]),
            user_id=str(_optional(row.get("user_id")) or ""),
            title=str(_optional(row.get("title")) or ""),
            latitude=float(row["latitude"]),
            longitude=float(row["longitude"]),
            danger_type=str(row["danger_type"]),
            danger_level=int(_optional(row.get("danger_level")) or 1),
            status=str(_optional(row.get("status")) or "pending"),
            description=_optional(row.get("description")),
            image_url=_optional(row.get("image_url")),
            processed_image_urls=processed.split("|") if processed else [],
            created_at=_parse_timestamp(row.get("created_at")),
            updated_at=_parse_timestamp(row.get("updated_at")),
        ))

    print(f"✓ Loaded {len(reports)} reports")
    return reports


def filter_reports(
    reports: Iterable[DangerReport],
    danger_type: str = "all",
    danger_level: str = "all",
    date_range: str = "all",
    status: str = "all",
    now: Optional[datetime] = None
) -> List[DangerReport]:
    """
    Filter reports the way the map sidebar does.

    "all" disables a filter. date_range is one of all, today, week, month;
    reports without a creation date are excluded by any date range.
    Dates are compared as naive UTC.
    """
    if date_range != "all" and date_range not in DATE_RANGES:
        raise ValueError(
            f"Unknown date range: {date_range}. "
            f"Valid options: all, {', '.join(DATE_RANGES)}"
        )

    cutoff = None
    if date_range != "all":
        cutoff = (now or _utcnow()) - DATE_RANGES[date_range]

    result = []
    for report in reports:
        if danger_type != "all" and report.danger_type != danger_type:
            continue
        if danger_level != "all" and str(report.danger_level) != str(danger_level):
            continue
        if status != "all" and report.status != status:
            continue
        if cutoff is not None and (
            report.created_at is None or report.created_at < cutoff
        ):
            continue
        result.append(report)

    return result


def report_statistics(reports: Iterable[DangerReport]) -> Dict[str, Dict]:
    """
    Count reports by status, danger type and danger level.

    Every known category is present in the result, with 0 when unused.

    Returns:
        Dict with keys total, status, danger_type, danger_level
    """
    df = pd.DataFrame(
        [(r.status, r.danger_type, r.danger_level) for r in reports],
        columns=["status", "danger_type", "danger_level"],
    )

    def counts(column, categories):
        found = df[column].value_counts().to_dict()
        return {c: int(found.get(c, 0)) for c in categories}

    return {
        "total": int(len(df)),
        "status": counts("status", REPORT_STATUSES),
        "danger_type": counts("danger_type", DANGER_TYPES),
        "danger_level": counts("danger_level", DANGER_LEVELS),
    }
