from datetime import datetime

import pytest

from schoolroute_safety.reports import (
    filter_reports,
    load_reports_csv,
    report_statistics,
)
from schoolroute_safety.safety import ReportType, Severity

from conftest import make_report

CSV = """id,user_id,title,description,latitude,longitude,danger_type,danger_level,status,image_url,processed_image_urls,created_at
1,u1,Blind corner,,35.6803,139.765,traffic,4,approved,,,2024-05-01T08:00:00Z
2,u2,Dark alley,No street lights,35.6810,139.765,crime,5,pending,https://img/2.jpg,https://img/2a.jpg|https://img/2b.jpg,2024-05-06T18:30:00Z
3,u1,Loose wall,,35.6820,139.762,disaster,2,resolved,,,2024-03-01T09:00:00Z
"""


@pytest.fixture
def csv_path(tmp_path):
    path = tmp_path / "reports.csv"
    path.write_text(CSV, encoding="utf-8")
    return path


class TestDangerReport:

    @pytest.mark.parametrize("level, severity", [
        (1, Severity.LOW),
        (2, Severity.LOW),
        (3, Severity.MEDIUM),
        (4, Severity.HIGH),
        (5, Severity.HIGH),
    ])
    def test_severity_from_level(self, level, severity):
        assert make_report("r", 0, 0, level=level).severity is severity

    def test_to_segment_report(self):
        report = make_report("r", 0, 0, "crime", level=5).to_segment_report()
        assert report.type is ReportType.CRIME
        assert report.severity is Severity.HIGH

    def test_disaster_is_scored_as_unknown_type(self):
        report = make_report("r", 0, 0, "disaster").to_segment_report()
        assert report.type is ReportType.UNKNOWN

    def test_review_workflow(self):
        report = make_report("r", 0, 0)
        assert report.status == "pending"

        approved_at = datetime(2024, 5, 2, 10, 0)
        report.approve(approved_at)
        assert report.status == "approved"
        assert report.updated_at == approved_at

        report.resolve()
        assert report.status == "resolved"
        assert report.updated_at is not None

    def test_invalid_transitions(self):
        report = make_report("r", 0, 0)
        with pytest.raises(ValueError):
            report.resolve()

        report.approve()
        with pytest.raises(ValueError):
            report.approve()


class TestLoadReportsCsv:

    def test_load(self, csv_path):
        reports = load_reports_csv(str(csv_path))
        assert [r.id for r in reports] == ["1", "2", "3"]

        first, second, _ = reports
        assert first.latitude == 35.6803
        assert first.danger_level == 4
        assert first.description is None
        assert first.processed_image_urls == []
        assert first.created_at == datetime(2024, 5, 1, 8, 0)

        assert second.description == "No street lights"
        assert second.image_url == "https://img/2.jpg"
        assert second.processed_image_urls == ["https://img/2a.jpg", "https://img/2b.jpg"]

    def test_minimal_columns(self, tmp_path):
        path = tmp_path / "minimal.csv"
        path.write_text("id,latitude,longitude,danger_type\n9,35.0,139.0,other\n",
                        encoding="utf-8")
        (report,) = load_reports_csv(str(path))
        assert report.danger_level == 1
        assert report.status == "pending"
        assert report.created_at is None

    def test_missing_columns(self, tmp_path):
        path = tmp_path / "bad.csv"
        path.write_text("id,latitude\n1,35.0\n", encoding="utf-8")
        with pytest.raises(ValueError, match="danger_type"):
            load_reports_csv(str(path))

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            load_reports_csv(str(tmp_path / "none.csv"))


class TestFilterReports:

    def test_all_is_no_filter(self, csv_path):
        reports = load_reports_csv(str(csv_path))
        assert filter_reports(reports) == reports

    def test_by_type_level_and_status(self, csv_path):
        reports = load_reports_csv(str(csv_path))
        assert [r.id for r in filter_reports(reports, danger_type="crime")] == ["2"]
        assert [r.id for r in filter_reports(reports, danger_level="4")] == ["1"]
        assert [r.id for r in filter_reports(reports, danger_level=2)] == ["3"]
        assert [r.id for r in filter_reports(reports, status="resolved")] == ["3"]

    def test_by_date_range(self, csv_path):
        reports = load_reports_csv(str(csv_path))
        now = datetime(2024, 5, 7, 12, 0)
        assert [r.id for r in filter_reports(reports, date_range="today", now=now)] == ["2"]
        assert [r.id for r in filter_reports(reports, date_range="week", now=now)] == ["1", "2"]
        assert [r.id for r in filter_reports(reports, date_range="month", now=now)] == ["1", "2"]

    def test_date_range_skips_undated(self):
        report = make_report("r", 0, 0)
        assert filter_reports([report], date_range="week") == []

    def test_unknown_date_range(self):
        with pytest.raises(ValueError):
            filter_reports([], date_range="year")


def test_report_statistics(csv_path):
    stats = report_statistics(load_reports_csv(str(csv_path)))
    assert stats["total"] == 3
    assert stats["status"] == {"pending": 1, "approved": 1, "resolved": 1}
    assert stats["danger_type"] == {"traffic": 1, "crime": 1, "disaster": 1, "other": 0}
    assert stats["danger_level"] == {1: 0, 2: 1, 3: 0, 4: 1, 5: 1}


def test_report_statistics_empty():
    stats = report_statistics([])
    assert stats["total"] == 0
    assert stats["danger_level"] == {1: 0, 2: 0, 3: 0, 4: 0, 5: 0}
