import pytest
from domain.models import ExtractionMode, MatchRecord, ScrapeReport


class TestScrapeReport:
    """Test the ScrapeReport domain model."""

    @pytest.mark.unit
    def test_report_to_dict(self) -> None:
        """Test report to dict."""
        report = ScrapeReport(
            source="page.html",
            pattern={"tag": "div", "attr_name": "id", "attr_value": "hello"},
            mode=ExtractionMode.TEXT,
            matches=[MatchRecord(0, "div", {"id": "hello"}, "Hello World!")],
        )

        data = report.to_dict()

        assert data["source"] == "page.html"
        assert data["mode"] == "text"
        assert data["count"] == 1
        assert data["matches"] == [
            {
                "index": 0,
                "tag_name": "div",
                "attributes": {"id": "hello"},
                "content": "Hello World!",
            }
        ]

    @pytest.mark.unit
    def test_report_from_dict(self) -> None:
        """Test report from dict."""
        data = {
            "source": "https://example.com",
            "pattern": {"tag": "p", "attr_name": None, "attr_value": None},
            "mode": "markup",
            "matches": [{"index": 2, "tag_name": "p", "content": "<b>x</b>"}],
        }

        report = ScrapeReport.from_dict(data)

        assert report.mode is ExtractionMode.MARKUP
        assert report.matches[0].index == 2
        assert report.matches[0].attributes == {}
        assert report.content == "<b>x</b>"

    @pytest.mark.unit
    def test_empty_report_content(self) -> None:
        """Test empty report content."""
        report = ScrapeReport("x", {}, ExtractionMode.OUTER)
        assert report.content == ""
        assert report.to_dict()["count"] == 0

    @pytest.mark.unit
    def test_match_record_repr(self) -> None:
        """Test match record repr."""
        assert repr(MatchRecord(1, "li")) == "MatchRecord(index=1, tag_name=li)"
