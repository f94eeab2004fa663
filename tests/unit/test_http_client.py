import pytest
from typing import Dict, Any, Optional
from types import TracebackType
from unittest.mock import MagicMock, patch
from adapters.http_client import HTTPClientAdapter
from domain.errors import FetchError
from requests.exceptions import RequestException


class DummySpan:
    """Simple mock for an OpenTelemetry span."""

    def __init__(self) -> None:
        self.attributes: Dict[str, Any] = {}

    def __enter__(self) -> "DummySpan":
        return self

    def __exit__(
        self,
        exc_type: Optional[BaseException],
        exc: Optional[BaseException],
        tb: Optional[TracebackType],
    ) -> None:
        pass

    def set_attribute(self, key: str, value: Any) -> None:
        self.attributes[key] = value

    def set_attributes(self, attrs: Dict[str, Any]) -> None:
        self.attributes.update(attrs)


class DummyTracer:
    """Tracer mock that returns a DummySpan."""

    def __init__(self) -> None:
        self.last_span: Optional[DummySpan] = None

    def start_as_current_span(self, name: str) -> DummySpan:
        span = DummySpan()
        self.last_span = span
        return span


@pytest.fixture
def dummy_tracer() -> DummyTracer:
    """Provides a DummyTracer instance for tests."""
    return DummyTracer()


def _response(status_code: int = 200, content: bytes = b"<html></html>") -> MagicMock:
    response = MagicMock()
    response.status_code = status_code
    response.content = content
    return response


@pytest.mark.unit
def test_fetch_success(dummy_tracer: DummyTracer) -> None:
    """Test fetch success."""
    mock_session = MagicMock()
    mock_session.get.return_value = _response(content=b"<p>hi</p>")

    with patch("adapters.http_client.get_tracer", return_value=dummy_tracer):
        client = HTTPClientAdapter(session=mock_session, base_wait_time=0)
        body = client.fetch("http://example.com")

    assert body == b"<p>hi</p>"
    mock_session.get.assert_called_once_with(
        "http://example.com",
        timeout=30,
        headers={"User-Agent": "sitescraper/1.0"},
        verify=True,
    )
    span = dummy_tracer.last_span
    assert span is not None
    assert span.attributes["url"] == "http://example.com"
    assert span.attributes["status_code"] == 200
    assert span.attributes["content_length"] == len(b"<p>hi</p>")


@pytest.mark.unit
def test_fetch_retry_on_exception(dummy_tracer: DummyTracer) -> None:
    """Test fetch retry on exception."""
    mock_session = MagicMock()
    mock_session.get.side_effect = [RequestException("temp error"), _response()]

    with patch("adapters.http_client.get_tracer", return_value=dummy_tracer):
        client = HTTPClientAdapter(
            max_retries=1, session=mock_session, base_wait_time=0
        )
        body = client.fetch("http://example.com")

    assert body == b"<html></html>"
    assert mock_session.get.call_count == 2


@pytest.mark.unit
def test_fetch_failure_after_retries(dummy_tracer: DummyTracer) -> None:
    """Test fetch failure after retries."""
    mock_session = MagicMock()
    mock_session.get.side_effect = RequestException("persistent error")

    with patch("adapters.http_client.get_tracer", return_value=dummy_tracer):
        client = HTTPClientAdapter(
            max_retries=2, session=mock_session, base_wait_time=0
        )
        with pytest.raises(FetchError) as exc_info:
            client.fetch("http://example.com")

    assert mock_session.get.call_count == 3
    assert exc_info.value.url == "http://example.com"
    assert isinstance(exc_info.value.__cause__, RequestException)
    span = dummy_tracer.last_span
    assert span is not None
    assert span.attributes["error"] == "persistent error"


@pytest.mark.unit
def test_fetch_http_error_status(dummy_tracer: DummyTracer) -> None:
    """Test fetch http error status."""
    mock_session = MagicMock()
    mock_session.get.return_value = _response(status_code=404, content=b"missing")

    with patch("adapters.http_client.get_tracer", return_value=dummy_tracer):
        client = HTTPClientAdapter(session=mock_session, base_wait_time=0)
        with pytest.raises(FetchError) as exc_info:
            client.fetch("http://example.com/missing")

    assert exc_info.value.status_code == 404
    assert "status=404" in str(exc_info.value)
    # Error statuses are not retried
    mock_session.get.assert_called_once()


@pytest.mark.unit
def test_fetch_without_attempts(dummy_tracer: DummyTracer) -> None:
    """A negative ``max_retries`` skips the loop entirely."""
    mock_session = MagicMock()

    with patch("adapters.http_client.get_tracer", return_value=dummy_tracer):
        client = HTTPClientAdapter(
            session=mock_session, max_retries=-1, base_wait_time=0
        )
        with pytest.raises(FetchError):
            client.fetch("http://example.com")

    mock_session.get.assert_not_called()
    span = dummy_tracer.last_span
    assert span is not None
    assert "status_code" not in span.attributes
