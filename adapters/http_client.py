import logging
import time
from typing import Optional

import requests
from requests import Session
from requests.exceptions import ConnectionError, RequestException, Timeout

from domain.errors import FetchError
from infrastructure.telemetry import get_tracer

# Get logger for this module
logger = logging.getLogger(__name__)


class HTTPClientAdapter:
    """Adapter for fetching remote markup with telemetry and error handling."""

    def __init__(
        self,
        timeout: int = 30,
        max_retries: int = 3,
        base_wait_time: int = 2,
        user_agent: str = "sitescraper/1.0",
        verify_ssl: bool = True,
        session: Optional[Session] = None,
    ) -> None:
        self.timeout = timeout
        self.max_retries = max_retries
        self.base_wait_time = base_wait_time
        self.user_agent = user_agent
        self.verify_ssl = verify_ssl
        self.session = session if session is not None else requests.Session()
        self.headers = {"User-Agent": user_agent}

    def fetch(self, url: str) -> bytes:
        """
        Perform HTTP GET request and return the raw response body.

        Returns:
            The response body as bytes

        Raises:
            FetchError: If the request keeps failing after all retries or the
                server answers with an error status
        """
        with get_tracer().start_as_current_span("http.get") as span:
            span.set_attribute("url", url)

            for attempt in range(self.max_retries + 1):
                try:
                    response = self.session.get(
                        url,
                        timeout=self.timeout,
                        headers=self.headers,
                        verify=self.verify_ssl,
                    )
                except (RequestException, ConnectionError, Timeout) as e:
                    if attempt < self.max_retries:
                        wait_time = (
                            0
                            if self.base_wait_time == 0
                            else self.base_wait_time**attempt
                        )
                        logger.warning(
                            "GET %s failed (attempt %d/%d): %s",
                            url,
                            attempt + 1,
                            self.max_retries + 1,
                            e,
                        )
                        time.sleep(wait_time)
                        continue
                    span.set_attribute("error", str(e))
                    raise FetchError(url, f"request failed: {e}") from e

                status_code = response.status_code
                content = response.content
                span.set_attributes(
                    {"status_code": status_code, "content_length": len(content)}
                )
                if status_code >= 400:
                    span.set_attribute("error", f"HTTP {status_code}")
                    raise FetchError(url, "server returned an error", status_code)

                logger.debug("Fetched %d bytes from %s", len(content), url)
                return content

            span.set_attribute("error", "no attempts made")
            raise FetchError(url, "no request attempted (max_retries < 0)")
