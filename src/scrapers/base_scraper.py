# src/scrapers/base_scraper.py

"""Abstract base class for product page scrapers."""

import logging
import re
import time
from abc import ABC, abstractmethod
from typing import Any

import cloudscraper  # type: ignore[import-untyped]
from curl_cffi import requests as curl_requests

from src.config.settings import Settings
from src.exceptions import ScrapeError
from src.models.observation import Observation

_PRICE_RE = re.compile(r"\d+(?:\.\d*)?|\.\d+")


class BaseScraper(ABC):
    """Fetches product pages and turns them into observations."""

    # Cloudflare challenge page markers (checked before keyword scan)
    _CF_CHALLENGE_MARKERS: list[str] = [
        "challenges.cloudflare.com",
        "cdn-cgi/challenge-platform",
        "just a moment",
        "cf-turnstile",
        "cf_chl_opt",
    ]

    def __init__(self, source_name: str) -> None:
        self.source_name = source_name
        self.logger = logging.getLogger(f"shopwise.{source_name}")
        self.settings = Settings()
        self.session = curl_requests.Session(
            impersonate=self.settings.IMPERSONATE_BROWSER
        )
        self._current_delay: float = self.settings.REQUEST_DELAY
        self._request_timeout: int = self.settings.REQUEST_TIMEOUT

    def _validate_response(self, resp: curl_requests.Response) -> bool:
        """Reject Cloudflare challenge pages and CAPTCHA walls."""
        text = resp.text
        lower = text.lower()

        for marker in self._CF_CHALLENGE_MARKERS:
            if marker in lower:
                self.logger.warning(
                    "[%s] Cloudflare challenge detected (marker: '%s')",
                    self.source_name,
                    marker,
                )
                return False

        # Real product pages can mention these words in reviews
        has_body_content = "<body" in lower and len(text) > 5000
        if not has_body_content:
            for keyword in self.settings.CAPTCHA_KEYWORDS:
                if keyword in lower:
                    self.logger.warning(
                        "[%s] CAPTCHA keyword '%s' detected",
                        self.source_name,
                        keyword,
                    )
                    return False
        return True

    def _escalate_delay(self) -> None:
        """Double the current delay up to the configured max."""
        max_delay = (
            self.settings.REQUEST_DELAY
            * self.settings.MAX_DELAY_MULTIPLIER
        )
        self._current_delay = min(self._current_delay * 2, max_delay)
        self.logger.warning(
            "[%s] Rate-limited, delay escalated to %.1fs",
            self.source_name,
            self._current_delay,
        )

    def _fetch_get(
        self, url: str, headers: dict[str, str],
    ) -> curl_requests.Response | None:
        """GET with retries and adaptive delay."""
        for attempt in range(self.settings.MAX_RETRIES):
            try:
                resp = self.session.get(
                    url,
                    headers=headers,
                    timeout=self._request_timeout,
                )
                if resp.status_code == 200:
                    if not self._validate_response(resp):
                        self._escalate_delay()
                        time.sleep(self._current_delay)
                        continue
                    self._current_delay = self.settings.REQUEST_DELAY
                    return resp
                self.logger.warning(
                    "[%s] HTTP %d on attempt %d",
                    self.source_name,
                    resp.status_code,
                    attempt + 1,
                )
                if resp.status_code in (429, 403, 503):
                    self._escalate_delay()
                    time.sleep(self._current_delay)
            except Exception as exc:
                self.logger.warning(
                    "[%s] Request error on attempt %d: %s",
                    self.source_name,
                    attempt + 1,
                    exc,
                    exc_info=True,
                )
                time.sleep(self._current_delay * (attempt + 1))
        return None

    def fetch_html(self, url: str) -> str:
        """Fetch a product page, falling back to cloudscraper.

        Waits ``SETTLE_DELAY`` first so the request is not fired the
        instant a page is opened.

        Raises:
            ScrapeError: Every fetch strategy failed.
        """
        headers: dict[str, str] = {
            **self.settings.DEFAULT_HEADERS,
            "Referer": self._get_homepage(),
        }
        time.sleep(self.settings.SETTLE_DELAY)

        resp = self._fetch_get(url, headers)
        if resp is not None:
            return resp.text

        self.logger.info(
            "[%s] curl_cffi exhausted, falling back to cloudscraper",
            self.source_name,
        )
        try:
            _cs: Any = cloudscraper
            scraper: Any = _cs.create_scraper()
            fallback_resp: Any = scraper.get(
                url,
                headers=headers,
                timeout=self._request_timeout,
            )
            if fallback_resp.status_code == 200:
                return str(fallback_resp.text)
        except Exception as e:
            self.logger.error(
                "[%s] cloudscraper fallback also failed: %s",
                self.source_name,
                e,
                exc_info=True,
            )

        msg = f"Could not fetch {url}"
        raise ScrapeError(msg)

    @staticmethod
    def extract_price(text: str | None) -> float | None:
        """Read a price from text like '$1,299.99'.

        Everything but digits and dots is discarded before parsing;
        returns ``None`` when no number remains.
        """
        if not text:
            return None
        cleaned = re.sub(r"[^0-9.]", "", text)
        match = _PRICE_RE.match(cleaned)
        return float(match.group()) if match else None

    @staticmethod
    def now_ms() -> int:
        """Current time as integer epoch milliseconds."""
        return int(time.time() * 1000)

    @abstractmethod
    def _get_homepage(self) -> str:
        """Return the homepage URL for the Referer header."""
        ...

    @abstractmethod
    def parse(
        self, html: str, url: str, timestamp: int | None = None,
    ) -> tuple[str, Observation]:
        """Extract the product id and an observation from a page."""
        ...

    def scrape(self, url: str) -> tuple[str, Observation]:
        """Fetch *url* and parse it."""
        html = self.fetch_html(url)
        return self.parse(html, url)
