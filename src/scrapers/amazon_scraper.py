# src/scrapers/amazon_scraper.py

"""Product page scraper for Amazon."""

import re
from urllib.parse import urlparse, urlunparse

from bs4 import BeautifulSoup

from src.exceptions import InvalidObservation
from src.models.observation import Observation
from src.scrapers.base_scraper import BaseScraper

# ASINs are 10 upper-case alphanumerics following /dp/
_ASIN_RE = re.compile(r"/dp/([A-Z0-9]{10})")


class AmazonScraper(BaseScraper):
    """Reads ASIN, title and price from an Amazon product page."""

    def __init__(self) -> None:
        super().__init__("amazon")

    def _get_homepage(self) -> str:
        return "https://www.amazon.com/"

    @staticmethod
    def is_product_page(url: str) -> bool:
        """Only ``/dp/`` pages carry a single product."""
        return "/dp/" in url

    @staticmethod
    def canonical_url(url: str) -> str:
        """Drop the query string and fragment."""
        parsed = urlparse(url)
        return urlunparse(
            (parsed.scheme, parsed.netloc, parsed.path, parsed.params, "", "")
        )

    @staticmethod
    def extract_product_id(url: str, soup: BeautifulSoup) -> str | None:
        """ASIN from the URL, else from the hidden ASIN form input."""
        match = _ASIN_RE.search(url)
        if match:
            return match.group(1)
        input_el = soup.select_one('input[name="ASIN"]')
        if input_el is not None:
            value = str(input_el.get("value") or "").strip()
            return value or None
        return None

    def extract_page_price(self, soup: BeautifulSoup) -> float | None:
        """First configured price selector that yields a number."""
        for selector in self.settings.PRICE_SELECTORS:
            el = soup.select_one(selector)
            if el is None:
                continue
            text = el.get_text() or str(el.get("content") or "")
            price = self.extract_price(text)
            if price is not None:
                return price
        return None

    def extract_title(self, soup: BeautifulSoup) -> str:
        title_el = soup.select_one(self.settings.TITLE_SELECTOR)
        if title_el is None:
            return self.settings.UNKNOWN_TITLE
        return title_el.get_text(strip=True) or self.settings.UNKNOWN_TITLE

    def parse(
        self, html: str, url: str, timestamp: int | None = None,
    ) -> tuple[str, Observation]:
        """Build ``(asin, Observation)`` from a product page.

        Raises:
            InvalidObservation: The page has no ASIN or no price.
        """
        soup = BeautifulSoup(html, "lxml")
        product_id = self.extract_product_id(url, soup)
        price = self.extract_page_price(soup)

        if not product_id or price is None:
            self.logger.info(
                "[amazon] Could not detect product or price on %s", url,
            )
            msg = f"No product id or price found on {url}"
            raise InvalidObservation(msg)

        obs = Observation(
            price=price,
            timestamp=timestamp if timestamp is not None else self.now_ms(),
            title=self.extract_title(soup),
            url=self.canonical_url(url),
        )
        self.logger.debug(
            "[amazon] Parsed %s: %.2f '%s'", product_id, price, obs.title,
        )
        return product_id, obs

    def scrape(self, url: str) -> tuple[str, Observation]:
        """Fetch and parse a product page.

        Raises:
            InvalidObservation: *url* is not a product page.
            ScrapeError: The page could not be fetched.
        """
        if not self.is_product_page(url):
            msg = f"Not a product page: {url}"
            raise InvalidObservation(msg)
        return super().scrape(url)
