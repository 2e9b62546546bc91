# src/config/settings.py

"""Central configuration for the ShopWise price tracker."""

import os
from pathlib import Path

from curl_cffi.requests import BrowserTypeLiteral
from dotenv import load_dotenv

load_dotenv()


class Settings:
    """Central configuration for the ShopWise price tracker."""

    # --- History ---
    HISTORY_LIMIT: int = 30             # Points retained per product
    STORAGE_KEY: str = "products"       # Key holding the whole table

    # --- Scraping ---
    SETTLE_DELAY: float = 1.5           # Seconds before reading a page
    REQUEST_DELAY: float = 2.0          # Base backoff between retries
    REQUEST_TIMEOUT: int = 15           # Seconds before a request times out
    MAX_RETRIES: int = 3                # Retry count on transient failures
    MAX_DELAY_MULTIPLIER: int = 8       # Cap for adaptive backoff
    CAPTCHA_KEYWORDS: list[str] = [
        "captcha",
        "verify you are human",
        "unusual traffic",
        "automated requests",
    ]

    # Tried in order; the first one yielding a number wins
    PRICE_SELECTORS: list[str] = [
        ".a-price-whole",
        "#priceblock_ourprice",
        "#priceblock_dealprice",
        ".a-price .a-offscreen",
    ]
    TITLE_SELECTOR: str = "#productTitle"
    UNKNOWN_TITLE: str = "Unknown Product"

    # --- Browser Impersonation ---
    IMPERSONATE_BROWSER: BrowserTypeLiteral = "chrome131"
    DEFAULT_HEADERS: dict[str, str] = {
        "Accept": (
            "text/html,application/xhtml+xml,"
            "application/xml;q=0.9,image/avif,"
            "image/webp,image/apng,*/*;q=0.8"
        ),
        "Accept-Language": "en-US,en;q=0.9",
        "sec-ch-ua": (
            '"Google Chrome";v="131", '
            '"Chromium";v="131", '
            '"Not_A Brand";v="24"'
        ),
        "sec-ch-ua-mobile": "?0",
        "sec-ch-ua-platform": '"Windows"',
        "sec-fetch-dest": "document",
        "sec-fetch-mode": "navigate",
        "sec-fetch-site": "none",
        "sec-fetch-user": "?1",
        "Upgrade-Insecure-Requests": "1",
    }

    # --- Paths ---
    BASE_DIR: Path = Path(__file__).resolve().parent.parent.parent
    STORE_PATH: Path = Path(
        os.getenv(
            "SHOPWISE_STORE_PATH",
            str(BASE_DIR / "data" / "shopwise_store.json"),
        )
    )
    LOGS_DIR: Path = Path(
        os.getenv("SHOPWISE_LOGS_DIR", str(BASE_DIR / "logs"))
    )
