# src/config/settings.py

"""Central configuration for the temp_snapshots job."""

import os
from pathlib import Path

from curl_cffi.requests import BrowserTypeLiteral
from dotenv import load_dotenv

load_dotenv()


class Settings:
    """Central configuration for the temp_snapshots job."""

    # --- Remote store ---
    SPREADSHEET_ID: str = os.getenv("GOOGLE_SPREADSHEET_ID", "")
    SERVICE_ACCOUNT_EMAIL: str = os.getenv(
        "GOOGLE_SERVICE_ACCOUNT_EMAIL", ""
    )
    PRIVATE_KEY: str = os.getenv("GOOGLE_PRIVATE_KEY", "")
    TOKEN_URI: str = "https://oauth2.googleapis.com/token"
    SHEETS_SCOPES: list[str] = [
        "https://www.googleapis.com/auth/spreadsheets",
    ]

    # --- History ---
    MAX_SNAPSHOTS: int = 200            # Sheets kept in the spreadsheet

    # --- Scraping ---
    CRAWL_URL: str = os.getenv("CRAWL_URL", "")
    REQUEST_TIMEOUT: int = 30           # Seconds before a request times out
    TABLE_SELECTOR: str = os.getenv(
        "TABLE_SELECTOR",
        "body > div.wrapper > div.main-content-div > "
        "section.bg--grey.pdflexi-t--small > div > section > "
        "div:nth-child(3) > div > table",
    )
    LABEL_COLUMN: int = 0               # Cell index of the city name
    MEASUREMENT_COLUMN: int = 3         # Cell index of the temperature
    HEADER_ROW: list[str] = ["City", "Temperature"]

    # --- Browser Impersonation ---
    IMPERSONATE_BROWSER: BrowserTypeLiteral = "chrome131"
    DEFAULT_HEADERS: dict[str, str] = {
        "Accept": (
            "text/html,application/xhtml+xml,"
            "application/xml;q=0.9,*/*;q=0.8"
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
    LOGS_DIR: Path = BASE_DIR / "logs"

    # Environment variable name -> Settings attribute
    REQUIRED_ENV: dict[str, str] = {
        "GOOGLE_SPREADSHEET_ID": "SPREADSHEET_ID",
        "CRAWL_URL": "CRAWL_URL",
        "GOOGLE_SERVICE_ACCOUNT_EMAIL": "SERVICE_ACCOUNT_EMAIL",
        "GOOGLE_PRIVATE_KEY": "PRIVATE_KEY",
    }

    @classmethod
    def missing_required(cls) -> list[str]:
        """Return the names of required environment variables left unset."""
        return [
            env_name
            for env_name, attr in cls.REQUIRED_ENV.items()
            if not getattr(cls, attr)
        ]
