import json
import os
import re
import tempfile
from pathlib import Path
from typing import List, Optional

import requests
from loguru import logger

from mf_directory.models import SchemeRecord
from mf_directory.parser import nav_json_to_df

BASE_URL = "https://api.mfapi.in/mf"
DEFAULT_CACHE_PATH = Path("schema_codes.txt")
DEFAULT_TIMEOUT = 10

API_HEADERS = {
    "Accept": "application/json",
    "Content-Type": "application/json",
    "Cache-Control": "no-cache",
}


def build_name_pattern(query):
    """
    Words of the query, escaped and joined by '.*', case-insensitive.
    "hdfc growth" -> hdfc.*growth (matches names with both words in that order)
    """
    words = [re.escape(w) for w in query.strip().split()]
    return re.compile(".*".join(words), re.IGNORECASE)


class FundDirectoryClient:
    """
    Holds the mfapi.in scheme list in memory, backed by a local JSON snapshot.

    I/O failures (network, HTTP status, cache file) are logged and swallowed:
    callers check the directory / return value instead of catching errors.
    Only an empty search query raises.
    """

    def __init__(self, base_url: str = BASE_URL, cache_path=DEFAULT_CACHE_PATH,
                 timeout: float = DEFAULT_TIMEOUT, session: Optional[requests.Session] = None):
        self.base_url = base_url.rstrip("/")
        self.cache_path = Path(cache_path)
        self.timeout = timeout
        self.session = session if session is not None else requests.Session()
        self.api_headers = dict(API_HEADERS)
        self._schemes: List[SchemeRecord] = []

    # ---- directory ----
    def refresh_directory(self, force_pull: bool = False) -> None:
        """
        force_pull=True  -> GET /mf and overwrite the cache file, then reload from it
        force_pull=False -> reload from the cache file only
        On any failure the in-memory list keeps its previous value.
        """
        try:
            if force_pull:
                response = self.session.get(self.base_url, headers=self.api_headers, timeout=self.timeout)
                response.raise_for_status()
                latest = response.json()
                logger.info("Fetched latest scheme codes from {}", self.base_url)

                self._write_cache(json.dumps(latest, indent=2))
                logger.info("Scheme codes written to {}", self.cache_path)

            raw = self.cache_path.read_text(encoding="utf-8")
            self._schemes = self._parse_directory(raw)
        except (requests.RequestException, OSError, ValueError) as e:
            logger.error("Error refreshing scheme codes: {}", e)

    def search_by_name(self, query: Optional[str]) -> List[SchemeRecord]:
        if not query:
            raise ValueError("query is required")

        self._ensure_loaded()
        pattern = build_name_pattern(query)
        return [s for s in self._schemes if pattern.search(s.scheme_name)]

    def list_all(self) -> List[SchemeRecord]:
        self._ensure_loaded()
        return self._schemes

    # ---- valuations (never cached) ----
    def get_valuation(self, scheme_code: str, need_historic: bool = False) -> Optional[dict]:
        """
        need_historic=False -> /mf/{code}/latest
        need_historic=True  -> /mf/{code} (full NAV series)
        returns the upstream JSON as-is, or None if the call failed for any reason
        """
        if need_historic:
            url = f"{self.base_url}/{scheme_code}"
        else:
            url = f"{self.base_url}/{scheme_code}/latest"

        try:
            response = self.session.get(url, headers=self.api_headers, timeout=self.timeout)
            response.raise_for_status()
            return response.json()
        except (requests.RequestException, ValueError) as e:
            logger.error("Error getting NAV details for {}: {}", scheme_code, e)
            return None

    def get_nav_history(self, scheme_code: str):
        """Historical NAVs as a DataFrame ['date','nav'], or None."""
        payload = self.get_valuation(scheme_code, need_historic=True)
        if payload is None:
            return None
        try:
            return nav_json_to_df(payload)
        except (KeyError, ValueError, TypeError, AttributeError) as e:
            logger.error("Unexpected NAV payload for {}: {}", scheme_code, e)
            return None

    # ---- helpers ----
    def _ensure_loaded(self):
        if not self._schemes:
            self.refresh_directory()
            logger.info("Scheme code data loaded ({} schemes)", len(self._schemes))

    @staticmethod
    def _parse_directory(raw: str) -> List[SchemeRecord]:
        data = json.loads(raw)
        if not isinstance(data, list):
            raise ValueError(f"expected a JSON array of schemes, got {type(data).__name__}")
        return [SchemeRecord.model_validate(item) for item in data]

    def _write_cache(self, text: str):
        # temp file + rename so concurrent readers never see a partial snapshot
        directory = self.cache_path.parent
        fd, tmp_name = tempfile.mkstemp(dir=directory, prefix=".schemes-", suffix=".tmp")
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                f.write(text)
            os.replace(tmp_name, self.cache_path)
        except OSError:
            if os.path.exists(tmp_name):
                os.remove(tmp_name)
            raise
