"""
MedDent - Campaign attribution (visitor side)

Flow:
  1. Page load: ?source=<code> is checked against the API
     (must exist, be active and not expired)
  2. Valid code -> stored locally {code, timestamp} + click counted
     + source stripped from the visible URL
  3. Lead submission -> stored code (or "Direct Visit") is copied into
     the consultation form, then the stored code is cleared

Storage is any mutable string mapping (browser storage equivalent) and
time comes from an injectable clock, so the 30-day window can be tested
without waiting.

Capture never raises: every outcome is an AttributionResult and the page
always proceeds.
"""

import json
import logging
import time
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from enum import Enum
from typing import Any, Callable, Dict, MutableMapping, Optional, Tuple, Union
from urllib.parse import parse_qsl, urlencode, urlsplit, urlunsplit

from services.site_client import SiteApiClient, SiteApiError

logger = logging.getLogger("attribution")

SOURCE_STORAGE_KEY = "campaign_source"
PAGE_LOAD_TIME_KEY = "page_load_time"
SOURCE_EXPIRY = timedelta(days=30)
DIRECT_VISIT = "Direct Visit"


def epoch_ms() -> int:
    return int(time.time() * 1000)


# ==================== RESULT ====================

class RejectReason(str, Enum):
    UNKNOWN_OR_INACTIVE = "unknown_or_inactive"
    EXPIRED = "expired"
    LOOKUP_FAILED = "lookup_failed"
    STORAGE_FAILED = "storage_failed"


@dataclass(frozen=True)
class Captured:
    code: str


@dataclass(frozen=True)
class Rejected:
    reason: RejectReason


@dataclass(frozen=True)
class Skipped:
    """No source parameter on this page load"""


AttributionResult = Union[Captured, Rejected, Skipped]


# ==================== STORAGE ====================

class SessionAttributionStore:
    """
    The stored campaign code, with lazy expiry.

    A record older than `expiry` is treated as absent and removed on the
    read that notices it. Nothing purges it in the background.
    """

    def __init__(
        self,
        storage: Optional[MutableMapping[str, str]] = None,
        clock: Callable[[], int] = epoch_ms,
        expiry: timedelta = SOURCE_EXPIRY,
        key: str = SOURCE_STORAGE_KEY,
    ):
        self.storage = storage if storage is not None else {}
        self.clock = clock
        self.expiry_ms = int(expiry.total_seconds() * 1000)
        self.key = key

    def set(self, code: str) -> Dict[str, Any]:
        record = {"code": code, "timestamp": self.clock()}
        self.storage[self.key] = json.dumps(record)
        return record

    def get(self) -> Optional[str]:
        raw = self.storage.get(self.key)
        if not raw:
            return None

        try:
            record = json.loads(raw)
            code = record["code"]
            stamp = int(record["timestamp"])
        except (ValueError, TypeError, KeyError):
            logger.warning("[ATTRIBUTION] Unreadable stored source, clearing")
            self.clear()
            return None

        if self.clock() - stamp > self.expiry_ms:
            self.clear()
            return None
        return code

    def clear(self):
        self.storage.pop(self.key, None)


class PageTimer:
    """Per-tab page-load timestamp used for time_spent_seconds"""

    def __init__(
        self,
        storage: Optional[MutableMapping[str, str]] = None,
        clock: Callable[[], int] = epoch_ms,
        key: str = PAGE_LOAD_TIME_KEY,
    ):
        self.storage = storage if storage is not None else {}
        self.clock = clock
        self.key = key

    def start(self):
        if not self.storage.get(self.key):
            self.storage[self.key] = str(self.clock())

    def reset(self):
        self.storage[self.key] = str(self.clock())

    def elapsed_seconds(self) -> int:
        loaded = self.storage.get(self.key)
        if not loaded:
            return 0
        try:
            return max(0, round((self.clock() - int(loaded)) / 1000))
        except ValueError:
            return 0


# ==================== URL ====================

def get_source_param(url: str) -> Optional[str]:
    for key, value in parse_qsl(urlsplit(url).query, keep_blank_values=True):
        if key == "source":
            return value or None
    return None


def strip_source_param(url: str) -> str:
    parts = urlsplit(url)
    query = [(k, v) for k, v in parse_qsl(parts.query, keep_blank_values=True) if k != "source"]
    return urlunsplit((parts.scheme, parts.netloc, parts.path, urlencode(query), parts.fragment))


# ==================== PIPELINE ====================

class AttributionPipeline:
    """Visitor-side attribution: capture on page load, attach on lead submit"""

    def __init__(
        self,
        api: SiteApiClient,
        store: Optional[SessionAttributionStore] = None,
        timer: Optional[PageTimer] = None,
        clock: Callable[[], int] = epoch_ms,
    ):
        self.api = api
        self.clock = clock
        self.store = store or SessionAttributionStore(clock=clock)
        self.timer = timer or PageTimer(clock=clock)

    def _is_expired(self, campaign: Dict[str, Any]) -> bool:
        expiry = campaign.get("expiry_date")
        if not expiry:
            return False
        parsed = datetime.fromisoformat(str(expiry).replace("Z", "+00:00"))
        if parsed.tzinfo is None:
            parsed = parsed.replace(tzinfo=timezone.utc)
        return parsed.timestamp() * 1000 < self.clock()

    async def capture_attribution(self, source: Optional[str]) -> AttributionResult:
        """
        Run once per page load with the ?source= value (or None).
        Absent source leaves any earlier attribution untouched.
        """
        try:
            self.timer.start()
        except Exception as e:
            logger.warning(f"[ATTRIBUTION] Page timer unavailable: {e}")

        if not source:
            return Skipped()

        try:
            campaign = await self.api.get_campaign(source)
        except SiteApiError as e:
            logger.warning(f"[ATTRIBUTION] Lookup failed for '{source}': {e}")
            return Rejected(RejectReason.LOOKUP_FAILED)

        if not campaign or not campaign.get("is_active"):
            return Rejected(RejectReason.UNKNOWN_OR_INACTIVE)
        # only the exact code is ever stored
        if campaign.get("unique_code") != source:
            logger.warning(f"[ATTRIBUTION] Lookup for '{source}' returned '{campaign.get('unique_code')}'")
            return Rejected(RejectReason.UNKNOWN_OR_INACTIVE)

        try:
            expired = self._is_expired(campaign)
        except (TypeError, ValueError):
            logger.warning(f"[ATTRIBUTION] Unreadable expiry_date for '{source}'")
            return Rejected(RejectReason.LOOKUP_FAILED)
        if expired:
            return Rejected(RejectReason.EXPIRED)

        try:
            self.store.set(source)
        except Exception as e:
            logger.warning(f"[ATTRIBUTION] Could not store '{source}': {e}")
            return Rejected(RejectReason.STORAGE_FAILED)

        try:
            counted = await self.api.increment_campaign_click(source)
            if not counted:
                logger.warning(f"[ATTRIBUTION] Click not counted for '{source}'")
        except SiteApiError as e:
            logger.warning(f"[ATTRIBUTION] Click increment failed for '{source}': {e}")

        return Captured(source)

    async def capture_from_url(self, url: str) -> Tuple[AttributionResult, str]:
        """Capture from a full URL; returns the URL to show (source stripped once captured)"""
        result = await self.capture_attribution(get_source_param(url))
        if isinstance(result, Captured):
            return result, strip_source_param(url)
        return result, url

    def get_stored_source(self) -> Optional[str]:
        return self.store.get()

    def attach_source_to_lead(self, form_data: Dict[str, Any]) -> Dict[str, Any]:
        """Copy of form_data with source and time_spent_seconds filled in"""
        try:
            source = self.get_stored_source()
        except Exception as e:
            logger.warning(f"[ATTRIBUTION] Stored source unavailable: {e}")
            source = None

        payload = dict(form_data)
        payload["source"] = source or DIRECT_VISIT
        payload["time_spent_seconds"] = self.timer.elapsed_seconds()
        return payload

    async def submit_lead(self, form_data: Dict[str, Any]) -> Dict[str, Any]:
        """
        Attach attribution and create the lead.
        Raises SiteApiError on failure so the visitor can resubmit.
        """
        payload = self.attach_source_to_lead(form_data)
        result = await self.api.submit_consultation_form(payload)

        self.store.clear()
        self.timer.reset()
        logger.info(f"[ATTRIBUTION] Lead submitted source={payload['source']}")
        return result
