import json
import logging
from typing import Any, Optional, Protocol

import requests

from ticketdesk.exceptions import ConfigError, FetchError, MalformedResponseError

logger = logging.getLogger(__name__)


class SheetsTransport(Protocol):
    def fetch_rows(self, sheet: str) -> dict[str, Any]:
        ...

    def post_form(self, fields: dict[str, str]) -> dict[str, Any]:
        ...


class WebAppTransport:
    """
    Talks to the spreadsheet web-app endpoint.
    Reads are `GET ?sheet=<name>`, writes are url-encoded form POSTs; both answer JSON.
    """

    def __init__(
        self,
        endpoint_url: str,
        timeout_seconds: Optional[float] = None,
        session: Optional[requests.Session] = None,
    ):
        if not endpoint_url:
            raise ConfigError("Backend endpoint_url is not configured.")
        self.endpoint_url = endpoint_url
        self.timeout_seconds = timeout_seconds
        self.session = session or requests.Session()

    def fetch_rows(self, sheet: str) -> dict[str, Any]:
        try:
            resp = self.session.get(self.endpoint_url, params={"sheet": sheet}, timeout=self.timeout_seconds)
        except requests.RequestException as exc:
            raise FetchError(f"Failed to fetch sheet {sheet}: {exc}") from exc
        return self._decode(resp, f"sheet {sheet}")

    def post_form(self, fields: dict[str, str]) -> dict[str, Any]:
        # requests encodes a dict body as application/x-www-form-urlencoded.
        try:
            resp = self.session.post(self.endpoint_url, data=fields, timeout=self.timeout_seconds)
        except requests.RequestException as exc:
            raise FetchError(f"Failed to post to backend: {exc}") from exc
        return self._decode(resp, "insert")

    @staticmethod
    def _decode(resp: requests.Response, what: str) -> dict[str, Any]:
        if resp.status_code != 200:
            raise FetchError(f"Backend returned {resp.status_code} for {what}")
        try:
            payload = resp.json()
        except (ValueError, json.JSONDecodeError) as exc:
            raise MalformedResponseError(f"Backend returned non-JSON body for {what}") from exc
        if not isinstance(payload, dict):
            raise MalformedResponseError(f"Backend returned {type(payload).__name__} instead of an object for {what}")
        logger.debug(f"Backend response for {what}: success={payload.get('success')}")
        return payload
