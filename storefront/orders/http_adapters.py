"""HTTP customer resolver for the external user service.

``HttpCustomerClient`` implements the ``CustomerResolver`` port with
``httpx``:

- ``X-Request-ID`` from the gateway ContextVar is forwarded on every call.
- Transport errors and 5xx answers are retried with exponential backoff.
- Each client owns a ``CustomerCircuit``; once it trips, lookups fail fast
  with ``UpstreamUnavailable`` until the reset timeout lets one trial through.
- Credential fields never leave this module.

Every upstream failure surfaces as ``UpstreamUnavailable`` (503 at the API);
a 404 is a normal "no such customer" answer.
"""

import logging
import threading
import time
from typing import Any, Optional

import httpx

from storefront import settings
from storefront.errors import UpstreamUnavailable
from storefront.gateway.middleware import REQUEST_ID_CTX

from .domain import CustomerResolver, redact

logger = logging.getLogger("storefront.orders.http")


class CustomerCircuit:
    """Failure counter guarding calls to the user service.

    The circuit is OPEN for ``reset_timeout`` seconds after
    ``fail_threshold`` consecutive failed lookups, then HALF_OPEN: the next
    lookup is let through, and its failure reopens the circuit at once.
    """

    def __init__(self, fail_threshold: int, reset_timeout: float):
        self.fail_threshold = max(1, fail_threshold)
        self.reset_timeout = reset_timeout
        self._lock = threading.Lock()
        self._failures = 0
        self._open_until: float | None = None

    @property
    def state(self) -> str:
        with self._lock:
            return self._state_locked()

    def _state_locked(self) -> str:
        if self._open_until is None:
            return "CLOSED"
        if time.monotonic() < self._open_until:
            return "OPEN"
        return "HALF_OPEN"

    def check(self) -> str:
        """Return the state a lookup runs under, or fail fast when OPEN."""
        with self._lock:
            state = self._state_locked()
        if state == "OPEN":
            raise UpstreamUnavailable("customers circuit open")
        return state

    def record_success(self) -> None:
        with self._lock:
            self._failures = 0
            self._open_until = None

    def record_failure(self) -> None:
        with self._lock:
            self._failures += 1
            trial_failed = self._open_until is not None
            if trial_failed or self._failures >= self.fail_threshold:
                self._open_until = time.monotonic() + self.reset_timeout
                logger.warning("customers circuit opened", extra={"failures": self._failures})


def _request_headers(extra: Optional[dict] = None) -> dict:
    headers: dict[str, str] = {}
    rid = REQUEST_ID_CTX.get()
    if rid and rid != "-":
        headers["X-Request-ID"] = rid
    if extra:
        headers.update(extra)
    return headers


def _should_retry(resp: Optional[httpx.Response], exc: Optional[Exception]) -> bool:
    """Retry only on transport errors or HTTP 5xx."""
    if exc is not None:
        return True
    return resp is not None and 500 <= resp.status_code < 600


class HttpCustomerClient(CustomerResolver):
    """User-service client with retry and a per-client circuit."""

    def __init__(self, base_url: str | None = None, timeout: float | None = None):
        self.base_url = base_url or settings.CUSTOMERS_BASE_URL
        self.timeout = timeout or settings.HTTP_TIMEOUT_SECS
        self.circuit = CustomerCircuit(
            settings.HTTP_CIRCUIT_FAIL_THRESHOLD,
            settings.HTTP_CIRCUIT_RESET_TIMEOUT,
        )

    def resolve(self, customer_id: Any) -> dict | None:
        """Fetch a customer record from the user service.

        Returns:
            The redacted record (with ``id`` filled in from ``customer_id``
            when the service omits it) on 200, None on 404.

        Raises:
            UpstreamUnavailable: When the circuit is open, or on transport
                errors, 5xx after retries, or any other non-2xx answer.
        """
        state = self.circuit.check()
        headers = _request_headers({"X-Circuit-State": state, "X-Retry-Count": "0"})
        url = f"{self.base_url}/users/{customer_id}"
        tries = 0

        with httpx.Client(timeout=self.timeout) as client:
            while True:
                resp = None
                exc = None
                try:
                    resp = client.get(url, headers=headers)
                except httpx.RequestError as e:
                    exc = e

                if resp is not None and resp.status_code == 200:
                    self.circuit.record_success()
                    record = redact(resp.json())
                    record.setdefault("id", customer_id)
                    return record
                if resp is not None and resp.status_code == 404:
                    self.circuit.record_success()
                    return None

                tries += 1
                headers["X-Retry-Count"] = str(tries)
                if tries >= settings.HTTP_RETRY_MAX or not _should_retry(resp, exc):
                    self.circuit.record_failure()
                    reason = str(exc) if exc is not None else f"HTTP {resp.status_code}"
                    logger.warning("customer lookup failed", extra={"customer_id": str(customer_id), "error": reason})
                    raise UpstreamUnavailable(f"customer lookup failed: {reason}") from exc

                sleep_s = settings.HTTP_RETRY_BACKOFF_BASE * (2 ** (tries - 1))
                time.sleep(min(sleep_s, settings.HTTP_RETRY_MAX_SLEEP))
