"""Chrome Web Store availability probe.

A HEAD request for ``/webstore/detail/<id>`` is answered with a 301 to the
canonical ``/webstore/detail/<slug>/<id>`` page when the listing exists, and
with a 404 when it has been taken down. Anything else is inconclusive.
"""

from __future__ import annotations

import http.client
import re
import urllib.error
import urllib.request

from extension_inventory.models import DEFAULT_STORE_URL, Availability

DEFAULT_TIMEOUT = 5.0


class ProbeError(Exception):
    """The store probe could not classify an extension."""

    def __init__(self, ext_id: str, reason: str):
        self.ext_id = ext_id
        self.reason = reason
        super().__init__(f"{ext_id}: {reason}")


class _NoRedirect(urllib.request.HTTPRedirectHandler):
    """Surface redirects as HTTPError instead of following them."""

    def redirect_request(self, req, fp, code, msg, headers, newurl):
        return None


def build_opener(proxies: dict[str, str] | None = None) -> urllib.request.OpenerDirector:
    """Build an opener that does not follow redirects.

    Proxies default to the environment (``http_proxy`` etc.); pass an empty
    dict to connect directly.
    """
    handlers: list[urllib.request.BaseHandler] = [_NoRedirect()]
    if proxies is not None:
        handlers.insert(0, urllib.request.ProxyHandler(proxies))
    return urllib.request.build_opener(*handlers)


def classify_response(status: int, location: str | None, ext_id: str, base_url: str) -> Availability | None:
    """Classify a store response. Returns None if the response is inconclusive."""
    if status == 404:
        return Availability.UNAVAILABLE
    if status == 301 and location:
        pattern = rf"^{re.escape(base_url.rstrip('/'))}/.+/{re.escape(ext_id)}$"
        if re.match(pattern, location):
            return Availability.AVAILABLE
    return None


class StoreProber:
    """Anonymous existence check against the extension store."""

    def __init__(
        self,
        base_url: str = DEFAULT_STORE_URL,
        timeout: float = DEFAULT_TIMEOUT,
        opener: urllib.request.OpenerDirector | None = None,
    ):
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.opener = opener or build_opener()

    def detail_url(self, ext_id: str) -> str:
        return f"{self.base_url}/{ext_id}"

    def probe(self, ext_id: str) -> Availability:
        """Probe the store listing for one extension.

        Returns:
            Availability.AVAILABLE or Availability.UNAVAILABLE.

        Raises:
            ProbeError: on transport errors, timeouts and unexpected
                responses. Callers record these as indeterminate.
        """
        req = urllib.request.Request(self.detail_url(ext_id), method="HEAD")
        try:
            with self.opener.open(req, timeout=self.timeout) as resp:
                status = resp.status
                location = resp.headers.get("Location")
        except urllib.error.HTTPError as exc:
            status = exc.code
            location = exc.headers.get("Location") if exc.headers is not None else None
        except urllib.error.URLError as exc:
            raise ProbeError(ext_id, f"Request failed: {exc.reason}") from exc
        except (TimeoutError, OSError, http.client.HTTPException) as exc:
            raise ProbeError(ext_id, f"Request failed: {exc}") from exc

        availability = classify_response(status, location, ext_id, self.base_url)
        if availability is None:
            detail = f" -> {location}" if location else ""
            raise ProbeError(ext_id, f"Unexpected response HTTP {status}{detail}")
        return availability
