# catalogue/client/transport.py

"""Blocking HTTP transport for the catalogue endpoints."""

import logging
from urllib.parse import urljoin

from curl_cffi import CurlOpt
from curl_cffi import requests as curl_requests

from catalogue.config.settings import Settings

# libcurl CURL_IPRESOLVE_V4
_IPRESOLVE_V4 = 1


class CatalogueTransport:
    """One ``curl_cffi`` session bound to the catalogue base URL.

    The transport performs a single GET per call and never retries;
    timeouts and address-family preference come from :class:`Settings`.
    """

    def __init__(
        self,
        base_url: str | None = None,
        timeout: int | None = None,
        prefer_ipv4: bool | None = None,
    ) -> None:
        self.logger = logging.getLogger("catalogue.transport")
        self.settings = Settings()
        self.base_url = base_url or self.settings.BASE_URL
        if not self.base_url.endswith("/"):
            self.base_url += "/"
        self.timeout = timeout or self.settings.REQUEST_TIMEOUT
        use_ipv4 = (
            self.settings.PREFER_IPV4
            if prefer_ipv4 is None
            else prefer_ipv4
        )
        curl_options = (
            {CurlOpt.IPRESOLVE: _IPRESOLVE_V4} if use_ipv4 else None
        )
        self.session = curl_requests.Session(
            impersonate=self.settings.IMPERSONATE_BROWSER,
            curl_options=curl_options,
        )

    def url_for(self, path: str) -> str:
        """Resolve an endpoint path against the base URL."""
        return urljoin(self.base_url, path.lstrip("/"))

    def get(
        self,
        path: str,
        params: dict[str, str] | None = None,
    ) -> curl_requests.Response:
        """Issue one GET; transport faults propagate to the caller."""
        url = self.url_for(path)
        self.logger.debug("GET %s params=%s", url, params)
        resp = self.session.get(
            url,
            params=params,
            headers=self.settings.DEFAULT_HEADERS,
            timeout=self.timeout,
        )
        self.logger.debug(
            "GET %s -> HTTP %d (%d bytes)",
            url,
            resp.status_code,
            len(resp.content or b""),
        )
        return resp

    def close(self) -> None:
        """Release the underlying curl handles."""
        self.session.close()
