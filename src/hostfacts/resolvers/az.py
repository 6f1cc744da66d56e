"""Azure instance metadata."""

import logging
from typing import Any

import httpx

from .base import Resolver

logger = logging.getLogger(__name__)

AZ_METADATA_URL = "http://169.254.169.254/metadata/instance?api-version=2020-09-01"


class AzResolver(Resolver):
    """Answers metadata, the Azure instance metadata document.

    Callers must check the hypervisor first; off Azure the endpoint does not
    exist and every request would wait for the timeout.
    """

    keys = ("metadata",)

    def __init__(
        self,
        timeout: float = 0.6,
        url: str = AZ_METADATA_URL,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        super().__init__()
        self._timeout = timeout
        self._url = url
        self._transport = transport

    @property
    def name(self) -> str:
        return "az"

    def _post_resolve(self, key: str) -> None:
        self._fact_list["metadata"] = self._fetch()

    def _fetch(self) -> Any:
        try:
            with httpx.Client(timeout=self._timeout, transport=self._transport) as client:
                response = client.get(self._url, headers={"Metadata": "true"})
        except httpx.HTTPError as e:
            logger.debug("Azure metadata request failed: %s", e)
            return None

        if not response.is_success:
            logger.debug("Azure metadata returned HTTP %s", response.status_code)
            return None

        try:
            return response.json()
        except ValueError as e:
            logger.debug("Azure metadata is not JSON: %s", e)
            return None
