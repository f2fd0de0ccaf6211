"""Deployment information and the cloud capability probe."""

from __future__ import annotations

import logging

from .client import ConfluenceClient
from .errors import UnsupportedOperationError, handle_response
from .models import SystemInfo

logger = logging.getLogger(__name__)


class ServerInfoMixin(ConfluenceClient):
    async def get_system_info(self) -> SystemInfo:
        response = await self._request("GET", "settings/systemInfo")
        return handle_response(response, SystemInfo)

    async def is_cloud(self) -> bool:
        """Return ``True`` when connected to Confluence cloud.

        Uses ``ClientSettings.deployment`` when configured. Otherwise the
        system info endpoint is probed once and the outcome is kept for the
        lifetime of the client: a ``cloudId`` means cloud, a 404 means server.
        """

        if self._deployment is None:
            response = await self._request("GET", "settings/systemInfo")
            if response.status_code == 404:
                deployment = "server"
            else:
                info = handle_response(response, SystemInfo)
                deployment = "cloud" if info.cloud_id else "server"
            logger.info("Detected Confluence %s deployment", deployment)
            self._deployment = deployment
        return self._deployment == "cloud"

    async def _require_cloud(self, operation: str) -> None:
        if not await self.is_cloud():
            raise UnsupportedOperationError(operation)
