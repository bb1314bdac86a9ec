"""
QuickChart request dispatcher.

Builds rendering URLs for canonical chart configs and downloads the
rendered PNG to a local file.

QuickChart serves GET requests with URLs up to roughly 16 KB; larger
configurations are rejected by the service, not checked here.
"""
from datetime import datetime, timezone
from pathlib import Path
from typing import Optional, Union
from urllib.parse import quote
import asyncio
import errno
import json
import logging
import os

import httpx

from src.models.chart_models import CanonicalChartConfig
from src.models.config import settings
from src.models.errors import (
    DirectoryNotFound,
    TransferFailure,
    UnwritableDirectory,
    WritePermissionDenied,
)

logger = logging.getLogger(__name__)

QUICKCHART_BASE_URL = "https://quickchart.io/chart"

# Characters encodeURIComponent leaves unescaped, besides letters, digits and "_.-~"
URI_COMPONENT_SAFE = "!*'()"

PERMISSION_ERRNOS = (errno.EACCES, errno.EPERM, errno.EROFS)


def build_chart_url(config: CanonicalChartConfig) -> str:
    """Serialize a config to compact JSON and embed it as the ``c`` query parameter"""
    payload = json.dumps(config.to_dict(), separators=(",", ":"), ensure_ascii=False)
    return f"{QUICKCHART_BASE_URL}?c={quote(payload, safe=URI_COMPONENT_SAFE)}"


def is_writable_directory(directory: Union[str, Path]) -> bool:
    return os.path.isdir(directory) and os.access(directory, os.W_OK)


def default_output_path(
    chart_type: str,
    home_dir: Optional[Path] = None,
    now: Optional[datetime] = None,
) -> Path:
    """Pick ~/Desktop when writable, else ~, and name the file after the chart type and time"""
    home = Path(home_dir) if home_dir is not None else Path.home()
    desktop = home / "Desktop"

    base_dir = home
    if is_writable_directory(desktop):
        base_dir = desktop
    else:
        logger.info("Desktop not accessible, using home directory instead")

    timestamp = (now or datetime.now(timezone.utc)).strftime("%Y-%m-%d_%H-%M-%S")
    return base_dir / f"{chart_type or 'chart'}_{timestamp}.png"


class QuickChartService:
    """Service for rendering charts through the QuickChart API"""

    def __init__(self, client: Optional[httpx.AsyncClient] = None, timeout: Optional[float] = None):
        self.client = client
        self.timeout = timeout if timeout is not None else settings.request_timeout

    def build_url(self, config: CanonicalChartConfig) -> str:
        return build_chart_url(config)

    async def fetch_chart_image(self, url: str) -> bytes:
        """GET the rendered chart and return the image bytes"""
        if self.client is not None:
            response = await self.client.get(url, timeout=self.timeout)
            response.raise_for_status()
            return response.content

        async with httpx.AsyncClient(timeout=self.timeout) as client:
            response = await client.get(url)
            response.raise_for_status()
            return response.content

    async def download(self, config: CanonicalChartConfig, output_path: Optional[str] = None) -> str:
        """
        Render a chart and save it to disk.

        Args:
            config: Canonical chart configuration
            output_path: Target file; derived from the chart type when omitted

        Returns:
            The path the image was written to

        Raises:
            UnwritableDirectory: the target directory is missing or read-only
            WritePermissionDenied: the write failed with a permission error
            DirectoryNotFound: the directory vanished before the write
            TransferFailure: the fetch or write failed for any other reason
        """
        if output_path:
            target = Path(output_path).expanduser()
        else:
            target = default_output_path(config.type.value)
            logger.info(f"No output path provided, using: {target}")

        output_dir = target.parent.absolute()
        if not is_writable_directory(output_dir):
            raise UnwritableDirectory(str(output_dir))

        url = self.build_url(config)

        try:
            image = await self.fetch_chart_image(url)
            await asyncio.to_thread(target.write_bytes, image)
        except OSError as e:
            if e.errno in PERMISSION_ERRNOS:
                raise WritePermissionDenied(str(target)) from e
            if e.errno == errno.ENOENT:
                raise DirectoryNotFound(str(target)) from e
            raise TransferFailure(f"Failed to save chart image to {target}: {e}") from e
        except httpx.HTTPStatusError as e:
            raise TransferFailure(f"Failed to fetch chart image: HTTP {e.response.status_code}") from e
        except httpx.HTTPError as e:
            raise TransferFailure(f"Failed to fetch chart image: {e}") from e

        logger.info(f"Chart saved to {target}")
        return str(target)


# Global service instance
_global_quickchart_service = None


def get_quickchart_service() -> QuickChartService:
    """Get QuickChart service instance for dependency injection"""
    global _global_quickchart_service

    if _global_quickchart_service is None:
        _global_quickchart_service = QuickChartService()

    return _global_quickchart_service
