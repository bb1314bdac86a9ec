"""
Unit tests for QuickChart URL building and chart downloads
"""
import errno
import json
import os
from datetime import datetime, timezone
from pathlib import Path
from unittest.mock import patch
from urllib.parse import unquote

import httpx
import pytest

from src.models.errors import (
    DirectoryNotFound,
    TransferFailure,
    UnwritableDirectory,
    WritePermissionDenied,
)
from src.services.chart_normalizer import normalize
from src.services.quickchart_service import (
    QUICKCHART_BASE_URL,
    QuickChartService,
    build_chart_url,
    default_output_path,
)


class TestBuildUrl:

    def test_url_prefix(self, bar_config):
        url = build_chart_url(bar_config)
        assert url.startswith(f"{QUICKCHART_BASE_URL}?c=")

    def test_round_trip(self, bar_config):
        url = build_chart_url(bar_config)
        encoded = url[len(f"{QUICKCHART_BASE_URL}?c="):]
        assert json.loads(unquote(encoded)) == bar_config.to_dict()

    def test_round_trip_with_unicode_and_reserved_characters(self):
        config = normalize({
            "type": "doughnut",
            "labels": ["Café & Bar", "50% off?", "a=b#c"],
            "datasets": [{"data": [1, 2, 3], "label": "Ventes / été"}],
            "title": "Résumé",
        })
        url = build_chart_url(config)
        encoded = url.split("?c=", 1)[1]
        for reserved in ("&", "#", "=", "?", " ", "/"):
            assert reserved not in encoded
        assert json.loads(unquote(encoded)) == config.to_dict()

    def test_payload_has_no_null_colors(self):
        config = normalize({"type": "bar", "datasets": [{"data": [1, 2]}]})
        payload = unquote(build_chart_url(config).split("?c=", 1)[1])
        assert "null" not in payload
        assert "backgroundColor" not in payload
        assert "borderColor" not in payload

    def test_compact_json(self, bar_config):
        payload = unquote(build_chart_url(bar_config).split("?c=", 1)[1])
        assert ", " not in payload
        assert '": ' not in payload


class TestDefaultOutputPath:

    def test_falls_back_to_home_without_desktop(self, tmp_path):
        now = datetime(2024, 3, 5, 14, 7, 9, 123456, tzinfo=timezone.utc)
        path = default_output_path("bar", home_dir=tmp_path, now=now)
        assert path.parent == tmp_path
        assert path.name == "bar_2024-03-05_14-07-09.png"

    def test_uses_writable_desktop(self, tmp_path):
        (tmp_path / "Desktop").mkdir()
        path = default_output_path("pie", home_dir=tmp_path)
        assert path.parent == tmp_path / "Desktop"
        assert path.name.startswith("pie_")
        assert ":" not in path.name
        assert path.suffix == ".png"

    def test_unwritable_desktop_falls_back_to_home(self, tmp_path):
        (tmp_path / "Desktop").mkdir()
        real_access = os.access

        def fake_access(path, mode):
            if Path(path).name == "Desktop":
                return False
            return real_access(path, mode)

        with patch("src.services.quickchart_service.os.access", side_effect=fake_access):
            path = default_output_path("line", home_dir=tmp_path)
        assert path.parent == tmp_path
        assert "line" in path.name
        assert ":" not in path.name


class TestDownload:

    @pytest.mark.asyncio
    async def test_writes_image(self, quickchart_service, bar_config, tmp_path, png_bytes):
        target = tmp_path / "chart.png"
        saved = await quickchart_service.download(bar_config, str(target))

        assert saved == str(target)
        assert target.read_bytes() == png_bytes
        quickchart_service.fetch_chart_image.assert_awaited_once_with(build_chart_url(bar_config))

    @pytest.mark.asyncio
    async def test_default_path(self, quickchart_service, bar_config, tmp_path, png_bytes):
        with patch("src.services.quickchart_service.Path.home", return_value=tmp_path):
            saved = await quickchart_service.download(bar_config)

        assert Path(saved).parent == tmp_path
        assert Path(saved).name.startswith("bar_")
        assert Path(saved).read_bytes() == png_bytes

    @pytest.mark.asyncio
    async def test_unwritable_directory_skips_fetch(self, quickchart_service, bar_config, tmp_path):
        target = tmp_path / "missing" / "chart.png"
        with pytest.raises(UnwritableDirectory) as exc_info:
            await quickchart_service.download(bar_config, str(target))

        assert str(tmp_path / "missing") in str(exc_info.value)
        quickchart_service.fetch_chart_image.assert_not_called()

    @pytest.mark.asyncio
    @pytest.mark.parametrize("code", [errno.EACCES, errno.EPERM, errno.EROFS])
    async def test_permission_errors(self, quickchart_service, bar_config, tmp_path, code):
        target = tmp_path / "chart.png"
        with patch.object(Path, "write_bytes", side_effect=OSError(code, "denied")):
            with pytest.raises(WritePermissionDenied) as exc_info:
                await quickchart_service.download(bar_config, str(target))
        assert str(target) in str(exc_info.value)

    @pytest.mark.asyncio
    async def test_missing_directory_during_write(self, quickchart_service, bar_config, tmp_path):
        target = tmp_path / "chart.png"
        with patch.object(Path, "write_bytes", side_effect=FileNotFoundError(errno.ENOENT, "gone")):
            with pytest.raises(DirectoryNotFound):
                await quickchart_service.download(bar_config, str(target))

    @pytest.mark.asyncio
    async def test_other_os_errors_are_transfer_failures(self, quickchart_service, bar_config, tmp_path):
        target = tmp_path / "chart.png"
        with patch.object(Path, "write_bytes", side_effect=OSError(errno.ENOSPC, "disk full")):
            with pytest.raises(TransferFailure):
                await quickchart_service.download(bar_config, str(target))

    @pytest.mark.asyncio
    async def test_http_error_is_transfer_failure(self, bar_config, tmp_path):
        def handler(request):
            return httpx.Response(500, content=b"renderer error")

        async with httpx.AsyncClient(transport=httpx.MockTransport(handler)) as client:
            service = QuickChartService(client=client, timeout=5)
            with pytest.raises(TransferFailure) as exc_info:
                await service.download(bar_config, str(tmp_path / "chart.png"))

        assert "500" in str(exc_info.value)
        assert not (tmp_path / "chart.png").exists()

    @pytest.mark.asyncio
    async def test_fetch_through_client(self, bar_config, tmp_path, png_bytes):
        requested = []

        def handler(request):
            requested.append(request)
            return httpx.Response(200, content=png_bytes, headers={"Content-Type": "image/png"})

        async with httpx.AsyncClient(transport=httpx.MockTransport(handler)) as client:
            service = QuickChartService(client=client, timeout=5)
            saved = await service.download(bar_config, str(tmp_path / "chart.png"))

        assert Path(saved).read_bytes() == png_bytes
        assert len(requested) == 1
        assert requested[0].method == "GET"
        assert str(requested[0].url).startswith(QUICKCHART_BASE_URL)
        assert json.loads(requested[0].url.params["c"]) == bar_config.to_dict()
