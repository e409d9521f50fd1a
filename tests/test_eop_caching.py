"""Tests for EOP caching and download functionality."""

from __future__ import annotations

import logging
import os
from pathlib import Path
from unittest.mock import patch

import httpx
import pytest

from topojax.eop import (
    EOPData,
    download_standard_eop_file,
    get_ut1_utc,
    load_cached_eop,
)
from topojax.eop._download import IERS_STANDARD_URL
from topojax.errors import TimeResolutionError


def _finals_text(rows: list[tuple[float, float]]) -> str:
    return "".join(f"{'':6}{m:9.2f}{'':43}{u:10.7f}".ljust(187) + "\n" for m, u in rows)


_ROWS = [(57027.0, -0.4600), (57028.0, -0.4610), (57029.0, -0.4620)]


@pytest.fixture()
def cached_file(tmp_path: Path) -> Path:
    dest = tmp_path / "finals.all.iau2000.txt"
    dest.write_text(_finals_text(_ROWS), encoding="utf-8")
    return dest


def _age(path: Path, days: float) -> None:
    old_time = path.stat().st_mtime - days * 86400
    os.utime(path, (old_time, old_time))


# ---------------------------------------------------------------------------
# download_standard_eop_file tests
# ---------------------------------------------------------------------------


class TestDownloadStandardEOPFile:
    """Tests for download_standard_eop_file."""

    @pytest.mark.ci
    def test_download_success(self, tmp_path: Path) -> None:
        """Actual download from IERS produces a parseable file."""
        dest = tmp_path / "finals.all.iau2000.txt"
        result = download_standard_eop_file(dest)
        assert result.exists()
        eop = load_cached_eop(result)
        assert eop.mjd.shape[0] > 1000

    def test_download_writes_body(self, tmp_path: Path) -> None:
        dest = tmp_path / "deep" / "nested" / "finals.txt"
        assert not dest.parent.exists()

        with patch("topojax.eop._download.httpx.Client") as mock_client_cls:
            mock_response = mock_client_cls.return_value.__enter__.return_value.get.return_value
            mock_response.text = _finals_text(_ROWS)
            mock_response.raise_for_status.return_value = None

            result = download_standard_eop_file(dest)

        assert result == dest.resolve()
        assert dest.read_text(encoding="utf-8") == _finals_text(_ROWS)
        assert not dest.with_name(dest.name + ".part").exists()

    def test_download_passes_timeout(self, tmp_path: Path) -> None:
        with patch("topojax.eop._download.httpx.Client") as mock_client_cls:
            mock_response = mock_client_cls.return_value.__enter__.return_value.get.return_value
            mock_response.text = ""
            download_standard_eop_file(tmp_path / "f.txt", timeout=5.0)

        assert mock_client_cls.call_args.kwargs["timeout"] == 5.0

    def test_download_http_error_keeps_existing_file(self, cached_file: Path) -> None:
        """A failed download propagates and does not touch the cached copy."""
        request = httpx.Request("GET", IERS_STANDARD_URL)
        error = httpx.HTTPStatusError(
            "404", request=request, response=httpx.Response(404, request=request)
        )
        before = cached_file.read_text(encoding="utf-8")

        with patch("topojax.eop._download.httpx.Client") as mock_client_cls:
            mock_response = mock_client_cls.return_value.__enter__.return_value.get.return_value
            mock_response.raise_for_status.side_effect = error
            with pytest.raises(httpx.HTTPStatusError):
                download_standard_eop_file(cached_file)

        assert cached_file.read_text(encoding="utf-8") == before

    def test_download_default_url(self) -> None:
        """Default URL points to IERS data centre."""
        assert "iers.org" in IERS_STANDARD_URL
        assert "finals.all.iau2000.txt" in IERS_STANDARD_URL


# ---------------------------------------------------------------------------
# load_cached_eop tests
# ---------------------------------------------------------------------------


class TestLoadCachedEOP:
    """Tests for load_cached_eop."""

    def test_fresh_file_reused(self, cached_file: Path) -> None:
        """A fresh cached file is loaded without downloading."""
        with patch("topojax.eop._providers.download_standard_eop_file") as mock_dl:
            eop = load_cached_eop(cached_file, max_age_days=7.0)
            mock_dl.assert_not_called()

        assert isinstance(eop, EOPData)
        assert eop.mjd.shape[0] == 3

    def test_stale_file_triggers_download(self, cached_file: Path) -> None:
        _age(cached_file, 30)

        with patch("topojax.eop._providers.download_standard_eop_file") as mock_dl:
            mock_dl.return_value = cached_file
            eop = load_cached_eop(cached_file, max_age_days=7.0)
            mock_dl.assert_called_once_with(cached_file)

        assert isinstance(eop, EOPData)

    def test_missing_file_triggers_download(self, tmp_path: Path) -> None:
        dest = tmp_path / "finals.all.iau2000.txt"

        def fake_download(fp: Path) -> Path:
            fp.write_text(_finals_text(_ROWS), encoding="utf-8")
            return fp

        with patch(
            "topojax.eop._providers.download_standard_eop_file", side_effect=fake_download
        ) as mock_dl:
            eop = load_cached_eop(dest)
            mock_dl.assert_called_once()

        assert get_ut1_utc(eop, 57028.0) == pytest.approx(-0.461, abs=1e-9)

    def test_download_failure_without_cache_raises(self, tmp_path: Path) -> None:
        dest = tmp_path / "finals.all.iau2000.txt"

        with patch(
            "topojax.eop._providers.download_standard_eop_file",
            side_effect=httpx.ConnectError("network down"),
        ):
            with pytest.raises(TimeResolutionError, match="download failed"):
                load_cached_eop(dest)

    def test_download_failure_falls_back_to_stale(
        self, cached_file: Path, caplog: pytest.LogCaptureFixture
    ) -> None:
        _age(cached_file, 30)

        with patch(
            "topojax.eop._providers.download_standard_eop_file",
            side_effect=httpx.ConnectError("network down"),
        ):
            with caplog.at_level(logging.WARNING, logger="topojax.eop._providers"):
                eop = load_cached_eop(cached_file, max_age_days=7.0)

        assert eop.mjd.shape[0] == 3
        assert "stale cached file" in caplog.text

    def test_corrupt_file_raises(self, tmp_path: Path) -> None:
        dest = tmp_path / "finals.all.iau2000.txt"
        dest.write_text("this is not valid EOP data\n" * 10, encoding="utf-8")

        with patch("topojax.eop._providers.download_standard_eop_file") as mock_dl:
            mock_dl.return_value = dest
            with pytest.raises(TimeResolutionError, match="Failed to load"):
                load_cached_eop(dest, max_age_days=0.0)

    def test_default_filepath(self, tmp_path: Path) -> None:
        """When filepath is None, the default cache location is used."""
        expected_file = tmp_path / "finals.all.iau2000.txt"

        with (
            patch("topojax.eop._providers.is_file_stale", return_value=False) as mock_stale,
            patch("topojax.eop._providers.load_eop_from_file") as mock_load,
            patch("topojax.eop._providers.get_eop_cache_dir", return_value=tmp_path),
        ):
            load_cached_eop()

        mock_stale.assert_called_once()
        assert Path(mock_stale.call_args[0][0]) == expected_file
        mock_load.assert_called_once_with(expected_file)

    def test_custom_max_age(self, cached_file: Path) -> None:
        _age(cached_file, 2)

        with patch("topojax.eop._providers.download_standard_eop_file") as mock_dl:
            load_cached_eop(cached_file, max_age_days=3.0)
            mock_dl.assert_not_called()

        with patch("topojax.eop._providers.download_standard_eop_file") as mock_dl:
            mock_dl.return_value = cached_file
            load_cached_eop(cached_file, max_age_days=1.0)
            mock_dl.assert_called_once()
