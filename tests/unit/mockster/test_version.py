"""Tests for mockster.version module."""

import importlib.metadata
from unittest.mock import patch

from mockster.version import VERSION, get_version_info, installed_version


class TestInstalledVersion:
    def test_returns_installed_version(self) -> None:
        with patch("importlib.metadata.version", return_value="1.2.3"):
            assert installed_version() == "1.2.3"

    def test_returns_dev_when_not_installed(self) -> None:
        with patch(
            "importlib.metadata.version",
            side_effect=importlib.metadata.PackageNotFoundError,
        ):
            assert installed_version() == "0.0.0-dev"


def test_get_version_info_reports_version_only() -> None:
    assert get_version_info() == {"version": VERSION}
