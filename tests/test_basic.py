"""Smoke tests for the package surface and metadata banner."""

from __future__ import annotations

import lib_rsyslog
from lib_rsyslog import __init__conf__, summary_info


def test_summary_info_contains_metadata() -> None:
    summary = summary_info()
    assert "Info for lib_rsyslog" in summary
    assert "version" in summary
    assert __init__conf__.version in summary
    assert summary.endswith("\n")


def test_summary_info_is_idempotent() -> None:
    assert summary_info() == summary_info()


def test_public_surface_is_exported() -> None:
    for name in lib_rsyslog.__all__:
        assert hasattr(lib_rsyslog, name), name
