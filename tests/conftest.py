"""Shared pytest fixtures for wrapbind tests."""

from __future__ import annotations

from pathlib import Path

import pytest

from wrapbind.core.config import BuildConfig


@pytest.fixture
def build_config(tmp_path: Path) -> BuildConfig:
    vendor = tmp_path / "cmake_vendor"
    vendor.mkdir()
    return BuildConfig(
        target="thumbv6m-none-eabi",
        out_dir=tmp_path / "out",
        vendor_project=vendor,
        vendor_target="pico",
    )


@pytest.fixture
def vendor_include(tmp_path: Path) -> Path:
    include = tmp_path / "sdk" / "include"
    include.mkdir(parents=True)
    return include
