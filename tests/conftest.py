"""Shared pytest fixtures and configuration for pytest."""

import io
import sys

import pytest
from PIL import Image


def pytest_configure(config: pytest.Config) -> None:
    """Register custom markers for platform-specific tests."""
    config.addinivalue_line("markers", "windows: mark test to run only on Windows")
    config.addinivalue_line(
        "markers", "windows_mock: mark test that mocks Windows behavior (runs everywhere)"
    )


def pytest_collection_modifyitems(
    config: pytest.Config, items: list[pytest.Item]
) -> None:
    """Auto-skip tests based on platform markers."""
    skip_windows = pytest.mark.skip(reason="Windows-only test")

    for item in items:
        if "windows" in item.keywords and sys.platform != "win32":
            item.add_marker(skip_windows)


def encode_image(fmt: str, size: tuple[int, int] = (2, 2), color=(200, 30, 40), mode: str = "RGB") -> bytes:
    buf = io.BytesIO()
    Image.new(mode, size, color).save(buf, format=fmt)
    return buf.getvalue()


@pytest.fixture
def png_bytes() -> bytes:
    return encode_image("PNG")


@pytest.fixture
def tiff_bytes() -> bytes:
    return encode_image("TIFF")


@pytest.fixture
def make_image():
    return encode_image
