"""Pytest configuration and fixtures."""

import pytest
from formstream import MultipartStreamBuilder

PNG_BYTES = (
    b"\x89PNG\r\n\x1a\n\x00\x00\x00\rIHDR\x00\x00\x00\x01\x00\x00\x00\x01"
    b"\x08\x06\x00\x00\x00\x1f\x15\xc4\x89\x00\x00\x00\nIDATx\x9cc\x00\x01"
    b"\x00\x00\x05\x00\x01\r\n-\xb4\x00\x00\x00\x00IEND\xaeB`\x82"
)


@pytest.fixture
def builder():
    """Create a builder with default collaborators."""
    return MultipartStreamBuilder()


@pytest.fixture
def png_path(tmp_path):
    """Write a tiny PNG image to disk and return its path."""
    path = tmp_path / "httplug.png"
    path.write_bytes(PNG_BYTES)
    return path


@pytest.fixture
def png_file(png_path):
    """Open the PNG image as a binary file object."""
    with open(png_path, "rb") as f:
        yield f
