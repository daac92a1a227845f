"""Shared pytest fixtures for Gallery Feed tests."""

import os
import shutil
import sys
import tempfile
from pathlib import Path
from typing import Generator

import pytest
from fastapi.testclient import TestClient

from galleryfeed.api.main import create_app
from galleryfeed.core.config import GalleryFeedConfig


@pytest.fixture
def temp_dir() -> Generator[Path, None, None]:
    """Create a temporary directory for test files.

    Yields:
        Path to temporary directory

    Cleanup:
        Directory is removed after test completes
    """
    temp_path = Path(tempfile.mkdtemp())
    try:
        yield temp_path
    finally:
        shutil.rmtree(temp_path, ignore_errors=True)


@pytest.fixture
def gallery_dir(temp_dir: Path) -> Path:
    """Create a gallery with regular images, featured images, and noise.

    Layout::

        gallery/
            a.jpg
            b.png
            notes.txt
            list-images.php
            featured/
                c.gif

    Returns:
        Path to the base gallery directory
    """
    gallery = temp_dir / "gallery"
    featured = gallery / "featured"
    featured.mkdir(parents=True)

    (gallery / "a.jpg").write_bytes(b"\xff\xd8\xff")
    (gallery / "b.png").write_bytes(b"\x89PNG")
    (gallery / "notes.txt").write_text("not an image")
    (gallery / "list-images.php").write_text("<?php ?>")
    (featured / "c.gif").write_bytes(b"GIF89a")

    return gallery


@pytest.fixture
def test_config(gallery_dir: Path) -> GalleryFeedConfig:
    """Create a configuration pointing at the test gallery.

    Args:
        gallery_dir: Populated gallery from fixture

    Returns:
        GalleryFeedConfig instance for testing
    """
    return GalleryFeedConfig(gallery_dir=gallery_dir, _env_file=None)


@pytest.fixture
def test_client(test_config: GalleryFeedConfig) -> Generator[TestClient, None, None]:
    """FastAPI TestClient bound to the test gallery."""
    with TestClient(create_app(test_config)) as client:
        yield client


@pytest.fixture
def undecodable_image(gallery_dir: Path) -> str:
    """Create ``bad\\xff.jpg`` (not valid UTF-8) in the test gallery.

    Returns:
        The surrogate-escaped name ``os.listdir`` reports for the file

    Skips:
        On filesystems that reject non-UTF-8 names
    """
    if sys.platform == "win32":
        pytest.skip("file names are Unicode on Windows")
    raw = os.fsencode(gallery_dir) + b"/bad\xff.jpg"
    try:
        fd = os.open(raw, os.O_CREAT | os.O_WRONLY, 0o644)
    except (OSError, ValueError):
        pytest.skip("filesystem rejects non-UTF-8 file names")
    os.close(fd)
    return os.fsdecode(b"bad\xff.jpg")
