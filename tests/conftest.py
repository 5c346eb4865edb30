"""
Test configuration and fixtures for Outpainter
"""

import io
import os
import shutil
import tempfile
from pathlib import Path

import numpy as np
import pytest
from PIL import Image

from outpainter.core.aspect_catalog import build_catalog
from outpainter.core.configuration_manager import ENV_PREFIX, ConfigurationManager


@pytest.fixture(autouse=True)
def isolated_config(monkeypatch, tmp_path):
    """Every test starts from package defaults: no user config, no env overrides"""
    for key in list(os.environ):
        if key.startswith(ENV_PREFIX):
            monkeypatch.delenv(key)
    monkeypatch.setenv("HOME", str(tmp_path / "home"))
    ConfigurationManager.reset()
    yield
    ConfigurationManager.reset()


@pytest.fixture
def temp_dir():
    """Create a temporary directory for test files"""
    temp_path = Path(tempfile.mkdtemp())
    yield temp_path
    # Cleanup
    if temp_path.exists():
        shutil.rmtree(temp_path)


def _encode(image: Image.Image, fmt: str = "PNG") -> bytes:
    buffer = io.BytesIO()
    image.save(buffer, format=fmt)
    return buffer.getvalue()


@pytest.fixture
def encode():
    """Encode a PIL image to bytes: encode(image, "JPEG")"""
    return _encode


@pytest.fixture
def test_image_square():
    """512x512 RGB image whose columns and rows are distinguishable"""
    x = np.arange(512)
    pixels = np.zeros((512, 512, 3), dtype=np.uint8)
    pixels[:, :, 0] = (x // 2)[np.newaxis, :]
    pixels[:, :, 1] = (x // 2)[:, np.newaxis]
    pixels[:, :, 2] = 128
    return Image.fromarray(pixels)


@pytest.fixture
def test_image_noise():
    """512x512 RGB noise, so any blur visibly changes pixels"""
    rng = np.random.default_rng(1234)
    return Image.fromarray(rng.integers(0, 256, (512, 512, 3), dtype=np.uint8))


@pytest.fixture
def square_png(test_image_square):
    return _encode(test_image_square)


@pytest.fixture
def catalog():
    """Catalog for a one megapixel budget, 64 px steps, 256-1536 bounds"""
    return build_catalog(
        max_pixels=1048576,
        dimension_step=64,
        min_dimension=256,
        max_dimension=1536,
    )
