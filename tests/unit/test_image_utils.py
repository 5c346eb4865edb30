"""
Tests for the image codec boundary
"""

import io

import pytest
from PIL import Image

from outpainter.core.exceptions import DecodeError, EncodeError, OutpainterError
from outpainter.utils.image_utils import (decode_image, encode_png,
                                          ensure_png_mode, to_mode)


class TestDecodeImage:

    def test_png(self, square_png):
        image, image_format, size = decode_image(square_png)
        assert image_format == "png"
        assert size == (512, 512)
        assert image.mode == "RGB"

    def test_jpeg(self, test_image_square, encode):
        _, image_format, size = decode_image(encode(test_image_square, "JPEG"))
        assert image_format == "jpeg"
        assert size == (512, 512)

    def test_empty(self):
        with pytest.raises(DecodeError) as exc_info:
            decode_image(b"")
        assert exc_info.value.size_bytes == 0
        assert exc_info.value.stage == "decode"

    def test_garbage(self):
        with pytest.raises(DecodeError) as exc_info:
            decode_image(b"definitely not an image")
        assert isinstance(exc_info.value, OutpainterError)
        assert exc_info.value.size_bytes == len(b"definitely not an image")

    def test_truncated(self, square_png):
        with pytest.raises(DecodeError):
            decode_image(square_png[:len(square_png) // 2])


class TestEncodePng:

    def test_round_trip_mode_and_size(self):
        mask = Image.new("L", (40, 20), 128)
        decoded = Image.open(io.BytesIO(encode_png(mask, 1)))
        assert decoded.format == "PNG"
        assert decoded.mode == "L"
        assert decoded.size == (40, 20)

    def test_compress_level_from_config(self):
        data = encode_png(Image.new("RGBA", (8, 8)))
        assert data.startswith(b"\x89PNG")

    def test_unwritable_mode(self):
        with pytest.raises(EncodeError) as exc_info:
            encode_png(Image.new("CMYK", (8, 8)), 1, output="canvas")
        assert exc_info.value.output == "canvas"
        assert exc_info.value.stage == "encode"


class TestModes:

    def test_to_mode(self):
        image = Image.new("RGB", (4, 4))
        assert to_mode(image, "RGB") is image
        assert to_mode(image, "RGBA").mode == "RGBA"

    def test_palette_transparency(self):
        image = Image.new("P", (4, 4))
        image.info["transparency"] = 0
        assert to_mode(image, "RGB").mode == "RGB"

    def test_ensure_png_mode(self):
        assert ensure_png_mode(Image.new("CMYK", (4, 4))).mode == "RGB"
        rgb = Image.new("RGB", (4, 4))
        assert ensure_png_mode(rgb) is rgb
