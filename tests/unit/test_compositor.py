"""
Tests for outpaint canvas and mask preparation
"""

import io

import numpy as np
import pytest
from PIL import Image

from outpainter.core.actions import OutpaintAction
from outpainter.core.aspect_catalog import AspectCatalog
from outpainter.core.compositor import (OutpaintCompositor, coerce_image,
                                        placement_offset, prepare_outpaint)
from outpainter.core.condition import ScaleAxis
from outpainter.core.config import OutpaintOptions
from outpainter.core.configuration_manager import ConfigurationManager
from outpainter.core.direction import Direction
from outpainter.core.exceptions import DecodeError


def _decode(data):
    image = Image.open(io.BytesIO(data))
    image.load()
    return image


class TestPlacementOffset:

    def test_center(self):
        assert placement_offset(Direction.CENTER, (512, 512), (768, 512)) == (128, 0)
        # Odd leftovers go to the left
        assert placement_offset(Direction.CENTER, (3, 3), (8, 3)) == (3, 0)

    def test_edges(self):
        assert placement_offset(Direction.LEFT, (512, 512), (768, 512)) == (0, 0)
        assert placement_offset(Direction.UP, (512, 512), (512, 768)) == (0, 0)
        assert placement_offset(Direction.RIGHT, (512, 512), (768, 512)) == (256, 0)
        assert placement_offset(Direction.DOWN, (512, 512), (512, 768)) == (0, 256)


class TestPrepareOutpaint:

    def setup_method(self):
        self.compositor = OutpaintCompositor()

    def test_centered_horizontal_extension(self, test_image_square, square_png):
        result = self.compositor.prepare(square_png, 768, 512)

        assert result.action is OutpaintAction.CENTER_HORIZONTAL
        assert result.condition.scale_axis is ScaleAxis.HORIZONTAL
        assert result.condition.anchor is Direction.CENTER
        assert result.scaled_size == (512, 512)
        assert result.target_size == (768, 512)
        assert result.source_format == "png"
        assert not result.passthrough

        canvas = _decode(result.canvas)
        mask = _decode(result.mask)
        assert canvas.size == (768, 512)
        assert canvas.mode == "RGBA"
        assert mask.size == (768, 512)
        assert mask.mode == "L"

        pixels = np.asarray(canvas)
        src = np.asarray(test_image_square)
        assert (pixels[:, 128:640, :3] == src).all()
        assert (pixels[:, :, 3] == 255).all()
        assert (pixels[:, 127, :3] == src[:, 0]).all()
        assert (pixels[:, 640, :3] == src[:, 511]).all()

        # Edge offset 32 grows to 48 on a 1.5x wider canvas
        mask_px = np.asarray(mask)
        assert (mask_px[:, :128] == 255).all()
        assert (mask_px[:, 640:] == 255).all()
        assert (mask_px[:, 176:592] == 0).all()
        assert 0 < mask_px[0, 160] < 255
        assert 0 < mask_px[0, 600] < 255

    def test_module_function(self, square_png):
        result = prepare_outpaint(square_png, 768, 512)
        assert result.has_mask
        assert result.action is OutpaintAction.CENTER_HORIZONTAL

    def test_left_anchor(self, test_image_square, square_png):
        result = self.compositor.prepare(
            square_png, 768, 512, OutpaintOptions(anchor="left"))
        assert result.action is OutpaintAction.TO_RIGHT

        pixels = np.asarray(_decode(result.canvas))
        assert (pixels[:, :512, :3] == np.asarray(test_image_square)).all()
        mask_px = np.asarray(_decode(result.mask))
        assert (mask_px[:, :464] == 0).all()
        assert (mask_px[:, 512:] == 255).all()

    def test_up_anchor(self, test_image_square, square_png):
        result = self.compositor.prepare(
            square_png, 512, 768, OutpaintOptions(anchor=Direction.UP))
        assert result.action is OutpaintAction.TO_BOTTOM

        pixels = np.asarray(_decode(result.canvas))
        assert (pixels[:512, :, :3] == np.asarray(test_image_square)).all()
        mask_px = np.asarray(_decode(result.mask))
        assert (mask_px[:464] == 0).all()
        assert (mask_px[512:] == 255).all()

    def test_orthogonal_anchor_degrades_to_center(self, square_png):
        result = self.compositor.prepare(
            square_png, 768, 512, OutpaintOptions(anchor="up"))
        assert result.condition.anchor is Direction.CENTER
        assert result.action is OutpaintAction.CENTER_HORIZONTAL

    def test_mask_background(self, square_png):
        result = self.compositor.prepare(
            square_png, 768, 512, OutpaintOptions(mask_background=64))
        mask_px = np.asarray(_decode(result.mask))
        assert (mask_px[:, 300] == 64).all()
        assert (mask_px[:, 0] == 255).all()

    def test_resizes_source_to_target_height(self, encode):
        source = encode(Image.new("RGB", (256, 256), (200, 10, 10)))
        result = self.compositor.prepare(source, 768, 512)
        assert result.scaled_size == (512, 512)
        pixels = np.asarray(_decode(result.canvas))
        assert (pixels[:, 128:640, 0] > 150).all()

    def test_overflow_switches_axis(self, encode):
        # The tie classifies horizontally, but 300x200 at height 300 is
        # 450 wide, so the width is matched instead
        source = encode(Image.new("RGB", (300, 200), "green"))
        result = self.compositor.prepare(source, 400, 300)
        assert result.scaled_size == (400, 267)
        assert result.condition.scale_axis is ScaleAxis.VERTICAL
        assert result.action is OutpaintAction.CENTER_VERTICAL
        assert _decode(result.canvas).size == (400, 300)
        assert result.has_mask

    def test_blur_keeps_inset_source(self, test_image_noise, encode):
        source = encode(test_image_noise)
        plain = np.asarray(_decode(self.compositor.prepare(
            source, 768, 512, OutpaintOptions(edge_blur=0)).canvas))
        blurred = np.asarray(_decode(self.compositor.prepare(
            source, 768, 512, OutpaintOptions(edge_blur=4)).canvas))

        # Inset by the scaled edge offset (48) on each side
        assert (blurred[:, 176:592] == plain[:, 176:592]).all()
        assert not (blurred[:, :128] == plain[:, :128]).all()
        assert not (blurred[:, 128:176] == plain[:, 128:176]).all()

    def test_noise_is_seeded(self, test_image_square, square_png):
        options = OutpaintOptions(noise=True, seed=11)
        first = self.compositor.prepare(square_png, 768, 512, options)
        second = self.compositor.prepare(square_png, 768, 512, options)
        assert first.canvas == second.canvas

        plain = np.asarray(_decode(self.compositor.prepare(square_png, 768, 512).canvas))
        noisy = np.asarray(_decode(first.canvas))
        assert (noisy[:, 128:640] == plain[:, 128:640]).all()
        assert not (noisy[:, :128] == plain[:, :128]).all()
        assert (np.sort(noisy[:, :128], axis=None) ==
                np.sort(plain[:, :128], axis=None)).all()

    def test_rgb_canvas_mode(self, monkeypatch, square_png):
        monkeypatch.setenv("OUTPAINTER_OUTPUT_CANVAS_MODE", "RGB")
        ConfigurationManager.reset()
        result = OutpaintCompositor().prepare(square_png, 768, 512)
        assert _decode(result.canvas).mode == "RGB"


class TestShortCircuits:

    def setup_method(self):
        self.compositor = OutpaintCompositor()

    def test_png_of_target_size_passes_through(self, encode):
        source = encode(Image.new("RGB", (300, 300), "blue"))
        result = self.compositor.prepare(source, 300, 300)
        assert result.canvas == source
        assert result.mask is None
        assert result.passthrough
        assert result.action is OutpaintAction.NONE

    def test_jpeg_of_target_size_is_reencoded(self, encode):
        source = encode(Image.new("RGB", (300, 300), "blue"), "JPEG")
        result = self.compositor.prepare(source, 300, 300)
        assert result.mask is None
        assert not result.passthrough
        assert result.source_format == "jpeg"
        canvas = _decode(result.canvas)
        assert canvas.format == "PNG"
        assert canvas.size == (300, 300)

    def test_same_aspect_resize_only(self, square_png):
        result = self.compositor.prepare(square_png, 1024, 1024)
        assert result.mask is None
        assert result.action is OutpaintAction.SCALE_UP
        assert result.scaled_size == (1024, 1024)
        assert _decode(result.canvas).size == (1024, 1024)

    def test_same_aspect_downscale(self, square_png):
        result = self.compositor.prepare(square_png, 256, 256)
        assert result.mask is None
        assert result.action is OutpaintAction.SCALE_DOWN
        assert _decode(result.canvas).size == (256, 256)


class TestErrors:

    def test_decode_error(self):
        with pytest.raises(DecodeError):
            prepare_outpaint(b"not an image", 768, 512)

    @pytest.mark.parametrize("width,height", [(0, 512), (768, -1)])
    def test_invalid_target(self, square_png, width, height):
        with pytest.raises(ValueError):
            prepare_outpaint(square_png, width, height)


class TestCoerceImage:

    def test_already_aligned_png_passes_through(self, square_png):
        small = AspectCatalog(
            max_pixels=262144, dimension_step=64, min_dimension=256,
            max_dimension=1536, ratios=["1:1"], max_shrink_iterations=4096)
        result = coerce_image(square_png, small)
        assert result.canvas == square_png
        assert result.passthrough

    def test_resizes_to_catalog_budget(self, square_png, catalog):
        result = coerce_image(square_png, catalog)
        assert result.scaled_size == (1024, 1024)
        assert result.mask is None
        assert _decode(result.canvas).size == (1024, 1024)

    def test_jpeg_becomes_png(self, encode, catalog):
        source = encode(Image.new("RGB", (1000, 700), "white"), "JPEG")
        result = coerce_image(source, catalog)
        width, height = result.scaled_size
        assert width % 64 == 0 and height % 64 == 0
        canvas = _decode(result.canvas)
        assert canvas.format == "PNG"
        assert canvas.size == (width, height)
        assert result.source_format == "jpeg"
