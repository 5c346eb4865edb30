"""
Integration tests for the Outpainter CLI
"""

import logging
import subprocess
import sys
from pathlib import Path

import pytest
import yaml
from PIL import Image

from outpainter import __version__
from outpainter.cli.main import main

CATALOG_ARGS = ["--max-pixels", "1048576", "--step", "64",
                "--min-dim", "256", "--max-dim", "1536"]


class TestCLICommands:
    """Test CLI commands end-to-end"""

    @pytest.fixture(autouse=True)
    def reset_cli_logger(self):
        yield
        logger = logging.getLogger("outpainter")
        logger.handlers.clear()
        logger.setLevel(logging.NOTSET)

    @pytest.fixture
    def test_image(self, temp_dir):
        """Create test image"""
        img = Image.new("RGB", (512, 512), color=(100, 150, 200))
        img_path = temp_dir / "square.png"
        img.save(img_path)
        return img_path

    def run_cli(self, args):
        """Run CLI command in a subprocess and capture output"""
        cmd = [sys.executable, "-m", "outpainter.cli"] + args
        return subprocess.run(
            cmd, capture_output=True, text=True, cwd=Path(__file__).parent.parent.parent
        )

    def test_help_command(self):
        result = self.run_cli(["--help"])
        assert result.returncode == 0
        assert "outpaint" in result.stdout
        assert "candidates" in result.stdout

    def test_version_command(self):
        result = self.run_cli(["--version"])
        assert result.returncode == 0
        assert __version__ in result.stdout

    def test_missing_command(self):
        with pytest.raises(SystemExit) as exc_info:
            main([])
        assert exc_info.value.code == 2

    def test_aspects(self, capsys):
        assert main(["aspects"] + CATALOG_ARGS) == 0
        out = capsys.readouterr().out
        assert "   1:1  1024x1024" in out
        assert "  16:9  1344x768" in out
        assert "  21:9  1536x640" in out

    def test_classify(self, capsys):
        assert main(["classify", "512x512", "768x512"]) == 0
        out = capsys.readouterr().out
        assert "condition: target-x|anchor-center" in out
        assert "action: center_horizontal" in out
        assert "outpaint: Outpaint left & right" in out

    def test_classify_corrects_anchor(self, capsys):
        assert main(["classify", "512x512", "512x768", "--anchor", "left"]) == 0
        assert "action: center_vertical" in capsys.readouterr().out

        assert main(["classify", "512x512", "512x768", "--anchor", "left",
                     "--no-correct"]) == 0
        out = capsys.readouterr().out
        assert "action: none" in out
        assert "outpaint:" not in out

    def test_classify_rejects_bad_size(self):
        with pytest.raises(SystemExit):
            main(["classify", "512by512", "768x512"])

    def test_candidates(self, capsys):
        assert main(["candidates", "1024x1024", "-n", "2"] + CATALOG_ARGS) == 0
        lines = capsys.readouterr().out.strip().splitlines()
        assert len(lines) == 2
        assert "1:1" not in lines[0]

    def test_outpaint(self, test_image, temp_dir):
        output_dir = temp_dir / "out"
        code = main(["outpaint", str(test_image), "-r", "768x512",
                     "--output-dir", str(output_dir)])
        assert code == 0

        canvas = Image.open(output_dir / "square_768x512.png")
        mask = Image.open(output_dir / "square_768x512_mask.png")
        assert canvas.size == (768, 512)
        assert mask.size == (768, 512)
        assert mask.mode == "L"

    def test_outpaint_catalog_label(self, test_image, temp_dir):
        code = main(["outpaint", str(test_image), "-r", "16:9",
                     "--anchor", "left", "--blur", "4", "--noise", "--seed", "3",
                     "--output-dir", str(temp_dir)] + CATALOG_ARGS)
        assert code == 0
        assert Image.open(temp_dir / "square_1344x768.png").size == (1344, 768)

    def test_outpaint_explicit_output(self, test_image, temp_dir):
        output = temp_dir / "nested" / "canvas.png"
        assert main(["outpaint", str(test_image), "-r", "512x768",
                     "-o", str(output)]) == 0
        assert output.exists()
        assert (temp_dir / "nested" / "canvas_mask.png").exists()

    def test_failed_mask_write_leaves_no_canvas(self, test_image, temp_dir):
        output_dir = temp_dir / "out"
        (output_dir / "square_768x512_mask.png").mkdir(parents=True)
        code = main(["outpaint", str(test_image), "-r", "768x512",
                     "--output-dir", str(output_dir)])
        assert code == 1
        assert not (output_dir / "square_768x512.png").exists()

    def test_failed_canvas_write_removes_mask(self, test_image, temp_dir):
        output_dir = temp_dir / "out"
        (output_dir / "square_768x512.png").mkdir(parents=True)
        code = main(["outpaint", str(test_image), "-r", "768x512",
                     "--output-dir", str(output_dir)])
        assert code == 1
        assert not (output_dir / "square_768x512_mask.png").exists()

    def test_outpaint_same_size_writes_no_mask(self, test_image, temp_dir):
        assert main(["outpaint", str(test_image), "-r", "512x512",
                     "--output-dir", str(temp_dir / "out")]) == 0
        assert (temp_dir / "out" / "square_512x512.png").exists()
        assert not (temp_dir / "out" / "square_512x512_mask.png").exists()

    def test_outpaint_glob(self, test_image, temp_dir):
        Image.new("RGB", (300, 200)).save(temp_dir / "other.png")
        output_dir = temp_dir / "out"
        assert main(["outpaint", str(temp_dir / "*.png"), "-r", "768x512",
                     "--output-dir", str(output_dir)]) == 0
        assert (output_dir / "square_768x512.png").exists()
        assert (output_dir / "other_768x512.png").exists()

    def test_outpaint_continues_after_bad_file(self, test_image, temp_dir):
        broken = temp_dir / "broken.png"
        broken.write_bytes(b"not a png")
        output_dir = temp_dir / "out"
        code = main(["outpaint", str(broken), str(test_image), "-r", "768x512",
                     "--output-dir", str(output_dir)])
        assert code == 1
        assert (output_dir / "square_768x512.png").exists()
        assert not (output_dir / "broken_768x512.png").exists()

    def test_outpaint_missing_file(self, temp_dir):
        assert main(["outpaint", str(temp_dir / "missing.png"),
                     "-r", "768x512"]) == 5

    def test_outpaint_bad_resolution(self, test_image):
        assert main(["outpaint", str(test_image), "-r", "huge"]) == 5

    def test_outpaint_unknown_label(self, test_image):
        assert main(["outpaint", str(test_image), "-r", "7:3"]) == 1

    def test_outpaint_output_with_output_dir(self, test_image, temp_dir):
        assert main(["outpaint", str(test_image), "-r", "768x512",
                     "-o", str(temp_dir / "a.png"),
                     "--output-dir", str(temp_dir)]) == 5

    def test_outpaint_invalid_option(self, test_image, temp_dir):
        assert main(["outpaint", str(test_image), "-r", "768x512",
                     "--mask-background", "300",
                     "--output-dir", str(temp_dir)]) == 5

    def test_coerce(self, temp_dir):
        source = temp_dir / "photo.jpg"
        Image.new("RGB", (1000, 700), "white").save(source)
        output_dir = temp_dir / "aligned"
        assert main(["coerce", str(source), "--output-dir", str(output_dir)]
                    + CATALOG_ARGS) == 0

        outputs = list(output_dir.glob("photo_*.png"))
        assert len(outputs) == 1
        width, height = Image.open(outputs[0]).size
        assert width % 64 == 0 and height % 64 == 0
        assert outputs[0].name == f"photo_{width}x{height}.png"

    def test_config_file(self, monkeypatch, test_image, temp_dir):
        config_path = temp_dir / "config.yaml"
        config_path.write_text(yaml.dump({
            "catalog": {"max_pixels": 262144},
            "logging": {"level": "WARNING"},
        }))
        # Restored after the test
        monkeypatch.setenv("OUTPAINTER_CONFIG_PATH", "")
        assert main(["--config", str(config_path), "outpaint", str(test_image),
                     "-r", "1:1", "--output-dir", str(temp_dir / "out")]) == 0
        assert (temp_dir / "out" / "square_512x512.png").exists()

    def test_missing_config_file(self, temp_dir):
        assert main(["--config", str(temp_dir / "nope.yaml"), "aspects"]) == 5

    def test_invalid_config_file(self, monkeypatch, temp_dir):
        config_path = temp_dir / "config.yaml"
        config_path.write_text(yaml.dump({"outpaint": {"edge_offset": -3}}))
        monkeypatch.setenv("OUTPAINTER_CONFIG_PATH", "")
        assert main(["--config", str(config_path), "aspects"]) == 5

    def test_log_file(self, temp_dir, test_image):
        log_file = temp_dir / "run.log"
        assert main(["--log-file", str(log_file), "-v", "outpaint",
                     str(test_image), "-r", "768x512",
                     "--output-dir", str(temp_dir)]) == 0
        logging.getLogger("outpainter").handlers[-1].close()
        assert "Prepared center_horizontal outpaint" in log_file.read_text()
