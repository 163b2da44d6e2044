"""Tests for ResizeEngine class."""

import pytest
from PIL import Image

from photoprep.errors import PhotoDecodeError
from photoprep.resize_engine import ResizeEngine, photo_dimension


class TestResizeEngine:
    """Tests for ResizeEngine class."""

    def test_init_defaults(self):
        engine = ResizeEngine()

        assert engine.resample == Image.Resampling.LANCZOS

    @pytest.mark.parametrize('size, width', [
        ((4000, 3000), 640),
        ((1000, 667), 300),
        ((333, 1000), 100),
        ((100, 50), 250),
    ])
    def test_aspect_ratio_preserved(self, size, width):
        """Height is round(H * T / W) within one pixel."""
        src = Image.new('RGB', size, color='blue')

        out = ResizeEngine().resize(src, width)

        expected = round(size[1] * width / size[0])
        assert out.width == width
        assert abs(out.height - expected) <= 1

    def test_resize_does_not_modify_source(self):
        src = Image.new('RGB', (200, 100))

        ResizeEngine().resize(src, 50)

        assert src.size == (200, 100)

    def test_resize_rejects_non_positive_width(self):
        with pytest.raises(ValueError):
            ResizeEngine().resize(Image.new('RGB', (10, 10)), 0)

    def test_extreme_aspect_ratio_keeps_one_pixel(self):
        out = ResizeEngine().resize(Image.new('RGB', (1000, 1)), 10)

        assert out.size == (10, 1)

    def test_open_jpeg(self, make_photo):
        path = make_photo('a.jpg', size=(30, 20))

        img = ResizeEngine().open(path)

        assert img.mode == 'RGB'
        assert img.size == (30, 20)

    def test_open_flattens_transparency(self, make_photo):
        path = make_photo('a.png', size=(10, 10), color=(255, 0, 0, 0), mode='RGBA')

        img = ResizeEngine().open(path)

        assert img.mode == 'RGB'
        assert img.getpixel((5, 5)) == (255, 255, 255)

    def test_open_palette(self, make_photo):
        path = make_photo('a.png', size=(10, 10), color=1, mode='P')

        assert ResizeEngine().open(path).mode == 'RGB'

    def test_open_corrupt(self, tmp_path, logger):
        path = tmp_path / 'bad.jpg'
        path.write_bytes(b'not an image')

        with pytest.raises(PhotoDecodeError) as excinfo:
            ResizeEngine(logger=logger).open(str(path))

        assert excinfo.value.path == str(path)

    def test_open_missing(self, tmp_path):
        with pytest.raises(PhotoDecodeError):
            ResizeEngine().open(str(tmp_path / 'missing.jpg'))

    def test_open_damaged_chunk(self, make_photo, break_decoding, logger):
        path = make_photo('a.png', size=(10, 10))
        break_decoding(path)

        with pytest.raises(PhotoDecodeError) as excinfo:
            ResizeEngine(logger=logger).open(path)

        assert isinstance(excinfo.value.__cause__, SyntaxError)

    def test_open_decompression_bomb(self, make_photo, monkeypatch):
        path = make_photo('big.png', size=(100, 100))
        monkeypatch.setattr(Image, 'MAX_IMAGE_PIXELS', 1000)

        with pytest.raises(PhotoDecodeError) as excinfo:
            ResizeEngine().open(path)

        assert isinstance(excinfo.value.__cause__, Image.DecompressionBombError)


class TestPhotoDimension:
    """Tests for photo_dimension()."""

    def test_dimension(self, make_photo):
        assert photo_dimension(make_photo('a.png', size=(64, 48))) == (64, 48)

    def test_dimension_unreadable(self, tmp_path, logger):
        path = tmp_path / 'bad.jpg'
        path.write_bytes(b'nope')

        assert photo_dimension(str(path), logger=logger) == (0, 0)

    def test_dimension_decompression_bomb(self, make_photo, monkeypatch, logger):
        path = make_photo('big.png', size=(100, 100))
        monkeypatch.setattr(Image, 'MAX_IMAGE_PIXELS', 1000)

        assert photo_dimension(path, logger=logger) == (0, 0)
