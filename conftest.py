"""Shared pytest fixtures for spread layout tests."""
import io
import random

import pytest
from PIL import Image

from models import GeometryConfig, Photo


@pytest.fixture
def config():
    """3000 x 2000 px landscape spread, 40 px gap, 100 px margin."""
    return GeometryConfig(page_width=3000, page_height=2000, gap=40, margin=100)


@pytest.fixture
def make_config():
    """Factory fixture: make_config(gap, margin=100) -> 3000 x 2000 px spread."""
    def _make(gap, margin=100):
        return GeometryConfig(page_width=3000, page_height=2000, gap=gap, margin=margin)
    return _make


@pytest.fixture
def make_photos():
    """Factory fixture: make_photos([ar, ...]) -> photos with ids p0, p1, ..."""
    def _make(aspects):
        return [Photo(id=f"p{i}", aspect_ratio=ar) for i, ar in enumerate(aspects)]
    return _make


@pytest.fixture
def mixed_photos(make_photos):
    """A typical mix of landscape, portrait and square photos."""
    return make_photos([1.5, 0.667, 1.0, 1.333, 0.75, 1.778, 0.5625, 1.5])


@pytest.fixture
def random_photos(make_photos):
    """Factory fixture: random_photos(n, seed) -> n photos with varied aspect ratios."""
    def _make(n, seed=0):
        rng = random.Random(seed)
        return make_photos([rng.choice([0.5625, 0.667, 0.75, 1.0, 1.333, 1.5, 1.778, 3.0])
                            for _ in range(n)])
    return _make


@pytest.fixture
def make_image_bytes():
    """Factory fixture: make_image_bytes(width, height, fmt, orientation) -> encoded bytes."""
    def _make(width, height, fmt='PNG', orientation=None):
        img = Image.new('RGB', (width, height), 'red')
        buf = io.BytesIO()
        if orientation is not None:
            exif = Image.Exif()
            exif[0x0112] = orientation
            img.save(buf, format=fmt, exif=exif)
        else:
            img.save(buf, format=fmt)
        return buf.getvalue()
    return _make


@pytest.fixture
def photo_dir(tmp_path, make_image_bytes):
    """A directory with two images, one rotated via EXIF, plus non-image clutter."""
    (tmp_path / 'b_landscape.png').write_bytes(make_image_bytes(300, 200))
    (tmp_path / 'a_rotated.jpg').write_bytes(make_image_bytes(400, 300, 'JPEG', orientation=6))
    (tmp_path / 'notes.txt').write_text('not a photo')
    (tmp_path / 'broken.jpg').write_bytes(b'not really a jpeg')
    return tmp_path
