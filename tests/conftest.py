import pytest
from PIL import Image


@pytest.fixture
def make_image(tmp_path):
    """Write an image to tmp_path and return its path."""
    def _make(size=(4, 4), color=(255, 255, 255), mode="RGB", name="img.png", pixels=None):
        img = Image.new(mode, size, color)
        if pixels:
            for (x, y), value in pixels.items():
                img.putpixel((x, y), value)
        path = tmp_path / name
        img.save(path)
        return path
    return _make
