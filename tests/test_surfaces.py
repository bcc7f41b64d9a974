import numpy as np
import pytest
from PIL import Image

from texraster import Surface, Texture


def test_grayscale_array_gets_one_channel():
    tex = Texture(np.arange(6, dtype=np.uint8).reshape(2, 3))
    assert (tex.width, tex.height, tex.channels) == (3, 2, 1)
    assert tex.bounds() == (2, 1)
    assert tex.at(2, 1)[0] == 5


def test_bad_rank_rejected():
    with pytest.raises(ValueError):
        Texture(np.zeros(5))
    with pytest.raises(ValueError):
        Surface(np.zeros((2, 2, 2, 2)))


def test_reads_outside_return_zero_color():
    tex = Texture(np.full((2, 2, 3), 7, dtype=np.uint8))
    for x, y in [(-1, 0), (0, -1), (2, 0), (0, 2)]:
        np.testing.assert_array_equal(tex.at(x, y), [0, 0, 0])
    np.testing.assert_array_equal(tex.at(1, 1), [7, 7, 7])


def test_surface_set_and_clear():
    surf = Surface.blank(3, 2)
    assert surf.pixels.shape == (2, 3, 3)
    surf.set(2, 1, (1, 2, 3))
    surf.set(3, 1, (9, 9, 9))
    surf.set(-1, 0, (9, 9, 9))
    np.testing.assert_array_equal(surf.at(2, 1), [1, 2, 3])
    assert surf.pixels.sum() == 6
    surf.clear()
    assert not surf.pixels.any()


def test_surface_writes_through_to_wrapped_array():
    frame = np.zeros((4, 4, 3), dtype=np.uint8)
    surf = Surface(frame)
    surf.set(1, 2, (10, 20, 30))
    np.testing.assert_array_equal(frame[2, 1], [10, 20, 30])


def test_from_image_rgb():
    image = Image.new("RGB", (4, 2), (255, 0, 0))
    tex = Texture.from_image(image)
    assert (tex.width, tex.height, tex.channels) == (4, 2, 3)
    np.testing.assert_array_equal(tex.at(3, 1), [255, 0, 0])


def test_from_image_converts_palette_mode():
    image = Image.new("P", (2, 2))
    tex = Texture.from_image(image)
    assert tex.channels == 4


def test_to_image_round_trips_mode_and_size():
    gray = Surface.from_image(Image.new("L", (5, 3), 128))
    assert gray.channels == 1
    out = gray.to_image()
    assert out.mode == "L"
    assert out.size == (5, 3)

    rgb = Surface.blank(6, 4).to_image()
    assert rgb.mode == "RGB"
    assert rgb.size == (6, 4)
