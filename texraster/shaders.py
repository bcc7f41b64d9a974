import numpy as np
from numba import njit

from .config import OUTSIDE_COLOR
from .rasterizer import _kernel_inputs, _scan_sorted


@njit(cache=True)
def _texel(u, v, max_x, max_y, scale_x, scale_y):
    # truncate, then clamp upper bound first: an empty texture (max -1) stays at -1
    tx = int(np.float32(u) * scale_x)
    ty = int(np.float32(v) * scale_y)

    if tx > max_x:
        tx = max_x
    elif tx < 0:
        tx = 0

    if ty > max_y:
        ty = max_y
    elif ty < 0:
        ty = 0

    return tx, ty


def sample_texel(texture, u, v):
    """Return the clamped integer texel (tx, ty) that (u, v) maps to on texture."""
    max_x, max_y = texture.bounds()
    return _texel(u, v, max_x, max_y, np.float32(max_x), np.float32(max_y))


def make_default_shader(target, texture):
    """
    Build a pixel shader that copies texels of texture into target.

    (u, v) is scaled by the texture bounds in single precision, truncated
    and clamped, so coordinates outside [0, 1] smear the border texels.
    The shader writes exactly the (x, y) it is called with and leaves
    bounds handling of those to target.
    """
    max_x, max_y = texture.bounds()
    scale_x = np.float32(max_x)
    scale_y = np.float32(max_y)

    def shader(x, y, u, v):
        tx, ty = _texel(u, v, max_x, max_y, scale_x, scale_y)
        target.set(x, y, texture.at(tx, ty))

    return shader


@njit(cache=True)
def _draw_textured(frame, tex, scale, xi, yi, xf, yf, uf, vf):
    height, width = frame.shape[0], frame.shape[1]
    max_x = tex.shape[1] - 1
    max_y = tex.shape[0] - 1
    for x, y, u, v in _scan_sorted(xi, yi, xf, yf, uf, vf):
        if x < 0 or x >= width or y < 0 or y >= height:
            continue
        tx, ty = _texel(u, v, max_x, max_y, scale[0], scale[1])
        if tx < 0 or ty < 0:
            frame[y, x, :] = OUTSIDE_COLOR
        else:
            frame[y, x, :] = tex[ty, tx, :]


def draw_textured_triangle(target, texture, v0, v1, v2, precision=None):
    """
    Texture-map a triangle straight into target's pixel array.

    Produces the same pixels as rasterize_vertices with make_default_shader,
    but the whole fragment loop runs compiled. target is a Surface, texture
    a Texture with the same channel count.
    """
    if target.channels != texture.channels:
        raise ValueError(
            f"channel mismatch: target has {target.channels}, texture has {texture.channels}"
        )
    scale = np.array(texture.bounds(), dtype=np.float32)
    _draw_textured(target.pixels, texture.pixels, scale, *_kernel_inputs(v0, v1, v2, precision))
