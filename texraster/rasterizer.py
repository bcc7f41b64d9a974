import math
from typing import NamedTuple

import numpy as np
from numba import njit
from numba.typed import List

from .config import resolve_precision


class Vertex(NamedTuple):
    """Screen-space vertex with integer position and normalized texture coordinates."""
    x: int
    y: int
    u: float
    v: float


def sort_vertices(v0, v1, v2):
    """
    Order three vertices so that v0.y <= v2.y <= v1.y.

    The middle vertex ends up in slot 2 and the lowest one on screen in slot 1.
    The three compare-and-swap steps run in a fixed order and each one sees
    the result of the previous swap, so ties keep their relative order.
    """
    if v1.y < v0.y:
        v0, v1 = v1, v0
    if v2.y < v0.y:
        v0, v2 = v2, v0
    if v1.y < v2.y:
        v1, v2 = v2, v1
    return v0, v1, v2


@njit(cache=True)
def _scan_sorted(xi, yi, xf, yf, uf, vf):
    # xi/yi: integer positions, xf/yf/uf/vf: the same vertices in the
    # interpolation float type. Slot order is top, bottom, middle.
    x0 = xf[0]; x1 = xf[1]; x2 = xf[2]
    y0 = yi[0]; y1 = yi[1]; y2 = yi[2]
    u0 = uf[0]; u1 = uf[1]; u2 = uf[2]
    v0 = vf[0]; v1 = vf[1]; v2 = vf[2]

    # edge 0 -> 2
    dxdy1 = x2 - x0
    dudy1 = u2 - u0
    dvdy1 = v2 - v0
    if y2 - y0 != 0:
        dy = yf[2] - yf[0]
        dxdy1 /= dy
        dudy1 /= dy
        dvdy1 /= dy

    # edge 0 -> 1
    dxdy2 = x1 - x0
    dudy2 = u1 - u0
    dvdy2 = v1 - v0
    if y1 - y0 != 0:
        dy = yf[1] - yf[0]
        dxdy2 /= dy
        dudy2 /= dy
        dvdy2 /= dy

    # flat top: edge 0 -> 2 has no slope, its side follows x
    if y2 == y0:
        short_left = x2 < x0
    else:
        short_left = dxdy1 < dxdy2

    if short_left:
        dxl = dxdy1; dul = dudy1; dvl = dvdy1
        dxr = dxdy2; dur = dudy2; dvr = dvdy2
    else:
        dxl = dxdy2; dul = dudy2; dvl = dvdy2
        dxr = dxdy1; dur = dudy1; dvr = dvdy1

    sdx = x0; sdu = u0; sdv = v0
    edx = x0; edu = u0; edv = v0

    frags = List()
    y_start = y0
    y_stop = y2
    for half in range(2):
        if half == 1:
            # edge 2 -> 1 takes over the side that followed edge 0 -> 2
            bdx = x1 - x2
            bdu = u1 - u2
            bdv = v1 - v2
            if y1 - y2 != 0:
                dy = yf[1] - yf[2]
                bdx /= dy
                bdu /= dy
                bdv /= dy
            if short_left:
                dxl = bdx; dul = bdu; dvl = bdv
                sdx = x2; sdu = u2; sdv = v2
            else:
                dxr = bdx; dur = bdu; dvr = bdv
                edx = x2; edu = u2; edv = v2

            if y0 == y1:
                # single row: span the outermost vertices
                sdx = x0; sdu = u0; sdv = v0
                edx = x0; edu = u0; edv = v0
                if x1 < sdx:
                    sdx = x1; sdu = u1; sdv = v1
                if x2 < sdx:
                    sdx = x2; sdu = u2; sdv = v2
                if x1 > edx:
                    edx = x1; edu = u1; edv = v1
                if x2 > edx:
                    edx = x2; edu = u2; edv = v2
            elif y1 == y2:
                # flat bottom: land the other side on vertex 1 instead of accumulating to it
                if short_left:
                    edx = x1; edu = u1; edv = v1
                else:
                    sdx = x1; sdu = u1; sdv = v1
            y_start = y2
            y_stop = y1 + 1

        for y in range(y_start, y_stop):
            du = edu - sdu
            dv = edv - sdv
            if edx - sdx != 0:
                du /= edx - sdx
                dv /= edx - sdx

            pu = sdu
            pv = sdv
            for x in range(math.floor(sdx), math.floor(edx) + 1):
                frags.append((x, y, pu, pv))
                pu += du
                pv += dv

            sdx += dxl; sdu += dul; sdv += dvl
            edx += dxr; edu += dur; edv += dvr

    return frags


def _kernel_inputs(v0, v1, v2, precision=None):
    """Sort the vertices and pack them into the arrays _scan_sorted expects."""
    ftype = resolve_precision(precision)
    v0, v1, v2 = sort_vertices(Vertex(*v0), Vertex(*v1), Vertex(*v2))
    xi = np.array((v0.x, v1.x, v2.x), dtype=np.int64)
    yi = np.array((v0.y, v1.y, v2.y), dtype=np.int64)
    uf = np.array((v0.u, v1.u, v2.u), dtype=ftype)
    vf = np.array((v0.v, v1.v, v2.v), dtype=ftype)
    return xi, yi, xi.astype(ftype), yi.astype(ftype), uf, vf


def triangle_fragments(v0, v1, v2, precision=None):
    """
    Return the (x, y, u, v) fragments of a triangle in shader call order.

    Rows run top to bottom, x runs left to right within a row. Each vertex
    is a Vertex or any (x, y, u, v) sequence.
    """
    return list(_scan_sorted(*_kernel_inputs(v0, v1, v2, precision)))


def rasterize_vertices(shader, v0, v1, v2, precision=None):
    """Fill a triangle given as three vertices, calling shader(x, y, u, v) per pixel."""
    # the kernel collects every fragment first, the Python shader is replayed over them in order
    for x, y, u, v in _scan_sorted(*_kernel_inputs(v0, v1, v2, precision)):
        shader(x, y, u, v)


def rasterize(shader, x0, y0, x1, y1, x2, y2, u0, v0, u1, v1, u2, v2, precision=None):
    """
    Scanline-fill a textured triangle.

    Positions are integer screen coordinates, u/v are normalized texture
    coordinates interpolated affinely in screen space. The shader is called
    synchronously once per covered pixel; degenerate triangles produce a
    single row, a single pixel or nothing, never an error.
    """
    rasterize_vertices(
        shader,
        Vertex(x0, y0, u0, v0),
        Vertex(x1, y1, u1, v1),
        Vertex(x2, y2, u2, v2),
        precision=precision,
    )
