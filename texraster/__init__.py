from .config import DEFAULT_PRECISION, PRECISIONS, resolve_precision
from .rasterizer import Vertex, sort_vertices, rasterize, rasterize_vertices, triangle_fragments
from .shaders import make_default_shader, sample_texel, draw_textured_triangle
from .surfaces import Texture, Surface

__version__ = "0.1.0"
