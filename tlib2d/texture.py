"""CPU-side textures: RGBA8 pixel storage, sampling settings and image file I/O."""

from __future__ import annotations

import itertools
import logging
import os
import struct
from enum import Enum, IntEnum
from pathlib import Path
from typing import Optional, Tuple, Union

from PIL import Image

from tlib2d.geometry import Rect

log = logging.getLogger(__name__)

PathLike = Union[str, "os.PathLike[str]"]

GL_NEAREST = 0x2600
GL_LINEAR = 0x2601

_handles = itertools.count(1)


class TextureMinFilter(IntEnum):
    NEAREST = GL_NEAREST
    LINEAR = GL_LINEAR
    NEAREST_MIPMAP_NEAREST = 0x2700
    LINEAR_MIPMAP_NEAREST = 0x2701
    NEAREST_MIPMAP_LINEAR = 0x2702
    LINEAR_MIPMAP_LINEAR = 0x2703


class TextureMagFilter(IntEnum):
    NEAREST = GL_NEAREST
    LINEAR = GL_LINEAR


class TextureFiltering(Enum):
    """Simple filtering choice applied to both minification and magnification."""

    NEAREST = 0
    LINEAR = 1


class TexInternalFormat(IntEnum):
    UNKNOWN = -1
    DEPTH_COMPONENT = 0x1902
    DEPTH_STENCIL = 0x84F9
    RED = 0x1903
    RG = 0x8227
    RGB = 0x1907
    RGBA = 0x1908
    RGBA32F = 0x8814
    RGBA16F = 0x881A
    RGBA8 = 0x8058


class TexPixelFormat(IntEnum):
    UNKNOWN = -1
    RED = 0x1903
    RG = 0x8227
    RGB = 0x1907
    BGR = 0x80E0
    RGBA = 0x1908
    BGRA = 0x80E1
    RED_INTEGER = 0x8D94
    RG_INTEGER = 0x8228
    RGB_INTEGER = 0x8D98
    BGR_INTEGER = 0x8D9A
    RGBA_INTEGER = 0x8D99
    BGRA_INTEGER = 0x8D9B
    STENCIL_INDEX = 0x1901
    DEPTH_COMPONENT = 0x1902
    DEPTH_STENCIL = 0x84F9


class TexPixelType(IntEnum):
    UNSIGNED_BYTE = 0x1401
    UINT_8888_REV = 0x8367
    FLOAT = 0x1406


class UVMode(IntEnum):
    UNKNOWN = -1
    REPEAT = 0x2901
    MIRRORED_REPEAT = 0x8370
    CLAMP_TO_EDGE = 0x812F
    MIRRORED_CLAMP_TO_EDGE = 0x8743
    CLAMP_TO_BORDER = 0x812D


_FORMAT_SIZES = {
    TexInternalFormat.RED: 1,
    TexInternalFormat.RG: 2,
    TexInternalFormat.RGB: 3,
    TexInternalFormat.RGBA: 4,
}

# Channel count and, for each of R, G, B, A, the source channel (None: default).
_LAYOUTS = {
    TexPixelFormat.RED: (1, (0, None, None, None)),
    TexPixelFormat.RED_INTEGER: (1, (0, None, None, None)),
    TexPixelFormat.RG: (2, (0, 1, None, None)),
    TexPixelFormat.RG_INTEGER: (2, (0, 1, None, None)),
    TexPixelFormat.RGB: (3, (0, 1, 2, None)),
    TexPixelFormat.RGB_INTEGER: (3, (0, 1, 2, None)),
    TexPixelFormat.BGR: (3, (2, 1, 0, None)),
    TexPixelFormat.BGR_INTEGER: (3, (2, 1, 0, None)),
    TexPixelFormat.RGBA: (4, (0, 1, 2, 3)),
    TexPixelFormat.RGBA_INTEGER: (4, (0, 1, 2, 3)),
    TexPixelFormat.BGRA: (4, (2, 1, 0, 3)),
    TexPixelFormat.BGRA_INTEGER: (4, (2, 1, 0, 3)),
}
_DEFAULT_CHANNELS = (0, 0, 0, 255)

FALLBACK_IMAGE = bytes(
    [255, 0, 255, 255, 0, 0, 0, 255,
     0, 0, 0, 255, 255, 0, 255, 255]
)


def format_size(fmt: TexInternalFormat) -> int:
    """Number of channels of a base internal format."""
    try:
        return _FORMAT_SIZES[fmt]
    except KeyError:
        raise ValueError(f"no channel count for format {fmt!r}") from None


def to_gl_flag(filtering: TextureFiltering) -> int:
    """The graphics-API filter constant for a :class:`TextureFiltering`."""
    return GL_NEAREST if filtering is TextureFiltering.NEAREST else GL_LINEAR


def _float_to_byte(value: float) -> int:
    return round(min(max(value, 0.0), 1.0) * 255)


def _to_rgba(
    data: bytes,
    width: int,
    height: int,
    pixel_format: TexPixelFormat,
    pixel_type: TexPixelType,
) -> bytearray:
    layout = _LAYOUTS.get(pixel_format)
    if layout is None:
        raise ValueError(f"unsupported pixel format {pixel_format!r}")
    channels, order = layout
    count = width * height * channels
    raw = bytes(data)

    if pixel_type is TexPixelType.FLOAT:
        if len(raw) != count * 4:
            raise ValueError(f"expected {count * 4} bytes of float data, got {len(raw)}")
        values = [_float_to_byte(v) for v in struct.unpack(f"<{count}f", raw)]
    else:
        if pixel_type is TexPixelType.UINT_8888_REV and channels != 4:
            raise ValueError("packed 8888 pixels need a four-channel format")
        if len(raw) != count:
            raise ValueError(f"expected {count} bytes of pixel data, got {len(raw)}")
        values = list(raw)

    out = bytearray()
    for pixel in zip(*[iter(values)] * channels):
        out.extend(
            pixel[src] if src is not None else default
            for src, default in zip(order, _DEFAULT_CHANNELS)
        )
    return out


class Texture:
    """An image held as RGBA8 pixels together with its sampling settings."""

    default_filtering = TextureFiltering.LINEAR
    default_format = TexPixelFormat.RGBA
    default_internal_format = TexInternalFormat.RGBA
    default_uv_mode = UVMode.CLAMP_TO_EDGE

    def __init__(self, path: Optional[PathLike] = None) -> None:
        self.handle = 0
        self.width = 0
        self.height = 0
        self.internal_format = TexInternalFormat.UNKNOWN
        self.path: Optional[Path] = None
        self.min_filter = TextureMinFilter.LINEAR
        self.mag_filter = TextureMagFilter.LINEAR
        self.uv_mode: Tuple[UVMode, UVMode] = (UVMode.UNKNOWN, UVMode.UNKNOWN)
        self._pixels = bytearray()
        if path is not None:
            self.load_from_file(path)

    def __str__(self) -> str:
        path = str(self.path) if self.path is not None else ""
        return (
            f"Handle: {self.handle}, Width: {self.width}, "
            f"Height: {self.height}, Path: {path}"
        )

    def create(self) -> None:
        if not self.created():
            self.handle = next(_handles)

    def created(self) -> bool:
        return self.handle != 0

    def reset(self) -> None:
        """Release the texture: handle, size, format and pixels are cleared."""
        if not self.created():
            return
        self.handle = 0
        self.width = 0
        self.height = 0
        self.internal_format = TexInternalFormat.UNKNOWN
        self._pixels = bytearray()

    def valid(self) -> bool:
        return (
            self.width > 0
            and self.height > 0
            and self.handle > 0
            and self.internal_format is not TexInternalFormat.UNKNOWN
        )

    @property
    def pixels(self) -> bytes:
        """The pixel data, RGBA8, row by row from the top."""
        return bytes(self._pixels)

    def pixel(self, x: int, y: int) -> Tuple[int, int, int, int]:
        if not (0 <= x < self.width and 0 <= y < self.height):
            raise IndexError(f"pixel ({x}, {y}) is outside a {self.width}x{self.height} texture")
        i = (y * self.width + x) * 4
        r, g, b, a = self._pixels[i : i + 4]
        return (r, g, b, a)

    def load_from_file(self, path: PathLike) -> bool:
        """Load an image file; on failure load the fallback image and return False."""
        self.create()
        try:
            with Image.open(path) as img:
                rgba = img.convert("RGBA")
                data = rgba.tobytes()
                width, height = rgba.size
        except (OSError, ValueError) as exc:
            log.error("Failed to load image from path ('%s')", path)
            log.error("\tReason: %s", exc)
            log.error("\tWorking directory: %s", os.getcwd())
            self.load_fallback_texture()
            return False
        self.path = Path(path)
        self.set_data(data, width, height)
        return True

    def write_to_file(self, path: PathLike) -> bool:
        """Save the texture as a PNG image."""
        if not self.created():
            raise RuntimeError("texture has not been created")
        if self.width <= 0 or self.height <= 0:
            raise ValueError("cannot write an empty texture")
        image = Image.frombytes("RGBA", (self.width, self.height), bytes(self._pixels))
        image.save(path, format="PNG")
        return True

    def set_data(
        self,
        data: Optional[bytes],
        width: int,
        height: int,
        pixel_format: TexPixelFormat = TexPixelFormat.RGBA,
        internal_format: TexInternalFormat = TexInternalFormat.RGBA,
        pixel_type: TexPixelType = TexPixelType.UNSIGNED_BYTE,
    ) -> None:
        """Replace the whole image; ``data`` None leaves it zero-filled."""
        if width < 0 or height < 0:
            raise ValueError(f"invalid texture size {width}x{height}")
        self.create()
        if data is None:
            pixels = bytearray(width * height * 4)
        else:
            pixels = _to_rgba(data, width, height, pixel_format, pixel_type)
        self.width = width
        self.height = height
        self.internal_format = internal_format
        self._pixels = pixels
        self.set_filter(self.default_filtering)
        self.set_uv_mode(self.default_uv_mode)

    def set_sub_data(
        self,
        data: bytes,
        width: int,
        height: int,
        xoffset: int,
        yoffset: int,
        pixel_format: TexPixelFormat = TexPixelFormat.RGBA,
    ) -> None:
        """Overwrite a ``width`` x ``height`` block at (``xoffset``, ``yoffset``)."""
        if not self.created():
            raise RuntimeError("texture has not been created")
        if (
            xoffset < 0
            or yoffset < 0
            or width < 0
            or height < 0
            or xoffset + width > self.width
            or yoffset + height > self.height
        ):
            raise ValueError(
                f"block {width}x{height} at ({xoffset}, {yoffset}) does not fit "
                f"a {self.width}x{self.height} texture"
            )
        block = _to_rgba(data, width, height, pixel_format, TexPixelType.UNSIGNED_BYTE)
        row_bytes = width * 4
        for row in range(height):
            dst = ((yoffset + row) * self.width + xoffset) * 4
            self._pixels[dst : dst + row_bytes] = block[row * row_bytes : (row + 1) * row_bytes]

    def size(self) -> Tuple[int, int]:
        return (self.width, self.height)

    def is_from_same_path(self, other: Union["Texture", PathLike]) -> bool:
        """True if this texture was loaded from the same file as ``other``."""
        other_path = other.path if isinstance(other, Texture) else other
        if self.path is None or other_path is None:
            return False
        return os.path.samefile(self.path, other_path)

    def set_uv_mode(self, u: UVMode, v: Optional[UVMode] = None) -> None:
        self.uv_mode = (u, u if v is None else v)

    def set_filter(
        self,
        min_filter: Union[TextureMinFilter, TextureFiltering],
        mag_filter: Union[TextureMagFilter, TextureFiltering, None] = None,
    ) -> None:
        """Set the filters; a single :class:`TextureFiltering` sets both."""
        if mag_filter is None:
            mag_filter = min_filter
        if isinstance(min_filter, TextureFiltering):
            min_filter = TextureMinFilter(to_gl_flag(min_filter))
        if isinstance(mag_filter, TextureFiltering):
            mag_filter = TextureMagFilter(to_gl_flag(mag_filter))
        self.min_filter = TextureMinFilter(min_filter)
        self.mag_filter = TextureMagFilter(mag_filter)

    def load_fallback_texture(self) -> None:
        """Load a 2x2 magenta and black checker with nearest filtering."""
        self.set_data(FALLBACK_IMAGE, 2, 2)
        self.set_filter(TextureFiltering.NEAREST)


class SubTexture:
    """A rectangle of a texture, such as one image in an atlas."""

    def __init__(self, texture: Texture, rect: Optional[Rect] = None) -> None:
        self.texture = texture
        if rect is None:
            width, height = texture.size()
            rect = Rect(0.0, 0.0, float(width), float(height))
        self.rect = rect

    def __repr__(self) -> str:
        return f"SubTexture(texture={self.texture}, rect={self.rect!r})"