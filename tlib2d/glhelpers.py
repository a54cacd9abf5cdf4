"""Graphics API enumerations, debug message helpers and shader templating."""

from __future__ import annotations

import logging
from enum import Enum, IntEnum
from typing import Optional

gl_log = logging.getLogger("GL")

GL_DEBUG_SOURCE_API = 0x8246
GL_DEBUG_SOURCE_WINDOW_SYSTEM = 0x8247
GL_DEBUG_SOURCE_SHADER_COMPILER = 0x8248
GL_DEBUG_SOURCE_THIRD_PARTY = 0x8249
GL_DEBUG_SOURCE_APPLICATION = 0x824A
GL_DEBUG_SOURCE_OTHER = 0x824B

GL_DEBUG_TYPE_ERROR = 0x824C
GL_DEBUG_TYPE_DEPRECATED_BEHAVIOR = 0x824D
GL_DEBUG_TYPE_UNDEFINED_BEHAVIOR = 0x824E
GL_DEBUG_TYPE_PORTABILITY = 0x824F
GL_DEBUG_TYPE_PERFORMANCE = 0x8250
GL_DEBUG_TYPE_OTHER = 0x8251
GL_DEBUG_TYPE_MARKER = 0x8268
GL_DEBUG_TYPE_PUSH_GROUP = 0x8269
GL_DEBUG_TYPE_POP_GROUP = 0x826A

GL_DEBUG_SEVERITY_HIGH = 0x9146
GL_DEBUG_SEVERITY_MEDIUM = 0x9147
GL_DEBUG_SEVERITY_LOW = 0x9148
GL_DEBUG_SEVERITY_NOTIFICATION = 0x826B


class GLType(IntEnum):
    UNKNOWN = -1
    BOOL = 0x8B56
    BYTE = 0x1400
    UBYTE = 0x1401
    SHORT = 0x1402
    USHORT = 0x1403
    INT = 0x1404
    UINT = 0x1405
    FLOAT = 0x1406
    HFLOAT = 0x140B
    DOUBLE = 0x140A
    FIXED = 0x140C


class GLDrawMode(IntEnum):
    POINTS = 0x0000
    LINES = 0x0001
    LINE_LOOP = 0x0002
    LINE_STRIP = 0x0003
    TRIANGLES = 0x0004
    TRIANGLE_STRIP = 0x0005
    TRIANGLE_FAN = 0x0006
    LINES_ADJACENCY = 0x000A
    LINE_STRIP_ADJACENCY = 0x000B
    TRIANGLES_ADJACENCY = 0x000C
    TRIANGLE_STRIP_ADJACENCY = 0x000D
    PATCHES = 0x000E


class GLBlendMode(IntEnum):
    ZERO = 0
    ONE = 1
    SRC_COLOR = 0x0300
    ONE_MINUS_SRC_COLOR = 0x0301
    SRC_ALPHA = 0x0302
    ONE_MINUS_SRC_ALPHA = 0x0303
    DST_ALPHA = 0x0304
    ONE_MINUS_DST_ALPHA = 0x0305
    DST_COLOR = 0x0306
    ONE_MINUS_DST_COLOR = 0x0307
    CONSTANT_COLOR = 0x8001
    ONE_MINUS_CONSTANT_COLOR = 0x8002
    CONSTANT_ALPHA = 0x8003
    ONE_MINUS_CONSTANT_ALPHA = 0x8004


class VSyncMode(IntEnum):
    DISABLED = 0
    ENABLED = 1
    ADAPTIVE = -1


class FaceCullMode(Enum):
    NONE = 0
    FRONT = 1
    BACK = 2
    BOTH = 3


_TYPE_SIZES = {
    GLType.BOOL: 1,
    GLType.BYTE: 1,
    GLType.UBYTE: 1,
    GLType.SHORT: 2,
    GLType.USHORT: 2,
    GLType.INT: 4,
    GLType.UINT: 4,
    GLType.FLOAT: 4,
    GLType.HFLOAT: 2,
    GLType.DOUBLE: 8,
    GLType.FIXED: 4,
}

_DEBUG_TYPE_TEXT = {
    GL_DEBUG_TYPE_ERROR: "GL_DEBUG_TYPE_ERROR - An error, typically from the API",
    GL_DEBUG_TYPE_DEPRECATED_BEHAVIOR: "GL_DEBUG_TYPE_DEPRECATED_BEHAVIOR - Some behavior marked deprecated has been used",
    GL_DEBUG_TYPE_UNDEFINED_BEHAVIOR: "GL_DEBUG_TYPE_UNDEFINED_BEHAVIOR - Something has invoked undefined behavior",
    GL_DEBUG_TYPE_PORTABILITY: "GL_DEBUG_TYPE_PORTABILITY - Some functionality the user relies upon is not portable",
    GL_DEBUG_TYPE_PERFORMANCE: "GL_DEBUG_TYPE_PERFORMANCE - Code has triggered possible performance issues",
    GL_DEBUG_TYPE_MARKER: "GL_DEBUG_TYPE_MARKER - Command stream annotation",
    GL_DEBUG_TYPE_PUSH_GROUP: "GL_DEBUG_TYPE_PUSH_GROUP - Group pushing",
    GL_DEBUG_TYPE_POP_GROUP: "GL_DEBUG_TYPE_POP_GROUP - Group popping",
    GL_DEBUG_TYPE_OTHER: "GL_DEBUG_TYPE_OTHER",
}

_DEBUG_SOURCE_TEXT = {
    GL_DEBUG_SOURCE_API: "GL_DEBUG_SOURCE_API - Calls to the OpenGL API",
    GL_DEBUG_SOURCE_WINDOW_SYSTEM: "GL_DEBUG_SOURCE_WINDOW_SYSTEM - Calls to a window-system API",
    GL_DEBUG_SOURCE_SHADER_COMPILER: "GL_DEBUG_SOURCE_SHADER_COMPILER - A compiler for a shading language",
    GL_DEBUG_SOURCE_THIRD_PARTY: "GL_DEBUG_SOURCE_THIRD_PARTY - An application associated with OpenGL",
    GL_DEBUG_SOURCE_APPLICATION: "GL_DEBUG_SOURCE_APPLICATION - Generated by the user of this application",
    GL_DEBUG_SOURCE_OTHER: "GL_DEBUG_SOURCE_OTHER",
}

_SEVERITY_LEVEL = {
    GL_DEBUG_SEVERITY_LOW: logging.WARNING,
    GL_DEBUG_SEVERITY_MEDIUM: logging.ERROR,
    GL_DEBUG_SEVERITY_HIGH: logging.CRITICAL,
}


def gl_type_size(gl_type: GLType) -> int:
    """Size in bytes of one value of ``gl_type``; 0 for unknown types."""
    return _TYPE_SIZES.get(gl_type, 0)


def error_type_to_str(type_: int) -> str:
    return _DEBUG_TYPE_TEXT.get(type_, "Unknown")


def error_source_to_str(source: int) -> str:
    return _DEBUG_SOURCE_TEXT.get(source, "Unknown")


def gl_debug_callback(
    source: int, type_: int, id_: int, severity: int, message: str
) -> Optional[str]:
    """Log a driver debug message; returns the logged text, or None if not logged."""
    level = _SEVERITY_LEVEL.get(severity)
    if level is None:
        return None
    text = (
        f"\nSource:  {error_source_to_str(source)}"
        f"\nType:    {error_type_to_str(type_)},"
        f"\nMessage: {message}"
    )
    gl_log.log(level, text)
    return text


def format_shader(text: str, *args: object) -> str:
    """Fill backtick pairs in shader source with ``args``; braces stay literal."""
    text = text.replace("{", "{{").replace("}", "}}")
    while "`" in text:
        text = text.replace("`", "{", 1)
        text = text.replace("`", "}", 1)
    return text.format(*args)