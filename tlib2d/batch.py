"""Collects 2D draw commands and merges them into as few draw batches as possible."""

from __future__ import annotations

import itertools
import math
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Sequence, Tuple

from tlib2d.geometry import Rect, Vec2
from tlib2d.glhelpers import GLDrawMode
from tlib2d.rendertarget import View
from tlib2d.texture import Texture

Color = Tuple[float, float, float, float]
VertexData = Tuple[float, float, float, float]

WHITE: Color = (1.0, 1.0, 1.0, 1.0)

DEFAULT_SPRITE_LAYER = 0
DEFAULT_PRIMITIVE_LAYER = 1
DEFAULT_TEXT_LAYER = 2

RESTART_INDEX = 0xFFFFFFFF

SPRITE_INDICES: Tuple[int, ...] = (0, 2, 1, 1, 2, 3)

_shader_serials = itertools.count(1)


@dataclass
class Origin:
    """Pivot for rotation.

    ``pos`` None means the centre of the drawn rectangle. Otherwise it is
    relative to the rectangle's top-left corner, or in world coordinates
    when ``use_world_coords`` is set.
    """

    pos: Optional[Vec2] = None
    use_world_coords: bool = False


@dataclass(eq=False)
class Shader:
    """A named shader program and the uniform values set on it."""

    name: str = "default"
    uniforms: Dict[str, object] = field(default_factory=dict)
    serial: int = field(default_factory=lambda: next(_shader_serials), repr=False)


@dataclass(eq=False)
class DrawCmd:
    """One queued draw: its render state, colour and vertex data."""

    layer: int
    draw_mode: GLDrawMode
    texture: Texture
    shader: Shader
    color: Color
    vertices: List[VertexData] = field(default_factory=list)
    indices: List[int] = field(default_factory=list)

    def state(self) -> Tuple[Texture, Shader, GLDrawMode]:
        return (self.texture, self.shader, self.draw_mode)


@dataclass(eq=False)
class Batch:
    """Merged vertex data that is drawn with one texture, shader and draw mode.

    Each command's indices are followed by :data:`RESTART_INDEX`.
    """

    texture: Texture
    shader: Shader
    draw_mode: GLDrawMode
    positions: List[VertexData] = field(default_factory=list)
    colors: List[Color] = field(default_factory=list)
    indices: List[int] = field(default_factory=list)
    view: Optional[View] = None
    viewport: Optional[Rect] = None


def texture_uvs(texture: Texture, srcrect: Rect) -> Tuple[Vec2, Vec2]:
    """Texture coordinates of ``srcrect``: (top-left, bottom-right).

    The corners are pulled slightly inwards to avoid bleeding from
    neighbouring texels.
    """
    width, height = texture.size()
    if width <= 0 or height <= 0:
        raise ValueError("texture has no pixels to sample")
    uv_right = (srcrect.x + srcrect.width - 0.01) / width
    uv_bottom = (srcrect.y + srcrect.height - 0.01) / height
    uv_left = (srcrect.x + 0.02) / width
    uv_top = (srcrect.y + 0.02) / height
    return Vec2(uv_left, uv_top), Vec2(uv_right, uv_bottom)


def rotate_point(x: float, y: float, radians: float) -> Tuple[float, float]:
    """Rotate (x, y) about the origin by ``radians``."""
    s, c = math.sin(radians), math.cos(radians)
    return (x * c - y * s, x * s + y * c)


def default_origin(rect: Rect) -> Vec2:
    """The centre of ``rect``, used as pivot when no origin is given."""
    return Vec2(rect.x + rect.width / 2, rect.y + rect.height / 2)


def _resolve_origin(origin: Optional[Origin], rect: Rect) -> Vec2:
    if origin is None or origin.pos is None:
        return default_origin(rect)
    if origin.use_world_coords:
        return origin.pos
    return Vec2(rect.x, rect.y) + origin.pos


class DrawBatcher:
    """Queues sprites and primitives and turns them into batches on flush."""

    def __init__(self) -> None:
        self.white_texture = Texture()
        self.white_texture.set_data(bytes([255, 255, 255, 255]), 1, 1)
        self.default_shader = Shader("default")
        self.commands: List[DrawCmd] = []

    def __len__(self) -> int:
        return len(self.commands)

    def sprite_batch(
        self,
        texture: Texture,
        srcrect: Rect,
        dstrect: Rect,
        rotation: float = 0.0,
        color: Color = WHITE,
        layer: int = DEFAULT_SPRITE_LAYER,
        origin: Optional[Origin] = None,
        flip_uv_x: bool = False,
        flip_uv_y: bool = False,
        shader: Optional[Shader] = None,
    ) -> DrawCmd:
        """Queue the ``srcrect`` part of ``texture`` drawn into ``dstrect``.

        ``rotation`` is in radians, about ``origin``.
        """
        top_left, bottom_right = texture_uvs(texture, srcrect)
        u0, v0 = top_left.x, top_left.y
        u1, v1 = bottom_right.x, bottom_right.y
        if flip_uv_x:
            u0, u1 = u1, u0
        if flip_uv_y:
            v0, v1 = v1, v0

        right = dstrect.x + dstrect.width
        bottom = dstrect.y + dstrect.height
        corners = [
            (dstrect.x, dstrect.y, u0, v0),
            (right, dstrect.y, u1, v0),
            (dstrect.x, bottom, u0, v1),
            (right, bottom, u1, v1),
        ]

        if rotation != 0:
            pivot = _resolve_origin(origin, dstrect)
            rotated = []
            for x, y, u, v in corners:
                rx, ry = rotate_point(x - pivot.x, y - pivot.y, rotation)
                rotated.append((rx + pivot.x, ry + pivot.y, u, v))
            corners = rotated

        cmd = DrawCmd(
            layer=layer,
            draw_mode=GLDrawMode.TRIANGLES,
            texture=texture,
            shader=shader if shader is not None else self.default_shader,
            color=color,
            vertices=corners,
            indices=list(SPRITE_INDICES),
        )
        self.commands.append(cmd)
        return cmd

    def prim_batch(
        self,
        points: Sequence[Vec2],
        color: Color = WHITE,
        mode: GLDrawMode = GLDrawMode.LINE_STRIP,
        layer: int = DEFAULT_PRIMITIVE_LAYER,
    ) -> DrawCmd:
        """Queue an untextured primitive through ``points``."""
        if not points:
            raise ValueError("a primitive needs at least one point")
        cmd = DrawCmd(
            layer=layer,
            draw_mode=mode,
            texture=self.white_texture,
            shader=self.default_shader,
            color=color,
            vertices=[(p.x, p.y, 0.0, 0.0) for p in points],
            indices=list(range(len(points))),
        )
        self.commands.append(cmd)
        return cmd

    def flush(
        self,
        sort: bool = False,
        view: Optional[View] = None,
        viewport: Optional[Rect] = None,
    ) -> List[Batch]:
        """Merge the queued commands into batches and empty the queue.

        With ``sort``, commands are ordered by layer, shader, texture and
        draw mode first; otherwise they keep the order they were queued in.
        """
        if not self.commands:
            return []

        commands = self.commands
        if sort:
            commands = sorted(
                commands,
                key=lambda c: (c.layer, c.shader.serial, c.texture.handle, int(c.draw_mode)),
            )

        batches: List[Batch] = []
        current: Optional[Batch] = None
        for cmd in commands:
            if current is None or (current.texture, current.shader, current.draw_mode) != cmd.state():
                current = Batch(
                    texture=cmd.texture,
                    shader=cmd.shader,
                    draw_mode=cmd.draw_mode,
                    view=view,
                    viewport=viewport,
                )
                batches.append(current)
            offset = len(current.positions)
            current.indices.extend(offset + i for i in cmd.indices)
            current.indices.append(RESTART_INDEX)
            current.positions.extend(cmd.vertices)
            current.colors.extend([cmd.color] * len(cmd.vertices))

        self.commands = []
        return batches