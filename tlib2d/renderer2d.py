"""Immediate-style 2D drawing front end that queues sprites and shapes into batches."""

from __future__ import annotations

import math
from typing import List, Optional, Sequence, Tuple, Union

from tlib2d.batch import (
    DEFAULT_PRIMITIVE_LAYER,
    DEFAULT_SPRITE_LAYER,
    WHITE,
    Batch,
    Color,
    DrawBatcher,
    DrawCmd,
    Origin,
    Shader,
    default_origin,
)
from tlib2d.geometry import Rect, Vec2
from tlib2d.glhelpers import GLDrawMode
from tlib2d.rendertarget import RenderTarget, View, viewport_size_pixels
from tlib2d.texture import SubTexture, Texture

TextureSource = Union[Texture, SubTexture]


def _pivot(origin: Optional[Origin], rect: Rect) -> Vec2:
    if origin is None or origin.pos is None:
        return default_origin(rect)
    if origin.use_world_coords:
        return origin.pos
    return Vec2(rect.x, rect.y) + origin.pos


def _full_rect(texture: Texture) -> Rect:
    width, height = texture.size()
    return Rect(0.0, 0.0, float(width), float(height))


class Renderer2D:
    """Queues textured quads and primitives, then hands them out as batches.

    ``framebuffer_size`` is the size of the default drawing surface; it is
    used whenever no render target is bound.
    """

    def __init__(self, framebuffer_size: Tuple[int, int] = (1280, 720)) -> None:
        self.framebuffer_size = tuple(framebuffer_size)
        self.batcher = DrawBatcher()
        self.view = self.default_camera()

    @property
    def commands(self) -> List[DrawCmd]:
        """Draw commands queued since the last render."""
        return self.batcher.commands

    def render(self, sort: bool = False, ignore_camera: bool = False) -> List[Batch]:
        """Turn the queued commands into batches and clear the queue.

        With ``sort`` commands are ordered by layer first. With
        ``ignore_camera`` the default camera is used for this render only.
        """
        if ignore_camera:
            old_view = self.view
            self.reset_view()
            try:
                return self._flush(sort)
            finally:
                self.view = old_view
        return self._flush(sort)

    def _flush(self, sort: bool) -> List[Batch]:
        bound = RenderTarget.bound()
        target_size = bound.size() if bound is not None else self.framebuffer_size
        viewport = viewport_size_pixels(self.view, target_size)
        return self.batcher.flush(sort, self.view, viewport)

    def reset_view(self) -> None:
        self.view = self.default_camera()

    def default_camera(self) -> View:
        """A view that covers the framebuffer one world unit per pixel."""
        size = Vec2(float(self.framebuffer_size[0]), float(self.framebuffer_size[1]))
        return View(center=size / 2.0, size=size)

    def draw_texture(
        self,
        texture: TextureSource,
        dstrect: Rect,
        srcrect: Optional[Rect] = None,
        rotation: float = 0.0,
        color: Color = WHITE,
        layer: int = DEFAULT_SPRITE_LAYER,
        origin: Optional[Origin] = None,
        flip_uv_x: bool = False,
        flip_uv_y: bool = False,
        shader: Optional[Shader] = None,
    ) -> DrawCmd:
        """Draw ``srcrect`` of a texture (all of it by default) into ``dstrect``.

        ``rotation`` is in radians.
        """
        if isinstance(texture, SubTexture):
            tex = texture.texture
            src = srcrect if srcrect is not None else texture.rect
        else:
            tex = texture
            src = srcrect if srcrect is not None else _full_rect(texture)
        return self.batcher.sprite_batch(
            tex, src, dstrect, rotation, color, layer, origin, flip_uv_x, flip_uv_y, shader
        )

    def draw_texture_at(
        self,
        texture: TextureSource,
        pos: Vec2,
        srcrect: Optional[Rect] = None,
        rotation: float = 0.0,
        scale: Vec2 = Vec2(1.0, 1.0),
        color: Color = WHITE,
        layer: int = DEFAULT_SPRITE_LAYER,
        origin: Optional[Origin] = None,
        flip_uv_x: bool = False,
        flip_uv_y: bool = False,
        shader: Optional[Shader] = None,
    ) -> DrawCmd:
        """Draw a texture centred on ``pos``, sized by ``scale``.

        A sub-texture is sized by its own rectangle; a whole texture by its
        full size.
        """
        if isinstance(texture, SubTexture):
            tex = texture.texture
            src = srcrect if srcrect is not None else texture.rect
            size = texture.rect.size() * scale
        else:
            tex = texture
            src = srcrect if srcrect is not None else _full_rect(texture)
            width, height = texture.size()
            size = Vec2(float(width), float(height)) * scale
        top_left = pos - size / 2.0
        dst = Rect(top_left.x, top_left.y, size.x, size.y)
        return self.batcher.sprite_batch(
            tex, src, dst, rotation, color, layer, origin, flip_uv_x, flip_uv_y, shader
        )

    def draw_render_target(
        self,
        target: RenderTarget,
        dstrect: Rect,
        srcrect: Optional[Rect] = None,
        rotation: float = 0.0,
        color: Color = WHITE,
        layer: int = DEFAULT_SPRITE_LAYER,
        origin: Optional[Origin] = None,
        flip_uv_x: bool = False,
        flip_uv_y: bool = False,
        shader: Optional[Shader] = None,
    ) -> DrawCmd:
        """Draw the contents of a render target like any other texture."""
        return self.draw_texture(
            target.texture,
            dstrect,
            srcrect,
            rotation,
            color,
            layer,
            origin,
            flip_uv_x,
            flip_uv_y,
            shader,
        )

    def draw_final_render_target(self, target: RenderTarget) -> DrawCmd:
        """Switch to the target's view and draw the whole target with it."""
        self.view = target.view
        width, height = target.size()
        return self.draw_render_target(target, Rect(0.0, 0.0, float(width), float(height)))

    def bind_render_target(self, target: RenderTarget) -> None:
        """Direct the following renders into ``target``, using its view."""
        if not target.created():
            raise RuntimeError("render target has not been created")
        target.bind()
        self.view = target.view

    def draw_nine_patch(
        self,
        texture: Texture,
        dstrect: Rect,
        left: float,
        right: float,
        top: float,
        bottom: float,
        srcrect: Optional[Rect] = None,
    ) -> List[DrawCmd]:
        """Draw with nine-slice scaling: corners keep their size, edges stretch.

        Commands are queued sides first, then corners, then the centre.
        """
        src = srcrect if srcrect is not None else _full_rect(texture)
        total = src.size()
        sp = src.pos()

        center_w = total.x - (left + right)
        center_h = total.y - (top + bottom)
        center_src = Rect(sp.x + left, sp.y + top, center_w, center_h)

        mt_src = Rect(sp.x + left, sp.y, center_w, top)
        ml_src = Rect(sp.x, sp.y + top, left, center_h)
        mr_src = Rect(sp.x + total.x - right, sp.y + top, right, center_h)
        mb_src = Rect(sp.x + left, sp.y + total.y - bottom, center_w, bottom)
        tl_src = Rect(sp.x, sp.y, left, right)
        tr_src = Rect(sp.x + total.x - right, sp.y, right, top)
        bl_src = Rect(sp.x, sp.y + total.y - bottom, left, bottom)
        br_src = Rect(sp.x + total.x - right, sp.y + total.y - bottom, right, bottom)

        d = dstrect
        center_dst = Rect(d.x + left, d.y + top, d.width - right - left, d.height - bottom - top)

        mt_dst = Rect(d.x + left, d.y, center_dst.width, top)
        ml_dst = Rect(d.x, d.y + top, left, center_dst.height)
        mr_dst = Rect(d.right() - right, d.y + top, right, center_dst.height)
        mb_dst = Rect(d.x + left, d.bottom() - bottom, center_dst.width, bottom)

        tl_dst = Rect(d.x, d.y, tl_src.width, tl_src.height)
        tr_dst = Rect(d.right() - right, d.y, tr_src.width, tr_src.height)
        bl_dst = Rect(d.x, d.bottom() - bottom, bl_src.width, bl_src.height)
        br_dst = Rect(
            d.right() - br_src.width, d.bottom() - br_src.height, br_src.width, br_src.height
        )

        pieces = [
            (mt_src, mt_dst),
            (ml_src, ml_dst),
            (mr_src, mr_dst),
            (mb_src, mb_dst),
            (tl_src, tl_dst),
            (tr_src, tr_dst),
            (bl_src, bl_dst),
            (br_src, br_dst),
            (center_src, center_dst),
        ]
        return [self.draw_texture(texture, dst, src_part) for src_part, dst in pieces]

    def draw_lines(
        self,
        points: Sequence[Vec2],
        color: Color = WHITE,
        mode: GLDrawMode = GLDrawMode.LINE_STRIP,
        layer: int = DEFAULT_PRIMITIVE_LAYER,
    ) -> DrawCmd:
        return self.batcher.prim_batch(list(points), color, mode, layer)

    def draw_line(
        self,
        start: Vec2,
        end: Vec2,
        color: Color = WHITE,
        layer: int = DEFAULT_PRIMITIVE_LAYER,
    ) -> DrawCmd:
        return self.batcher.prim_batch([start, end], color, GLDrawMode.LINE_STRIP, layer)

    def draw_rect(
        self,
        rect: Rect,
        rotation: float = 0.0,
        filled: bool = False,
        color: Color = WHITE,
        origin: Optional[Origin] = None,
        layer: int = DEFAULT_PRIMITIVE_LAYER,
    ) -> DrawCmd:
        """Draw a rectangle outline, or a filled one; ``rotation`` is in radians."""
        verts = [
            Vec2(rect.x, rect.y),
            Vec2(rect.x + rect.width, rect.y),
            Vec2(rect.x + rect.width, rect.y + rect.height),
            Vec2(rect.x, rect.y + rect.height),
        ]
        if rotation != 0:
            pivot = _pivot(origin, rect)
            verts = [(v - pivot).rotated(rotation) + pivot for v in verts]
        mode = GLDrawMode.TRIANGLE_FAN if filled else GLDrawMode.LINE_LOOP
        return self.batcher.prim_batch(verts, color, mode, layer)

    def draw_grid(
        self,
        offset: Vec2,
        grid_count: Tuple[int, int],
        grid_size: Vec2,
        color: Color = WHITE,
        layer: int = DEFAULT_PRIMITIVE_LAYER,
    ) -> List[DrawCmd]:
        """Draw the lines of a ``grid_count`` grid of ``grid_size`` cells."""
        count_x, count_y = grid_count
        target_x = count_x * grid_size.x
        target_y = count_y * grid_size.y
        cmds = [
            self.draw_line(
                Vec2(x * grid_size.x, 0.0) + offset,
                Vec2(x * grid_size.x, target_y) + offset,
                color,
                layer,
            )
            for x in range(count_x + 1)
        ]
        cmds.extend(
            self.draw_line(
                Vec2(0.0, y * grid_size.y) + offset,
                Vec2(target_x, y * grid_size.y) + offset,
                color,
                layer,
            )
            for y in range(count_y + 1)
        )
        return cmds

    def draw_circle(
        self,
        pos: Vec2,
        radius: float,
        filled: bool = False,
        color: Color = WHITE,
        segment_count: int = 16,
        layer: int = DEFAULT_PRIMITIVE_LAYER,
    ) -> DrawCmd:
        """Draw a circle as a polygon of ``segment_count`` points."""
        if segment_count <= 0:
            raise ValueError("a circle needs at least one segment")
        theta = 3.1415926 * 2.0 / segment_count
        tangential = math.tan(theta)
        radial = math.cos(theta)

        x, y = radius, 0.0
        points = []
        for _ in range(segment_count):
            points.append(Vec2(x + pos.x, y + pos.y))
            tx, ty = -y, x
            x = (x + tx * tangential) * radial
            y = (y + ty * tangential) * radial

        mode = GLDrawMode.TRIANGLE_FAN if filled else GLDrawMode.LINE_LOOP
        return self.batcher.prim_batch(points, color, mode, layer)

    def draw_triangle(
        self,
        pos: Vec2,
        size: Vec2,
        rotation: float = 0.0,
        filled: bool = False,
        color: Color = WHITE,
    ) -> DrawCmd:
        """Draw an upward-pointing triangle centred on ``pos`` spanning ``size``."""
        half = size / 2.0
        points = [
            Vec2(0.0, -half.y),
            Vec2(half.x, half.y),
            Vec2(-half.x, half.y),
        ]
        if rotation != 0.0:
            points = [p.rotated(rotation) for p in points]
        points = [p + pos for p in points]
        mode = GLDrawMode.TRIANGLE_FAN if filled else GLDrawMode.LINE_LOOP
        return self.draw_lines(points, color, mode)