import math

import pytest

from tlib2d.batch import (
    RESTART_INDEX,
    SPRITE_INDICES,
    DrawBatcher,
    Origin,
    Shader,
    default_origin,
    rotate_point,
    texture_uvs,
)
from tlib2d.geometry import Rect, Vec2
from tlib2d.glhelpers import GLDrawMode
from tlib2d.rendertarget import View
from tlib2d.texture import Texture


def make_texture(width=100, height=100):
    tex = Texture()
    tex.set_data(None, width, height)
    return tex


def test_texture_uvs_full_texture():
    tex = make_texture(100, 100)
    top_left, bottom_right = texture_uvs(tex, Rect(0, 0, 100, 100))
    assert top_left.x == pytest.approx(0.0002)
    assert top_left.y == pytest.approx(0.0002)
    assert bottom_right.x == pytest.approx(0.9999)
    assert bottom_right.y == pytest.approx(0.9999)


def test_texture_uvs_empty_texture_raises():
    with pytest.raises(ValueError):
        texture_uvs(Texture(), Rect(0, 0, 1, 1))


def test_rotate_point_quarter_turn():
    x, y = rotate_point(1.0, 0.0, math.pi / 2)
    assert x == pytest.approx(0.0, abs=1e-12)
    assert y == pytest.approx(1.0)


def test_rotate_point_full_turn_is_identity():
    x, y = rotate_point(3.5, -2.0, 2 * math.pi)
    assert (x, y) == (pytest.approx(3.5), pytest.approx(-2.0))


def test_default_origin_is_center():
    assert default_origin(Rect(10, 20, 30, 40)) == Vec2(25, 40)


def test_sprite_vertices_match_dstrect():
    batcher = DrawBatcher()
    tex = make_texture()
    cmd = batcher.sprite_batch(tex, Rect(0, 0, 100, 100), Rect(10, 20, 30, 40))
    xy = [(v[0], v[1]) for v in cmd.vertices]
    assert xy == [(10, 20), (40, 20), (10, 60), (40, 60)]
    assert cmd.indices == list(SPRITE_INDICES)
    assert cmd.draw_mode is GLDrawMode.TRIANGLES
    assert cmd.shader is batcher.default_shader


def test_sprite_flip_swaps_uvs():
    batcher = DrawBatcher()
    tex = make_texture()
    plain = batcher.sprite_batch(tex, Rect(0, 0, 50, 50), Rect(0, 0, 1, 1))
    flipped = batcher.sprite_batch(
        tex, Rect(0, 0, 50, 50), Rect(0, 0, 1, 1), flip_uv_x=True, flip_uv_y=True
    )
    assert flipped.vertices[0][2] == plain.vertices[1][2]
    assert flipped.vertices[1][2] == plain.vertices[0][2]
    assert flipped.vertices[0][3] == plain.vertices[2][3]
    assert flipped.vertices[2][3] == plain.vertices[0][3]


def test_sprite_rotation_about_center_keeps_centroid():
    batcher = DrawBatcher()
    tex = make_texture()
    dst = Rect(10, 20, 30, 40)
    cmd = batcher.sprite_batch(tex, Rect(0, 0, 100, 100), dst, rotation=0.7)
    cx = sum(v[0] for v in cmd.vertices) / 4
    cy = sum(v[1] for v in cmd.vertices) / 4
    center = default_origin(dst)
    assert cx == pytest.approx(center.x)
    assert cy == pytest.approx(center.y)


def test_sprite_rotation_about_world_origin_keeps_pivot_distance():
    batcher = DrawBatcher()
    tex = make_texture()
    dst = Rect(10, 0, 5, 5)
    pivot = Vec2(0, 0)
    cmd = batcher.sprite_batch(
        tex, Rect(0, 0, 100, 100), dst, rotation=math.pi,
        origin=Origin(pivot, use_world_coords=True),
    )
    assert cmd.vertices[0][0] == pytest.approx(-10)
    assert cmd.vertices[0][1] == pytest.approx(0, abs=1e-9)


def test_sprite_local_origin_at_corner_keeps_corner_fixed():
    batcher = DrawBatcher()
    tex = make_texture()
    cmd = batcher.sprite_batch(
        tex, Rect(0, 0, 100, 100), Rect(7, 9, 4, 4), rotation=1.2,
        origin=Origin(Vec2(0, 0)),
    )
    assert cmd.vertices[0][0] == pytest.approx(7)
    assert cmd.vertices[0][1] == pytest.approx(9)


def test_prim_batch_empty_raises():
    with pytest.raises(ValueError):
        DrawBatcher().prim_batch([])


def test_prim_batch_uses_white_texture():
    batcher = DrawBatcher()
    cmd = batcher.prim_batch([Vec2(0, 0), Vec2(1, 1), Vec2(2, 0)])
    assert cmd.texture is batcher.white_texture
    assert batcher.white_texture.pixel(0, 0) == (255, 255, 255, 255)
    assert cmd.indices == [0, 1, 2]
    assert [(v[2], v[3]) for v in cmd.vertices] == [(0.0, 0.0)] * 3


def test_flush_empty_returns_nothing():
    assert DrawBatcher().flush() == []


def test_flush_merges_same_state_and_offsets_indices():
    batcher = DrawBatcher()
    tex = make_texture()
    batcher.sprite_batch(tex, Rect(0, 0, 10, 10), Rect(0, 0, 1, 1))
    batcher.sprite_batch(tex, Rect(0, 0, 10, 10), Rect(5, 5, 1, 1))
    batches = batcher.flush()
    assert len(batches) == 1
    batch = batches[0]
    assert len(batch.positions) == 8
    assert len(batch.colors) == 8
    assert batch.indices[:7] == list(SPRITE_INDICES) + [RESTART_INDEX]
    assert batch.indices[7:13] == [i + 4 for i in SPRITE_INDICES]
    assert batch.indices.count(RESTART_INDEX) == 2


def test_flush_splits_on_state_change_and_clears_queue():
    batcher = DrawBatcher()
    tex = make_texture()
    batcher.sprite_batch(tex, Rect(0, 0, 10, 10), Rect(0, 0, 1, 1))
    batcher.prim_batch([Vec2(0, 0), Vec2(1, 1)])
    batches = batcher.flush()
    assert [b.draw_mode for b in batches] == [GLDrawMode.TRIANGLES, GLDrawMode.LINE_STRIP]
    assert len(batcher) == 0
    assert batcher.flush() == []


def test_flush_sort_orders_by_layer():
    batcher = DrawBatcher()
    tex = make_texture()
    batcher.sprite_batch(tex, Rect(0, 0, 10, 10), Rect(0, 0, 1, 1), layer=5)
    batcher.prim_batch([Vec2(0, 0), Vec2(1, 1)], layer=1)
    batches = batcher.flush(sort=True)
    assert [b.draw_mode for b in batches] == [GLDrawMode.LINE_STRIP, GLDrawMode.TRIANGLES]


def test_flush_keeps_colors_and_view():
    batcher = DrawBatcher()
    red = (1.0, 0.0, 0.0, 1.0)
    view = View()
    viewport = Rect(0, 0, 64, 48)
    batcher.prim_batch([Vec2(0, 0), Vec2(1, 0)], color=red)
    (batch,) = batcher.flush(view=view, viewport=viewport)
    assert batch.colors == [red, red]
    assert batch.view is view
    assert batch.viewport == viewport


def test_different_shaders_split_batches():
    batcher = DrawBatcher()
    tex = make_texture()
    other = Shader("text")
    batcher.sprite_batch(tex, Rect(0, 0, 10, 10), Rect(0, 0, 1, 1))
    batcher.sprite_batch(tex, Rect(0, 0, 10, 10), Rect(0, 0, 1, 1), shader=other)
    batches = batcher.flush()
    assert [b.shader for b in batches] == [batcher.default_shader, other]