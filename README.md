# tlib2d

A small toolkit for 2D games. Apart from the Pong window, everything runs without a display:

- `tlib2d.astar.AStar2D`: a grid of `AStarCell`s (`passable`, `move_cost`). It does A* pathfinding with eight-way moves through `compute_path`. `line` traces grid cells along a line, and `raycast` returns a `RaycastResult`.
- `tlib2d.rng.RNG`: a seedable 32-bit Mersenne Twister. `rand_range_int` and `rand_range_real` take a low and a high bound, and `rand_range_int` includes both. The generator state can be saved with `get_state` and restored with `set_state`.
- `tlib2d.resource.Resource`: a value kept clamped between `minimum` and `maximum`, such as health or mana.
- `tlib2d.statemanager.StateManager`: a stack of `State` / `GameState` objects. A state gets `on_enter` when it is pushed and `on_exit` when it is popped. `current()` returns the top state.
- `tlib2d.gameobject.GameObjectContainer`: holds `GameObject`s. `clear_freed()` drops the ones whose `freed` flag is set.
- `tlib2d.variant`: `Variant`, `is_type` and `try_get`. These check and fetch a value by its exact type; subclasses do not match.
- `tlib2d.geometry`: `Vec2`, `Rect` and `Circle`.
- `tlib2d.glhelpers`: graphics API enumerations (`GLDrawMode`, `GLType`, …), debug-message text helpers and `format_shader`, which fills backtick pairs in shader source.
- `tlib2d.texture.Texture`: RGBA8 pixel storage in memory. It loads images through Pillow and falls back to a 2x2 checker when loading fails. `write_to_file` saves a PNG. `SubTexture` marks out a rectangle of a texture.
- `tlib2d.rendertarget`: `View` (a camera), `RenderTarget` and `viewport_size_pixels`.
- `tlib2d.batch.DrawBatcher` and `tlib2d.renderer2d.Renderer2D`: queue sprites, lines, rectangles, grids, circles, triangles and nine-patch draws as `DrawCmd`s. `render()` merges the queue into `Batch` objects, ordered by layer first when `sort` is set.

## Install

```
pip install .
```

For the tests:

```
pip install .[test]
pytest
```

## Pathfinding

Grid positions are `(x, y)` tuples.

```python
from tlib2d.astar import AStar2D

grid = AStar2D(10, 10)
grid.at((5, 5)).passable = False
path = grid.compute_path((0, 0), (9, 9))
```

The returned path does not include the start unless you pass `include_start=True`. If the goal cell cannot be entered, the path ends at the cell next to it. If no path exists, the result is an empty list.

## Random numbers

```python
from tlib2d.rng import RNG

rng = RNG(1234)
saved = rng.get_state()
a = rng.rand_range_int(1, 6)
rng.set_state(saved)
assert rng.rand_range_int(1, 6) == a
```

## Resources

```python
from tlib2d.resource import Resource

hp = Resource(0, 100, 100)
hp.reduce(150)
assert hp.depleted()
```

## Batched drawing

```python
from tlib2d.geometry import Rect, Vec2
from tlib2d.renderer2d import Renderer2D

r = Renderer2D((1280, 720))
r.draw_rect(Rect(10, 10, 50, 20), filled=True)
r.draw_circle(Vec2(100, 100), 8)
batches = r.render()
```

Each `Batch` holds merged vertex positions, colours and indices for one texture, shader and draw mode. A restart index follows each command.

## Pong

The package includes a playable Pong demo that uses pygame. W moves your paddle up and S moves it down. The right paddle is controlled by the computer. Options are `--width`, `--height` and `--fps`.

```
tlib2d-pong
```

The game logic is in `tlib2d.pong.PongGame`, and it runs without a window:

```python
from tlib2d.pong import PongGame

game = PongGame(1280, 720)
game.update(1 / 60, 0)
```

## What it does not do

`Renderer2D` and `DrawBatcher` do not draw anything on screen. They only produce the batched vertex and index data. `Shader` is a named record of uniform values, not a compiled program. Textures and render targets live in memory and are never uploaded to a GPU. There is no text or font rendering, and no input or window handling, except in the Pong demo, which draws with pygame directly.