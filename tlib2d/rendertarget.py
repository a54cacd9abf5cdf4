"""Off-screen render targets and the cameras (views) that draw into them."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import ClassVar, Iterable, Optional, Tuple, Union

from tlib2d.geometry import Rect, Vec2
from tlib2d.texture import Texture


@dataclass
class View:
    """A 2D camera: what part of the world is shown and where on the target.

    ``viewport`` is given in fractions of the target size.
    """

    center: Vec2 = field(default_factory=Vec2)
    size: Vec2 = field(default_factory=Vec2)
    zoom: Vec2 = field(default_factory=lambda: Vec2(1.0, 1.0))
    viewport: Rect = field(default_factory=lambda: Rect(0.0, 0.0, 1.0, 1.0))


def viewport_size_pixels(view: View, target_size: Iterable[float]) -> Rect:
    """The view's viewport in whole pixels of a target of ``target_size``."""
    if not view.viewport.width or not view.viewport.height:
        raise ValueError("viewport width and height must be non-zero")
    target_w, target_h = target_size
    vp = view.viewport
    return Rect(
        int(target_w * vp.x) if vp.x != 0 else 0,
        int(target_h * vp.y) if vp.y != 0 else 0,
        int(target_w * vp.width),
        int(target_h * vp.height),
    )


class RenderTarget:
    """A texture that can be drawn into, with the view used to draw it."""

    _bound: ClassVar[Optional["RenderTarget"]] = None

    def __init__(self) -> None:
        self.texture = Texture()
        self.view = View()
        self._created = False

    def create(self) -> None:
        if self.created():
            return
        self.texture.create()
        self._created = True

    def created(self) -> bool:
        return self._created

    def set_size(
        self, width: Union[int, Tuple[int, int]], height: Optional[int] = None
    ) -> None:
        """Resize the backing texture; its contents are cleared."""
        if height is None:
            width, height = width
        self.texture.set_data(None, int(width), int(height))

    def size(self) -> Tuple[int, int]:
        return self.texture.size()

    def bind(self) -> None:
        RenderTarget._bound = self

    @staticmethod
    def unbind() -> None:
        RenderTarget._bound = None

    @staticmethod
    def bound() -> Optional["RenderTarget"]:
        """The render target currently bound, or None."""
        return RenderTarget._bound

    def viewport_size_pixels(self, view: Optional[View] = None) -> Rect:
        """Viewport of ``view`` (this target's own view by default) in pixels."""
        return viewport_size_pixels(self.view if view is None else view, self.size())