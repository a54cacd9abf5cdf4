"""A* path finding, line tracing and ray casting on a 2D grid of cells."""

from __future__ import annotations

import heapq
import itertools
from dataclasses import dataclass, replace
from typing import Dict, List, Optional, Tuple

from tlib2d.geometry import Vec2

GridPos = Tuple[int, int]

_DIRECTIONS: Tuple[GridPos, ...] = (
    (1, 0),
    (-1, 0),
    (0, -1),
    (0, 1),
    (1, -1),
    (1, 1),
    (-1, 1),
    (-1, -1),
)


@dataclass
class AStarCell:
    """One grid cell: whether it can be entered and what entering it costs."""

    passable: bool = True
    move_cost: float = 1.0


@dataclass(frozen=True)
class RaycastResult:
    """Outcome of :meth:`AStar2D.raycast`: whether it hit, and where it stopped."""

    hit: bool = False
    pos: GridPos = (0, 0)


def _chebyshev(a: GridPos, b: GridPos) -> int:
    return max(abs(b[0] - a[0]), abs(b[1] - a[1]))


class _Frontier:
    """Min-priority queue; equal priorities come out in insertion order."""

    def __init__(self) -> None:
        self._heap: List[Tuple[float, int, GridPos]] = []
        self._counter = itertools.count()

    def __bool__(self) -> bool:
        return bool(self._heap)

    def put(self, item: GridPos, priority: float) -> None:
        heapq.heappush(self._heap, (priority, next(self._counter), item))

    def pop(self) -> GridPos:
        return heapq.heappop(self._heap)[2]


class AStar2D:
    """A rectangular grid of :class:`AStarCell` with 8-way path finding."""

    def __init__(self, width: int = 10, height: int = 10) -> None:
        self._width = 0
        self._height = 0
        self._cells: List[List[AStarCell]] = []
        self.resize(width, height)

    def passable(self, pos: GridPos) -> bool:
        return self.at(pos).passable

    def in_bounds(self, pos: GridPos) -> bool:
        x, y = pos
        return 0 <= x < self._width and 0 <= y < self._height

    def resize(self, width: int, height: int) -> None:
        """Change the grid size, keeping the cells that still fit."""
        if width < 0 or height < 0:
            raise ValueError(f"invalid grid size {width}x{height}")
        self._cells = [
            [
                self._cells[y][x] if y < self._height and x < self._width else AStarCell()
                for x in range(width)
            ]
            for y in range(height)
        ]
        self._width = width
        self._height = height

    def clear(self, cell: Optional[AStarCell] = None) -> None:
        """Set every cell to a copy of ``cell`` (a default cell if None)."""
        template = cell if cell is not None else AStarCell()
        self._cells = [
            [replace(template) for _ in range(self._width)] for _ in range(self._height)
        ]

    def at(self, pos: GridPos) -> AStarCell:
        if not self.in_bounds(pos):
            raise IndexError(f"position {pos} is outside the {self._width}x{self._height} grid")
        x, y = pos
        return self._cells[y][x]

    def width(self) -> int:
        return self._width

    def height(self) -> int:
        return self._height

    def size(self) -> GridPos:
        return (self._width, self._height)

    def neighbors(self, pos: GridPos) -> List[GridPos]:
        """In-bounds, passable cells around ``pos``: straight directions first."""
        candidates = ((pos[0] + dx, pos[1] + dy) for dx, dy in _DIRECTIONS)
        return [p for p in candidates if self.in_bounds(p) and self.passable(p)]

    def _cost(self, from_pos: GridPos, to_pos: GridPos, diagonal_cost: float) -> float:
        diagonal = from_pos[0] != to_pos[0] and from_pos[1] != to_pos[1]
        return self.at(to_pos).move_cost * (diagonal_cost if diagonal else 1.0)

    def compute_path(
        self,
        start: GridPos,
        goal: GridPos,
        include_start: bool = False,
        diagonal_cost: float = 1.001,
        came_from: Optional[Dict[GridPos, GridPos]] = None,
        cost_so_far: Optional[Dict[GridPos, float]] = None,
    ) -> List[GridPos]:
        """Shortest path from ``start`` to ``goal``; empty if there is none.

        If the goal is impassable, the path leads to a cell next to it.
        ``came_from`` and ``cost_so_far``, when given, are filled with the
        search's bookkeeping.
        """
        if not self.in_bounds(start) or not self.in_bounds(goal):
            return []

        came_from = came_from if came_from is not None else {}
        cost_so_far = cost_so_far if cost_so_far is not None else {}
        came_from.clear()
        cost_so_far.clear()

        goal_cell = self.at(goal)
        goal_passable = goal_cell.passable
        goal_cell.passable = True
        try:
            frontier = _Frontier()
            frontier.put(start, 0.0)
            came_from[start] = start
            cost_so_far[start] = 0.0

            while frontier:
                current = frontier.pop()
                if current == goal:
                    break
                for nxt in self.neighbors(current):
                    new_cost = cost_so_far[current] + self._cost(current, nxt, diagonal_cost)
                    if nxt not in cost_so_far or new_cost < cost_so_far[nxt]:
                        cost_so_far[nxt] = new_cost
                        frontier.put(nxt, new_cost + _chebyshev(nxt, goal))
                        came_from[nxt] = current
        finally:
            goal_cell.passable = goal_passable

        if goal not in came_from:
            return []

        path: List[GridPos] = []
        current = goal
        while current != start:
            path.append(current)
            current = came_from[current]
        if include_start:
            path.append(start)
        path.reverse()

        if not goal_passable and path:
            path.pop()
        return path

    @staticmethod
    def _trace(start: GridPos, end: GridPos):
        start_v = Vec2(*start)
        end_v = Vec2(*end)
        steps = _chebyshev(start, end)
        for step in range(steps + 1):
            t = 0.0 if steps == 0 else step / steps
            point = (start_v * (1.0 - t) + end_v * t).rounded()
            yield (int(point.x), int(point.y))

    def line(self, start: GridPos, end: GridPos) -> List[GridPos]:
        """Grid cells on the straight line from ``start`` to ``end``, inclusive."""
        return list(self._trace(start, end))

    def raycast(
        self, start: GridPos, end: GridPos, visited: Optional[List[GridPos]] = None
    ) -> RaycastResult:
        """Walk the line to ``end``, stopping at the first blocked or outside cell.

        ``visited``, when given, is cleared and filled with the cells walked.
        """
        if visited is not None:
            visited.clear()
        for point in self._trace(start, end):
            if visited is not None:
                visited.append(point)
            if not self.in_bounds(point) or not self.at(point).passable:
                return RaycastResult(True, point)
        return RaycastResult(False, end)