"""2D game toolkit: grid pathfinding, random numbers, game state helpers, draw-command batching and a Pong demo."""

__version__ = "0.1.0"