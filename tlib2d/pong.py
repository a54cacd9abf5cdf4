"""A small two-paddle Pong game: simulation plus a window to play it in."""

from __future__ import annotations

import argparse
from dataclasses import dataclass, field
from typing import List, Optional, Sequence

from tlib2d.geometry import Circle, Rect, Vec2

INITIAL_BALL_SPEED = 300.0
PADDLE_SPEED = 30.0
PADDLE_FRICTION = 0.92
PADDLE_MARGIN = 10.0
PADDLE_WIDTH = 20.0
PADDLE_HEIGHT = 150.0
BALL_RADIUS = 8.0
BALL_VELOCITY_TRANSFER_Y = 0.33
BALL_SPEED_GAIN_ON_HIT = 1.10
FIXED_TIME_STEP = 1.0 / 60.0


def _sign(value: float) -> int:
    return (value > 0) - (value < 0)


@dataclass
class Paddle:
    rect: Rect = field(default_factory=Rect)
    velocity: Vec2 = field(default_factory=Vec2)
    ai: bool = False


@dataclass
class Ball:
    radius: float = 5.0
    position: Vec2 = field(default_factory=Vec2)
    velocity: Vec2 = field(default_factory=Vec2)


class PongGame:
    """Game state for a player paddle on the left and an AI paddle on the right."""

    def __init__(self, width: float = 1280, height: float = 720) -> None:
        self.width = float(width)
        self.height = float(height)
        self.left_score = 0
        self.right_score = 0
        self.paddles: List[Paddle] = []
        self.balls: List[Ball] = []
        self._time_buffer = 0.0

        paddle_y = self.height / 2 - PADDLE_HEIGHT / 2
        self.paddles.append(
            Paddle(rect=Rect(PADDLE_MARGIN, paddle_y, PADDLE_WIDTH, PADDLE_HEIGHT))
        )
        self.paddles.append(
            Paddle(
                rect=Rect(
                    self.width - PADDLE_WIDTH - PADDLE_MARGIN,
                    paddle_y,
                    PADDLE_WIDTH,
                    PADDLE_HEIGHT,
                ),
                ai=True,
            )
        )
        self.spawn_ball()

    @property
    def viewport(self) -> Vec2:
        return Vec2(self.width, self.height)

    def spawn_ball(self) -> Ball:
        """Add a new ball at the centre, heading left."""
        ball = Ball(
            radius=BALL_RADIUS,
            position=self.viewport / 2.0,
            velocity=Vec2(-INITIAL_BALL_SPEED, 0.0),
        )
        self.balls.append(ball)
        return ball

    def _move_paddles(self, delta: float, move_dir: int) -> None:
        for paddle in self.paddles:
            paddle.rect.x += paddle.velocity.x * delta
            paddle.rect.y += paddle.velocity.y * delta
            paddle.velocity = paddle.velocity * PADDLE_FRICTION

            if paddle.ai:
                direction = (
                    _sign(self.balls[0].position.y - paddle.rect.center().y)
                    if self.balls
                    else 0
                )
            else:
                direction = move_dir
            paddle.velocity = Vec2(
                paddle.velocity.x, paddle.velocity.y + direction * PADDLE_SPEED
            )

            paddle.rect.y = min(max(paddle.rect.y, 0.0), self.height - paddle.rect.height)

    def fixed_update(self, delta: float, move_dir: int = 0) -> None:
        """Advance the simulation by exactly ``delta`` seconds.

        ``move_dir`` is the player's input: +1, -1 or 0.
        """
        self._move_paddles(delta, move_dir)

        remaining: List[Ball] = []
        scored = 0
        for ball in reversed(self.balls):
            next_pos = ball.position + ball.velocity * delta

            hits_top = next_pos.y + ball.radius > self.height
            hits_bottom = next_pos.y - ball.radius < 0
            if hits_top or hits_bottom:
                ball.velocity = ball.velocity.reflect(Vec2(1.0, 0.0))

            hits_left = next_pos.x - ball.radius < 0
            hits_right = next_pos.x + ball.radius > self.width
            if hits_left or hits_right:
                self.left_score += int(hits_right)
                self.right_score += int(hits_left)
                scored += 1
                continue

            probe = Circle(next_pos.x, next_pos.y, ball.radius)
            for paddle in self.paddles:
                if paddle.rect.intersects_circle(probe):
                    v = ball.velocity.reflect(Vec2(0.0, 1.0))
                    ball.velocity = Vec2(
                        v.x * BALL_SPEED_GAIN_ON_HIT,
                        v.y + paddle.velocity.y * BALL_VELOCITY_TRANSFER_Y,
                    )

            ball.position = ball.position + ball.velocity * delta
            remaining.append(ball)

        remaining.reverse()
        self.balls = remaining
        for _ in range(scored):
            self.spawn_ball()

    def update(self, delta: float, move_dir: int = 0) -> int:
        """Accumulate ``delta`` and run as many fixed steps as it covers.

        Returns the number of fixed steps taken.
        """
        self._time_buffer += delta
        steps = 0
        while self._time_buffer >= FIXED_TIME_STEP:
            self.fixed_update(FIXED_TIME_STEP, move_dir)
            self._time_buffer -= FIXED_TIME_STEP
            steps += 1
        return steps


def _draw(screen, font, game: PongGame) -> None:
    import pygame

    white = (255, 255, 255)
    screen.fill((25, 25, 25))
    center_x = game.width / 2
    center_y = game.height / 2
    pygame.draw.line(screen, white, (center_x, 0), (center_x, game.height))

    left = font.render(str(game.left_score), True, white)
    right = font.render(str(game.right_score), True, white)
    screen.blit(left, (center_x - 20 - left.get_width(), center_y))
    screen.blit(right, (center_x + 20, center_y))

    for paddle in game.paddles:
        r = paddle.rect
        pygame.draw.rect(screen, white, pygame.Rect(r.x, r.y, r.width, r.height))
    for ball in game.balls:
        pygame.draw.circle(
            screen, white, (ball.position.x, ball.position.y), ball.radius
        )


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Open a window and play Pong; W and S move the left paddle."""
    parser = argparse.ArgumentParser(description="Play Pong against the computer.")
    parser.add_argument("--width", type=int, default=1280)
    parser.add_argument("--height", type=int, default=720)
    parser.add_argument("--fps", type=int, default=144)
    args = parser.parse_args(argv)

    import pygame

    pygame.init()
    try:
        screen = pygame.display.set_mode((args.width, args.height))
        pygame.display.set_caption("Window")
        font = pygame.font.Font(None, 48)
        clock = pygame.time.Clock()
        game = PongGame(args.width, args.height)

        running = True
        clock.tick()
        while running:
            delta = clock.tick(args.fps) / 1000.0
            for event in pygame.event.get():
                if event.type == pygame.QUIT:
                    running = False
            keys = pygame.key.get_pressed()
            move_dir = int(keys[pygame.K_w]) - int(keys[pygame.K_s])
            game.update(delta, move_dir)
            _draw(screen, font, game)
            pygame.display.flip()
    finally:
        pygame.quit()
    return 0


if __name__ == "__main__":
    raise SystemExit(main())