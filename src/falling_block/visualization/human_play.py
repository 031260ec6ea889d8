from __future__ import annotations

import argparse
import logging
from typing import Callable, Dict, List, Optional

import pygame

from falling_block.game import GameConfig, GameSession, LoopState
from .renderer import Renderer

logger = logging.getLogger(__name__)


class _PygameTimer:
    def __init__(self, interval_ms: int, callback: Callable[[], None], now: int) -> None:
        self.interval_ms = interval_ms
        self.callback = callback
        self.next_due = now + interval_ms
        self.cancelled = False

    def cancel(self) -> None:
        self.cancelled = True


class PygameScheduler:
    """Repeating timers driven by `pygame.time.get_ticks()`; call `pump()` once per frame."""

    def __init__(self) -> None:
        self._timers: List[_PygameTimer] = []

    def schedule_repeating(self, interval_ms: int, callback: Callable[[], None]) -> _PygameTimer:
        if interval_ms <= 0:
            raise ValueError(f"interval_ms must be positive, got {interval_ms}")
        timer = _PygameTimer(int(interval_ms), callback, pygame.time.get_ticks())
        self._timers.append(timer)
        return timer

    def pump(self) -> None:
        now = pygame.time.get_ticks()
        for timer in list(self._timers):
            if timer.cancelled:
                continue
            if now >= timer.next_due:
                # At most one tick per frame; a stalled frame does not trigger catch-up ticks.
                timer.next_due = now + timer.interval_ms
                timer.callback()
        self._timers = [t for t in self._timers if not t.cancelled]


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(description="Play the falling-block puzzle")
    p.add_argument("--cols", type=int, default=10)
    p.add_argument("--rows", type=int, default=20)
    p.add_argument("--tick-ms", type=int, default=500)
    p.add_argument("--seed", type=int, default=None)
    p.add_argument("--cell-size", type=int, default=30)
    p.add_argument("--log-level", default="WARNING")
    return p


def run(argv: Optional[List[str]] = None) -> None:
    args = build_parser().parse_args(argv)
    logging.basicConfig(level=args.log_level.upper())
    config = GameConfig(cols=args.cols, rows=args.rows, tick_interval_ms=args.tick_ms, random_seed=args.seed)

    pygame.init()
    try:
        clock = pygame.time.Clock()
        renderer = Renderer(cell_size=args.cell_size)
        renderer.screen = pygame.display.set_mode(renderer.window_size(config.cols, config.rows))
        pygame.display.set_caption("Falling Blocks")
        font = pygame.font.SysFont(None, 24)

        scheduler = PygameScheduler()
        session = GameSession(
            config,
            scheduler=scheduler,
            render=renderer.draw,
            on_line_cleared=lambda row: logger.info("row %d cleared", row),
        )

        moves: Dict[int, Callable[[], object]] = {
            pygame.K_LEFT: session.move_left,
            pygame.K_RIGHT: session.move_right,
            pygame.K_DOWN: session.soft_drop_one_or_lock,
            pygame.K_UP: session.rotate_clockwise,
            pygame.K_SPACE: session.instant_lock_step,
        }

        session.start()
        running = True
        while running:
            for event in pygame.event.get():
                if event.type == pygame.QUIT:
                    running = False
                elif event.type == pygame.KEYDOWN:
                    if event.key == pygame.K_ESCAPE:
                        running = False
                    elif event.key == pygame.K_p:
                        if session.loop_state is LoopState.PAUSED:
                            session.resume()
                        else:
                            session.pause()
                    elif event.key == pygame.K_r:
                        session.reset()
                    elif event.key in moves and session.loop_state is LoopState.RUNNING:
                        moves[event.key]()

            scheduler.pump()

            if session.loop_state is LoopState.PAUSED:
                renderer.draw(session.board.view(), session.piece)
                renderer.draw_banner("Paused - P to resume", font)
            pygame.display.flip()
            clock.tick(60)
        session.stop()
    finally:
        pygame.quit()


if __name__ == "__main__":  # pragma: no cover
    run()
