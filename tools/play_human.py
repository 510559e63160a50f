"""
Human Play Mode
===============

Play Banana Dodge with the keyboard or the mouse.

Controls:
    - Left/Right or A/D: Move the monkey
    - Hold mouse button: Monkey follows the pointer
    - Click Restart: New game after a game over
    - R: Restart (only once the run has ended)
    - ESC: Quit

Usage:
    python -m tools.play_human [--seed SEED] [--width WIDTH] [--height HEIGHT]
"""

from __future__ import annotations

import argparse
import sys
from typing import Optional

try:
    import pygame
    PYGAME_AVAILABLE = True
except ImportError:
    PYGAME_AVAILABLE = False

from banana_dodge.dodge_core.config_loader import load_config, GameConfig
from banana_dodge.dodge_core.entities import GamePhase
from banana_dodge.dodge_core.game import CoreGame
from banana_dodge.dodge_core.high_score_store import open_store
from banana_dodge.dodge_core.input_source import ControlState

# Longest frame the simulation will catch up in one tick, in display frames
MAX_FRAME_SCALE = 3.0


class HumanPlayer:
    """
    Host loop: samples input, ticks the game once per display frame and
    presents the result in a letterboxed window.
    """

    def __init__(
        self,
        config: Optional[GameConfig] = None,
        seed: Optional[int] = None,
        window_width: Optional[int] = None,
        window_height: Optional[int] = None,
        target_fps: Optional[int] = None,
        high_score_path: Optional[str] = None
    ):
        if not PYGAME_AVAILABLE:
            raise ImportError("pygame required. Install: pip install pygame")

        if config is None:
            config = load_config()

        from banana_dodge.dodge_core.render_pygame import PygameRenderer

        self._config = config
        self._seed = seed
        self._window_width = window_width or config.display.window_width
        self._window_height = window_height or config.display.window_height
        self._target_fps = target_fps or config.display.fps
        self._frame_ms = 1000.0 / config.display.fps

        store = open_store(high_score_path or config.persistence.high_score_path)
        self._game = CoreGame(config=config, seed=seed, store=store)

        pygame.init()
        self._clock = pygame.time.Clock()
        self._renderer = PygameRenderer(config)

        self._running = True
        self._pointer_held = False
        self._last_phase = self._game.phase

    def run(self) -> int:
        """Run the game loop. Returns the best score seen."""
        print("=== Banana Dodge ===")
        print("Arrows/A-D or hold the mouse to move. Eat ripe yellow bananas!")
        print("R or click Restart after a game over, ESC to quit")
        print(f"High score: {self._game.high_score}")
        print()

        elapsed_ms = self._frame_ms
        while self._running:
            self._handle_events()

            if self._game.needs_tick:
                dt = min(elapsed_ms / self._frame_ms, MAX_FRAME_SCALE)
                self._tick(dt)

            self._renderer.render_to_screen(
                self._game.get_render_data(),
                self._window_width,
                self._window_height
            )
            elapsed_ms = self._clock.tick(self._target_fps)

        self._renderer.close()
        pygame.quit()
        return self._game.high_score

    def _tick(self, dt: float) -> None:
        intent = self._game.resolve_intent(self._sample_controls())
        result = self._game.step(intent, dt)

        if result.bonus_collected:
            print(f"  Bonus! +{result.delta_score} (Total: {self._game.score})")

        if result.fatal:
            print(f"\nGAME OVER - Score: {self._game.score}")
            if result.new_high_score:
                print(f"New high score: {self._game.high_score}")

        if self._game.phase is not self._last_phase:
            self._last_phase = self._game.phase
            if self._last_phase is GamePhase.GAME_OVER_DISPLAYED:
                print("Press R or click Restart to play again")

    def _sample_controls(self) -> ControlState:
        keys = pygame.key.get_pressed()
        pointer_x = None
        if self._pointer_held:
            mouse_x, mouse_y = pygame.mouse.get_pos()
            pointer_x, _ = self._renderer.screen_to_field(mouse_x, mouse_y)

        return ControlState(
            left=keys[pygame.K_LEFT] or keys[pygame.K_a],
            right=keys[pygame.K_RIGHT] or keys[pygame.K_d],
            pointer_x=pointer_x
        )

    def _handle_events(self) -> None:
        """Process pygame events."""
        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                self._running = False

            elif event.type == pygame.VIDEORESIZE:
                self._window_width, self._window_height = event.w, event.h

            elif event.type == pygame.KEYDOWN:
                if event.key == pygame.K_ESCAPE:
                    self._running = False
                elif event.key == pygame.K_r:
                    self._restart()

            elif event.type == pygame.MOUSEBUTTONDOWN and event.button == 1:
                self._pointer_held = True
                x, y = self._renderer.screen_to_field(*event.pos)
                if self._game.click(x, y):
                    self._on_restarted()

            elif event.type == pygame.MOUSEBUTTONUP and event.button == 1:
                self._pointer_held = False

    def _restart(self) -> None:
        """Restart the game if the current run has ended."""
        if self._game.reset():
            self._on_restarted()

    def _on_restarted(self) -> None:
        self._last_phase = self._game.phase
        print("\n=== Game Restarted ===\n")


def main():
    parser = argparse.ArgumentParser(description="Play Banana Dodge interactively")
    parser.add_argument("--seed", type=int, default=None, help="Random seed")
    parser.add_argument("--width", type=int, default=None, help="Window width (default: from config)")
    parser.add_argument("--height", type=int, default=None, help="Window height (default: from config)")
    parser.add_argument("--fps", type=int, default=None, help="Target FPS")
    parser.add_argument("--high-score-path", type=str, default=None,
                        help="High score file (default: from config)")

    args = parser.parse_args()

    try:
        config = load_config()
        player = HumanPlayer(
            config=config,
            seed=args.seed,
            window_width=args.width,
            window_height=args.height,
            target_fps=args.fps,
            high_score_path=args.high_score_path
        )
        high_score = player.run()
        print(f"\nHigh Score: {high_score}")
        return 0
    except ImportError as e:
        print(f"Error: {e}")
        return 1


if __name__ == "__main__":
    sys.exit(main())
