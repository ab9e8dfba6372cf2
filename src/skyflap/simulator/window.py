"""
Desktop game window using pygame.

Translates keyboard, mouse and touch input into bus events, emits a
frame tick, and blits the rendered scene.
"""

import pygame
import asyncio
import logging
from dataclasses import dataclass
from typing import Optional

import numpy as np
from numpy.typing import NDArray

from ..config.settings import Settings
from ..core.events import EventBus, EventType, Event, impulse_event, restart_event, tick_event
from ..graphics.renderer import SceneRenderer
from ..shell import GameShell

logger = logging.getLogger(__name__)


@dataclass
class WindowConfig:
    """Game window configuration."""
    width: int = 400
    height: int = 600
    title: str = "SKYFLAP"
    fps: int = 60
    scale: int = 1

    # Debug panel
    panel_color: tuple[int, int, int] = (20, 20, 30)
    text_color: tuple[int, int, int] = (200, 200, 220)

    @classmethod
    def from_settings(cls, settings: Settings) -> "WindowConfig":
        display = settings.display
        return cls(
            width=display.width,
            height=display.height,
            title=settings.title,
            fps=display.fps,
            scale=display.scale,
        )


class GameWindow:
    """
    Main game window.

    Input Mapping:
        SPACE / UP / left click / touch: Impulse (flap, or restart after game over)
        R: Restart
        P: Toggle pause
        D: Toggle debug overlay
        S: Capture screenshot
        ESC / Q: Exit

    The simulation pauses while the window is minimized or hidden. A
    pause from P survives the window being restored.
    """

    IMPULSE_KEYS = (pygame.K_SPACE, pygame.K_UP)

    def __init__(
        self,
        shell: GameShell,
        renderer: SceneRenderer,
        config: WindowConfig | None = None,
    ) -> None:
        self.shell = shell
        self.renderer = renderer
        self.event_bus: EventBus = shell.event_bus
        self.config = config or WindowConfig.from_settings(shell.settings)

        # Pygame setup
        self._screen: pygame.Surface | None = None
        self._clock: pygame.time.Clock | None = None
        self._font: pygame.font.Font | None = None
        self._running = False
        self._frame_count = 0
        self._show_debug = False
        self._hidden = False

        self._buffer: Optional[NDArray[np.uint8]] = None

        logger.info("GameWindow created")

    def _init_pygame(self) -> None:
        """Initialize pygame and create window."""
        pygame.init()
        pygame.display.set_caption(self.config.title)

        self._screen = pygame.display.set_mode(
            (self.config.width * self.config.scale, self.config.height * self.config.scale),
            pygame.DOUBLEBUF,
        )
        self._clock = pygame.time.Clock()

        pygame.font.init()
        self._font = pygame.font.SysFont(None, 18)

        logger.info(f"Pygame initialized: {self.config.width}x{self.config.height}")

    def _handle_events(self) -> None:
        """Process pygame events."""
        for event in pygame.event.get():
            self._dispatch(event)

    def _dispatch(self, event: pygame.event.Event) -> None:
        """Translate one pygame event into bus events."""
        if event.type == pygame.QUIT:
            self._running = False

        elif event.type == pygame.KEYDOWN:
            self._handle_keydown(event)

        elif event.type == pygame.MOUSEBUTTONDOWN:
            # Touches also arrive as synthesized mouse events
            if event.button == 1 and not getattr(event, "touch", False):
                self.event_bus.emit(impulse_event(source="mouse"))

        elif event.type == pygame.FINGERDOWN:
            self.event_bus.emit(impulse_event(source="touch"))

        elif event.type in (pygame.WINDOWMINIMIZED, pygame.WINDOWHIDDEN):
            self._set_hidden(True)

        elif event.type in (pygame.WINDOWRESTORED, pygame.WINDOWSHOWN):
            self._set_hidden(False)

    def _handle_keydown(self, event: pygame.event.Event) -> None:
        """Handle key press."""
        key = event.key

        if key == pygame.K_ESCAPE or key == pygame.K_q:
            self._running = False
        elif key in self.IMPULSE_KEYS:
            self.event_bus.emit(impulse_event(source="keyboard"))
        elif key == pygame.K_r:
            self.event_bus.emit(restart_event(source="keyboard"))
        elif key == pygame.K_p:
            event_type = EventType.RESUME if self.shell.paused_by("keyboard") else EventType.PAUSE
            self.event_bus.emit(Event(event_type, source="keyboard"))
        elif key == pygame.K_d:
            self._show_debug = not self._show_debug
        elif key == pygame.K_s:
            self._capture_screenshot()

    def _set_hidden(self, hidden: bool) -> None:
        if hidden == self._hidden:
            return
        self._hidden = hidden
        event_type = EventType.PAUSE if hidden else EventType.RESUME
        self.event_bus.emit(Event(event_type, source="window"))

    def _render(self) -> None:
        """Render the scene and the optional debug overlay."""
        if not self._screen:
            return

        self._buffer = self.renderer.render(
            self.shell.snapshot(), self.shell.overlay, self._buffer
        )
        surface = pygame.surfarray.make_surface(self._buffer.swapaxes(0, 1))
        if self.config.scale != 1:
            surface = pygame.transform.scale(surface, self._screen.get_size())
        self._screen.blit(surface, (0, 0))

        if self._show_debug:
            self._render_debug_panel()

        pygame.display.flip()

    def _render_debug_panel(self) -> None:
        """Render the debug information panel."""
        if not self._font:
            return

        snapshot = self.shell.snapshot()
        lines = [
            f"FPS: {self._clock.get_fps():.1f}" if self._clock else "FPS: --",
            f"Frame: {snapshot.frame}",
            f"Obstacles: {len(snapshot.obstacles)}",
            f"Status: {self.shell.engine.status.name}",
            f"Paused: {self.shell.paused}",
        ]

        rect = pygame.Rect(self._screen.get_width() - 170, 10, 160, 18 * len(lines) + 10)
        pygame.draw.rect(self._screen, self.config.panel_color, rect, border_radius=5)

        y = rect.y + 6
        for line in lines:
            text_surface = self._font.render(line, True, self.config.text_color)
            self._screen.blit(text_surface, (rect.x + 8, y))
            y += 18

    def _capture_screenshot(self) -> None:
        """Capture and save a screenshot."""
        if self._screen:
            filename = f"screenshot_{self._frame_count}.png"
            pygame.image.save(self._screen, filename)
            logger.info(f"Screenshot saved: {filename}")

    async def run(self) -> None:
        """Main game loop."""
        self._init_pygame()
        self._running = True

        logger.info("Game window started")

        while self._running:
            self._handle_events()

            if self._clock:
                delta = self._clock.get_time() / 1000.0
                self.event_bus.emit(tick_event(delta, self._frame_count))

            self._render()

            if self._clock:
                self._clock.tick(self.config.fps)

            self._frame_count += 1

            # Yield to other tasks
            await asyncio.sleep(0)

        self.event_bus.emit(Event(EventType.SHUTDOWN, source="window"))
        self._cleanup()

    def _cleanup(self) -> None:
        """Clean up pygame resources."""
        pygame.quit()
        logger.info("Game window stopped")

    def stop(self) -> None:
        """Stop the game loop."""
        self._running = False
