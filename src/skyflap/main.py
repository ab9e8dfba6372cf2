"""
Main entry point for SKYFLAP.

Loads settings, restores the best score and opens the game window.
"""

import asyncio
import logging
import sys

from dotenv import load_dotenv


def setup_logging(debug: bool = False) -> None:
    """Configure logging."""
    level = logging.DEBUG if debug else logging.INFO
    logging.basicConfig(
        level=level,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%H:%M:%S"
    )


async def run_window() -> None:
    """Build the game and run the pygame window."""
    from skyflap.config.palette import load_palette
    from skyflap.config.settings import get_settings
    from skyflap.graphics.renderer import SceneRenderer
    from skyflap.shell import GameShell
    from skyflap.simulator.window import GameWindow

    settings = get_settings()
    shell = GameShell(settings)
    renderer = SceneRenderer(load_palette(settings.palette_file))

    window = GameWindow(shell, renderer)
    try:
        await window.run()
    finally:
        shell.close()


def main() -> None:
    """Main entry point."""
    load_dotenv()

    from pydantic import ValidationError
    from skyflap.config.settings import get_settings

    try:
        settings = get_settings()
    except ValidationError as e:
        setup_logging()
        logging.getLogger(__name__).error(f"Invalid configuration: {e}")
        sys.exit(1)

    setup_logging(settings.debug)

    logger = logging.getLogger(__name__)
    logger.info("SKYFLAP starting...")

    try:
        asyncio.run(run_window())
    except KeyboardInterrupt:
        logger.info("Interrupted by user")
    except Exception as e:
        logger.exception(f"Fatal error: {e}")
        sys.exit(1)

    logger.info("SKYFLAP stopped")


if __name__ == "__main__":
    main()
