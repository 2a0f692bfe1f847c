"""
Main entry point for planeflap.

Reads settings, builds the game and runs the window loop.
"""

import asyncio
import logging
import sys
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv

from planeflap.audio.engine import AudioEngine
from planeflap.config.settings import Settings, get_settings
from planeflap.engine.scale import is_desktop
from planeflap.game import create_game


def setup_logging(debug: bool = False, log_file: Optional[Path] = None) -> None:
    """Configure logging."""
    level = logging.DEBUG if debug else logging.INFO
    handlers: list[logging.Handler] = [logging.StreamHandler()]
    if log_file is not None:
        handlers.append(logging.FileHandler(log_file, encoding="utf-8"))
    logging.basicConfig(
        level=level,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%H:%M:%S",
        handlers=handlers,
    )


def resolve_desktop(scale_mode: str) -> bool:
    """Map the configured scale mode onto the game's desktop flag."""
    if scale_mode == "show_all":
        return False
    if scale_mode == "no_scale":
        return True
    return is_desktop()


async def run_game(settings: Settings) -> None:
    """Build the game and run the window until it is closed."""
    from planeflap.window import GameWindow

    logger = logging.getLogger(__name__)

    audio = AudioEngine(
        master_volume=settings.audio.master_volume,
        muted=settings.audio.muted,
    )
    if settings.audio.enabled:
        audio.init()
    else:
        logger.info("Audio disabled")

    game = create_game(
        assets_path=settings.assets_path,
        audio=audio,
        seed=settings.seed,
        desktop=resolve_desktop(settings.display.scale_mode),
    )

    window = GameWindow(game, settings.display)
    await window.run()


def main() -> None:
    """Main entry point."""
    load_dotenv()

    settings = get_settings()
    setup_logging(settings.debug, settings.log_file)

    logger = logging.getLogger(__name__)
    logger.info("planeflap starting...")

    try:
        asyncio.run(run_game(settings))
    except KeyboardInterrupt:
        logger.info("Interrupted by user")
    except Exception as e:
        logger.exception(f"Fatal error: {e}")
        sys.exit(1)

    logger.info("planeflap stopped")


if __name__ == "__main__":
    main()
