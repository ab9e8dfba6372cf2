"""Best score persistence in a small JSON file."""

import json
import logging
from pathlib import Path

logger = logging.getLogger(__name__)

DEFAULT_KEY = "flappy-best"


class BestScoreStore:
    """Persistent best score using a JSON file.

    The file holds a single object, ``{"flappy-best": 12}``. Anything
    missing or malformed reads as 0.
    """

    def __init__(self, path: Path, key: str = DEFAULT_KEY):
        self.path = Path(path)
        self.key = key
        self._best = 0

    @property
    def best(self) -> int:
        """Last loaded or saved best score."""
        return self._best

    def load(self) -> int:
        """Load the stored best score, defaulting to 0."""
        self._best = 0
        if not self.path.exists():
            logger.debug(f"No best score file at {self.path}")
            return self._best

        try:
            with open(self.path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except (OSError, ValueError) as e:
            logger.warning(f"Failed to read best score from {self.path}: {e}")
            return self._best

        self._best = self._parse(data.get(self.key) if isinstance(data, dict) else None)
        logger.info(f"Loaded best score: {self._best}")
        return self._best

    def save(self, best: int) -> None:
        """Write best score to file."""
        self._best = best
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            with open(self.path, "w", encoding="utf-8") as f:
                json.dump({self.key: best}, f)
        except OSError as e:
            logger.error(f"Failed to save best score: {e}")

    def record(self, score: int) -> bool:
        """Save score if it beats the stored best.

        Returns:
            True if a new best was written
        """
        if score <= self._best:
            return False
        self.save(score)
        logger.info(f"New best score saved: {score}")
        return True

    def _parse(self, raw: object) -> int:
        if isinstance(raw, bool) or raw is None:
            return 0
        try:
            value = int(raw)
        except (TypeError, ValueError, OverflowError):
            logger.warning(f"Ignoring malformed best score: {raw!r}")
            return 0
        return max(0, value)
