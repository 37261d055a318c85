"""Progress display with rich fallback to logging."""

import logging
import sys
from typing import Optional

logger = logging.getLogger(__name__)


class ProgressTracker:
    """Counts finished items of a batch, drawing a rich bar when attached to a terminal."""

    def __init__(self, total: int, description: str = 'Working', use_rich: Optional[bool] = None):
        self.total = total
        self.description = description
        self.completed = 0
        self._progress = None
        self._task_id = None

        if use_rich is None:
            use_rich = self._is_tty()

        if use_rich:
            from rich.progress import (
                Progress, SpinnerColumn, TextColumn,
                BarColumn, TaskProgressColumn,
            )
            self._progress = Progress(
                SpinnerColumn(),
                TextColumn("[bold blue]{task.description}"),
                BarColumn(),
                TaskProgressColumn(),
                transient=True,
            )

    @staticmethod
    def _is_tty() -> bool:
        """Check if stdout is connected to a terminal."""
        return sys.stdout.isatty()

    def __enter__(self):
        if self._progress is not None:
            self._progress.start()
            self._task_id = self._progress.add_task(self.description, total=self.total or None)
        return self

    def __exit__(self, exc_type, exc, tb):
        if self._progress is not None:
            self._progress.stop()
        return False

    def advance(self, message: str = ""):
        self.completed += 1
        if self._progress is not None and self._task_id is not None:
            self._progress.update(self._task_id, advance=1)
        if message:
            logger.info("[%d/%d] %s", self.completed, self.total, message)
