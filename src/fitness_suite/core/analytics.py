"""Read-only progress view over the progress log."""

from .models import ProgressSummary, SeriesPoint
from .progress_log import ProgressLog


class ProgressAnalytics:
    """
    Chart series and headline stats for one selected exercise.

    The only state is the selected name. Nothing is cached: every read
    derives from the current log.
    """

    def __init__(self, progress_log: ProgressLog, selected: str = ""):
        self.progress_log = progress_log
        self._selected = selected

    def exercises(self) -> list[str]:
        return self.progress_log.distinct_exercise_names()

    @property
    def selected(self) -> str:
        """The chosen exercise if it is still logged, else the first logged one, else ""."""
        names = self.exercises()
        if self._selected in names:
            return self._selected
        return names[0] if names else ""

    def select(self, name: str) -> None:
        self._selected = name

    def series(self) -> list[SeriesPoint]:
        name = self.selected
        return self.progress_log.series_for(name) if name else []

    def summary(self) -> ProgressSummary:
        return self.progress_log.summary(self.selected)

    def needs_more_days(self) -> bool:
        """True when there are too few days for a trend line."""
        return len(self.series()) < 2
