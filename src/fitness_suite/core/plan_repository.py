"""Workout plan repository: holds the active weekly plan."""

import logging
from datetime import datetime
from typing import Callable

from ..io.kv_store import PersistentStore
from ..io.serializers import dict_to_plan, plan_to_dict
from .config import PLAN_KEY
from .models import DayPlan, WorkoutPlan
from .plan_loader import load_default_plan
from .progress_log import ProgressLog

logger = logging.getLogger(__name__)


class WorkoutPlanRepository:
    """
    The active plan, persisted under ``workoutPlan``.

    The plan is only ever replaced as a whole. Replacing it clears the
    progress log, because the new plan's exercise keys do not line up with
    the old ones.
    """

    def __init__(
        self,
        store: PersistentStore,
        progress_log: ProgressLog,
        key: str = PLAN_KEY,
        default_factory: Callable[[], WorkoutPlan] = load_default_plan,
    ):
        self.store = store
        self.progress_log = progress_log
        self.key = key
        plan = store.load(key, None, decode=dict_to_plan)
        self._plan: WorkoutPlan = plan if plan is not None else default_factory()

    def get(self) -> WorkoutPlan:
        return self._plan

    def replace(self, new_plan: WorkoutPlan) -> None:
        """
        Persist ``new_plan``, swap it in, and clear the progress log.

        If the save fails the current plan and the log are left untouched.
        """
        plan = dict(new_plan)
        self.store.save(self.key, plan, encode=plan_to_dict)
        self._plan = plan
        self.progress_log.clear()
        logger.info("Adopted new plan with days: %s", ", ".join(self._plan))

    def days(self) -> list[str]:
        return list(self._plan)

    def day(self, name: str) -> DayPlan | None:
        return self._plan.get(name)

    def today_name(self, now: datetime | None = None) -> str | None:
        """
        Weekday to show by default: today if the plan has it, else the first day.

        Returns None for an empty plan.
        """
        weekday = (now or datetime.now()).strftime("%A")
        if weekday in self._plan:
            return weekday
        return next(iter(self._plan), None)
