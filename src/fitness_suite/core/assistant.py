"""
AI assistant actions: explain, swap, nutrition Q&A, and plan generation.

Every action resolves to a reply object; LLM failures and malformed plan
payloads become user-facing messages and never change application state.
Each action site allows a single request in flight at a time.
"""

import json
import logging
from contextlib import contextmanager
from dataclasses import dataclass
from typing import Any, Iterator, Protocol

from ..io.serializers import ValidationError, dict_to_plan
from ..llm.client import LLMError, MissingCredentialError
from ..llm.prompts import (
    explain_exercise_prompt,
    nutrition_prompt,
    plan_prompt,
    plan_schema,
    swap_exercise_prompt,
)
from .config import DEFAULT_EXPERIENCE, DEFAULT_GOAL
from .models import WorkoutPlan

logger = logging.getLogger(__name__)

PLAN_FORMAT_ERROR = "The AI returned a plan in an unexpected format. Please try again."
IN_FLIGHT_ERROR = "A request for this action is already in progress. Please wait."
EMPTY_QUERY_ERROR = "Please enter a question first."


class TextGenerator(Protocol):
    async def generate(self, prompt: str, schema: dict[str, Any] | None = None) -> str: ...


@dataclass
class AssistantReply:
    ok: bool
    title: str
    text: str


@dataclass
class PlanProposal:
    """A generated plan awaiting the user's decision. ``plan`` is None on failure."""

    ok: bool
    title: str
    plan: WorkoutPlan | None = None
    message: str = ""


class RequestInFlight(Exception):
    pass


def _error_text(exc: LLMError) -> str:
    if isinstance(exc, MissingCredentialError):
        return str(exc)
    return f"Sorry, an error occurred: {exc}"


class Assistant:
    """Runs AI actions against a TextGenerator (normally GeminiClient)."""

    def __init__(self, client: TextGenerator):
        self.client = client
        self._in_flight: set[str] = set()

    def is_pending(self, site: str) -> bool:
        return site in self._in_flight

    @contextmanager
    def _single_flight(self, site: str) -> Iterator[None]:
        if site in self._in_flight:
            raise RequestInFlight(site)
        self._in_flight.add(site)
        try:
            yield
        finally:
            self._in_flight.discard(site)

    async def _ask(self, site: str, title: str, prompt: str) -> AssistantReply:
        try:
            with self._single_flight(site):
                text = await self.client.generate(prompt)
        except RequestInFlight:
            return AssistantReply(ok=False, title=title, text=IN_FLIGHT_ERROR)
        except LLMError as e:
            return AssistantReply(ok=False, title=title, text=_error_text(e))
        return AssistantReply(ok=True, title=title, text=text)

    async def explain_exercise(self, name: str) -> AssistantReply:
        return await self._ask("explain", f"Explaining: {name}", explain_exercise_prompt(name))

    async def suggest_swap(self, name: str) -> AssistantReply:
        return await self._ask("swap", f"Swap Suggestion for: {name}", swap_exercise_prompt(name))

    async def ask_nutrition(self, query: str) -> AssistantReply:
        title = "AI Nutrition Helper"
        if not query.strip():
            return AssistantReply(ok=False, title=title, text=EMPTY_QUERY_ERROR)
        return await self._ask("nutrition", title, nutrition_prompt(query.strip()))

    async def generate_plan(
        self,
        goal: str = DEFAULT_GOAL,
        experience: str = DEFAULT_EXPERIENCE,
        equipment: str = "",
    ) -> PlanProposal:
        """
        Ask the model for a new weekly plan.

        The proposal is not adopted here; the caller decides whether to pass
        ``proposal.plan`` to AppState.adopt_plan.
        """
        title = "Your New AI-Generated Plan"
        try:
            with self._single_flight("generate"):
                text = await self.client.generate(plan_prompt(goal, experience, equipment), plan_schema())
        except RequestInFlight:
            return PlanProposal(ok=False, title=title, message=IN_FLIGHT_ERROR)
        except LLMError as e:
            return PlanProposal(ok=False, title=title, message=_error_text(e))

        try:
            plan = dict_to_plan(json.loads(text))
            if not plan:
                raise ValidationError("generated plan has no days")
        except (json.JSONDecodeError, ValidationError, ValueError) as e:
            logger.warning("Generated plan rejected: %s", e)
            return PlanProposal(ok=False, title="Generation Failed", message=PLAN_FORMAT_ERROR)

        return PlanProposal(ok=True, title=title, plan=plan)
