"""Coach adapter: prompt assembly plus a bounded call to the LLM provider."""

import asyncio
from typing import Callable, Optional, Sequence

import structlog

from habits.errors import UpstreamServiceError
from habits.models import HabitStat, UserState
from llm import LLMError, LLMProvider
from observability import metrics
from shared_types import UpstreamFailure

from .prompts import build_coach_prompt

logger = structlog.get_logger()

DEFAULT_TIMEOUT_SECONDS = 30.0


class CoachAdapter:
    """Turns habit stats into coaching feedback.

    The provider is built lazily so a missing API key only breaks the coach
    operation, not the rest of the service. Every failure surfaces as
    UpstreamServiceError.
    """

    def __init__(
        self,
        provider: Optional[LLMProvider] = None,
        provider_factory: Optional[Callable[[], LLMProvider]] = None,
        timeout: float = DEFAULT_TIMEOUT_SECONDS,
        max_tokens: int = 1024,
    ):
        if provider is None and provider_factory is None:
            raise ValueError("CoachAdapter needs a provider or a provider_factory")
        self._provider = provider
        self._provider_factory = provider_factory
        self.timeout = timeout
        self.max_tokens = max_tokens

    def _get_provider(self) -> LLMProvider:
        if self._provider is None:
            self._provider = self._provider_factory()
        return self._provider

    def _generate(self, prompt: str) -> str:
        llm = self._get_provider()
        return llm.generate(
            messages=[{"role": "user", "content": prompt}],
            max_tokens=self.max_tokens,
        )

    async def reply(
        self, state: UserState, stats: Sequence[HabitStat], message: str
    ) -> str:
        prompt = build_coach_prompt(state, stats, message)

        try:
            with metrics.timer("coach.generate"):
                text = await asyncio.wait_for(
                    asyncio.to_thread(self._generate, prompt), timeout=self.timeout
                )
        except asyncio.TimeoutError as e:
            metrics.counter("coach.timeout")
            logger.warning("coach.timeout", timeout=self.timeout)
            raise UpstreamServiceError(
                "Coach did not answer in time", kind=UpstreamFailure.TIMEOUT
            ) from e
        except LLMError as e:
            metrics.counter("coach.error")
            logger.warning("coach.llm_error", error=str(e))
            raise UpstreamServiceError("Coach service unavailable") from e
        except Exception as e:
            metrics.counter("coach.error")
            logger.error("coach.unexpected_error", error=str(e))
            raise UpstreamServiceError("Coach service unavailable") from e

        if not isinstance(text, str) or not text.strip():
            metrics.counter("coach.malformed")
            logger.warning("coach.malformed_reply", reply_type=type(text).__name__)
            raise UpstreamServiceError(
                "Coach returned an empty reply", kind=UpstreamFailure.MALFORMED
            )

        return text.strip()
