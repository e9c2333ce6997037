import time
from dataclasses import dataclass
from typing import Any

import dspy
from sqlalchemy.exc import SQLAlchemyError

from giftai.config import Settings
from giftai.logging import get_logger
from giftai.storage.db import get_session
from giftai.storage.repositories import log_llm_call
from giftai.utils.timing import format_duration

logger = get_logger(__name__)


@dataclass(frozen=True)
class SamplingConfig:
    name: str
    temperature: float
    top_k: int
    top_p: float
    max_tokens: int


def generation_sampling(settings: Settings) -> SamplingConfig:
    return SamplingConfig(
        name="generate",
        temperature=settings.llm_temperature,
        top_k=settings.llm_top_k,
        top_p=settings.llm_top_p,
        max_tokens=settings.llm_max_tokens,
    )


def refinement_sampling(settings: Settings) -> SamplingConfig:
    return SamplingConfig(
        name="refine",
        temperature=settings.llm_refine_temperature,
        top_k=settings.llm_top_k,
        top_p=settings.llm_top_p,
        max_tokens=settings.llm_refine_max_tokens,
    )


class GiftLLM:
    """
    Model client built once per process from Settings.

    Holds one dspy.LM per sampling profile and calls it with the prompt as a
    single user message. Prompts ask for bare JSON or a single word, so the
    completion text is returned as-is for the callers to parse.
    """

    def __init__(self, settings: Settings) -> None:
        self.settings = settings
        self._lms: dict[str, dspy.LM] = {}

    @property
    def model(self) -> str:
        return self.settings.llm_model_id

    @property
    def configured(self) -> bool:
        return bool(self.settings.llm_api_key)

    def _lm(self, sampling: SamplingConfig) -> dspy.LM:
        lm = self._lms.get(sampling.name)
        if lm is None:
            lm = dspy.LM(
                self.model,
                api_key=self.settings.llm_api_key,
                temperature=sampling.temperature,
                top_p=sampling.top_p,
                top_k=sampling.top_k,
                max_tokens=sampling.max_tokens,
                timeout=self.settings.llm_timeout_s,
                num_retries=0,
                cache=False,
            )
            self._lms[sampling.name] = lm
            logger.info(
                "llm.configure profile=%s model=%s temperature=%s max_tokens=%s",
                sampling.name,
                self.model,
                sampling.temperature,
                sampling.max_tokens,
            )
        return lm

    def complete(
        self,
        prompt_name: str,
        prompt_version: str,
        prompt: str,
        *,
        sampling: SamplingConfig,
    ) -> str:
        """One model call; returns the raw completion text."""
        lm = self._lm(sampling)

        def _call(prompt_template: str) -> str:
            return completion_text(lm(messages=[{"role": "user", "content": prompt_template}]))

        return run_with_logging(prompt_name, prompt_version, _call, model=self.model, prompt_template=prompt)


def completion_text(outputs: Any) -> str:
    """First completion of a dspy.LM call; entries are strings or dicts with a "text" key."""
    if not outputs:
        return ""
    first = outputs[0]
    if isinstance(first, dict):
        first = first.get("text") or ""
    return str(first or "")


def run_with_logging(
    prompt_name: str,
    prompt_version: str,
    fn: Any,
    *,
    model: str = "",
    **kwargs: Any,
) -> Any:
    start = time.time()
    logger.info("[TIMING] llm.call.start name=%s version=%s model=%s", prompt_name, prompt_version, model)
    result = fn(**kwargs)
    latency_ms = int((time.time() - start) * 1000)
    _record_call(prompt_name, prompt_version, model, str(kwargs), str(result), latency_ms)
    logger.info(
        "[TIMING] llm.call.end name=%s latency_ms=%s (%s)",
        prompt_name,
        latency_ms,
        format_duration(latency_ms),
    )
    return result


def _record_call(
    prompt_name: str,
    prompt_version: str,
    model: str,
    input_payload: str,
    output_payload: str,
    latency_ms: int,
) -> None:
    # Call-log write failures are logged only; the completion is still returned.
    try:
        with get_session() as session:
            log_llm_call(
                session=session,
                prompt_name=prompt_name,
                prompt_version=prompt_version,
                model=model,
                input_payload=input_payload,
                output_payload=output_payload,
                latency_ms=latency_ms,
            )
    except SQLAlchemyError as exc:
        logger.warning("llm.call_log.write_failed name=%s error=%s", prompt_name, exc)
