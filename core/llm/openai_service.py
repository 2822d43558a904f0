"""
OpenAI Service - Ranking oracle implementation using the OpenAI API.

Works against any OpenAI-compatible endpoint (OpenAI, Ollama, vLLM) using
JSON Schema structured output.
"""
from typing import Any, Dict, List, Optional, Tuple
import json
import logging
import copy

import openai
from openai import OpenAI
from tenacity import (
    RetryCallState,
    retry,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential,
)

from core.exceptions import OracleError
from core.llm.interfaces import RankingOracle
from core.llm.schema_models import RANKING_SCHEMA
from core.llm.system_prompts import RANKING_SYSTEM_PROMPT, RANKING_USER_TEMPLATE

logger = logging.getLogger(__name__)

RETRYABLE_ERRORS = (
    openai.RateLimitError,
    openai.APITimeoutError,
    openai.APIConnectionError,
    openai.InternalServerError,
)


def _log_retry(retry_state: RetryCallState) -> None:
    """Log a warning before each retry sleep."""
    exc = retry_state.outcome.exception()
    wait = retry_state.next_action.sleep if retry_state.next_action else 0
    logger.warning(
        "Oracle call failed (attempt %s). Waiting %.1fs before retry. Details: %s",
        retry_state.attempt_number, wait, exc,
    )


def _unwrap_schema_spec(spec: Dict[str, Any]) -> Tuple[str, bool, Dict[str, Any]]:
    """Unwrap {'name', 'strict', 'schema'} into its parts; a raw schema gets defaults."""
    if isinstance(spec, dict) and "schema" in spec and "name" in spec:
        return spec.get("name", "ranking_response"), bool(spec.get("strict", False)), spec["schema"]
    return "ranking_response", False, spec


class OpenAIRankingOracle(RankingOracle):
    """
    OpenAI ranking oracle.

    Every attempt is bounded by the client timeout and the number of attempts
    is capped, so a call can never block a matching run indefinitely.
    """

    def __init__(
        self,
        api_key: Optional[str] = None,
        base_url: Optional[str] = None,
        model: str = "gpt-4o-mini",
        temperature: float = 0.0,
        timeout_seconds: float = 20.0,
        max_attempts: int = 2,
        client: Optional[OpenAI] = None
    ):
        if client is None:
            client_kwargs: Dict[str, Any] = {'timeout': timeout_seconds, 'max_retries': 0}
            if api_key:
                client_kwargs['api_key'] = api_key
            if base_url:
                client_kwargs['base_url'] = base_url
            client = OpenAI(**client_kwargs)

        self.client = client
        self.model = model
        self.temperature = temperature
        self.timeout_seconds = timeout_seconds
        self.max_attempts = max(1, max_attempts)

    def rank(
        self,
        requirement_summary: Dict[str, Any],
        candidate_summaries: List[Dict[str, Any]]
    ) -> Dict[str, Any]:
        user_message = RANKING_USER_TEMPLATE.format(
            requirement=json.dumps(requirement_summary, ensure_ascii=False, default=str),
            candidates=json.dumps(candidate_summaries, ensure_ascii=False, default=str),
        )
        retrying = retry(
            retry=retry_if_exception_type(RETRYABLE_ERRORS),
            wait=wait_exponential(multiplier=1, min=1, max=4),
            stop=stop_after_attempt(self.max_attempts),
            before_sleep=_log_retry,
            reraise=True,
        )
        data = retrying(self._complete)(user_message, RANKING_SCHEMA)
        logger.info(
            f"Oracle ({self.model}) scored {len(data.get('matches') or [])}"
            f"/{len(candidate_summaries)} candidates"
        )
        return data

    def _complete(self, user_message: str, schema_spec: Dict[str, Any]) -> Dict[str, Any]:
        name, strict, raw_schema = _unwrap_schema_spec(schema_spec)
        runtime_schema = copy.deepcopy(raw_schema)

        response = self.client.chat.completions.create(
            model=self.model,
            messages=[
                {"role": "system", "content": RANKING_SYSTEM_PROMPT},
                {"role": "user", "content": user_message},
            ],
            temperature=self.temperature,
            timeout=self.timeout_seconds,
            response_format={
                "type": "json_schema",
                "json_schema": {
                    "name": name,
                    "schema": runtime_schema,
                    "strict": strict,
                },
            },
        )

        try:
            content = response.choices[0].message.content
            data = json.loads(content)
        except (json.JSONDecodeError, IndexError, AttributeError, TypeError) as e:
            logger.error(f"Failed to parse oracle response: {e}")
            raise OracleError(f"Unparseable oracle response: {e}") from e

        if not isinstance(data, dict):
            raise OracleError(f"Oracle returned {type(data).__name__}, expected an object")
        return data
