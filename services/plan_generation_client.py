"""
Plan Generation Client

The only network boundary of the planner. Sends one PlanRequest to Gemini
with a JSON response schema and turns the reply into a GeneratedPlan.

Non-negotiable rules:
- Exactly one generate_content call per invocation. No retries.
- Missing API key → ConfigurationError before anything is sent.
- Transport error, timeout, empty text, invalid JSON, schema mismatch or an
  empty drills list → PlanServiceError. No partial plan is ever returned.
"""

import asyncio
import json
import logging
import time
from typing import Any, Optional

from google import genai
from google.genai import types as genai_types
from pydantic import ValidationError as SchemaValidationError

from core.config import settings
from core.exceptions import ConfigurationError, PlanServiceError
from schemas import GeneratedPlan
from services.plan_prompt_builder import PlanRequest

logger = logging.getLogger(__name__)


class PlanGenerationClient:
    """
    Async Gemini client for structured practice plans.

    Usage:
        client = PlanGenerationClient()
        raw_plan = await client.generate(request)

    A pre-built google.genai.Client (or a mock with the same surface) may be
    injected; otherwise one is created from GOOGLE_AI_API_KEY on first use.
    """

    def __init__(
        self,
        gemini_client: Any = None,
        api_key: Optional[str] = None,
        model: Optional[str] = None,
        timeout_s: Optional[float] = None,
    ):
        self._client = gemini_client
        self._api_key = api_key
        self.model = model or settings.PLAN_MODEL
        self.timeout_s = timeout_s if timeout_s is not None else settings.PLAN_GENERATION_TIMEOUT_S

    def _get_client(self) -> Any:
        if self._client is not None:
            return self._client

        api_key = self._api_key or settings.GOOGLE_AI_API_KEY
        if not api_key:
            raise ConfigurationError(
                "GOOGLE_AI_API_KEY is not set; cannot reach the plan generation service."
            )
        self._client = genai.Client(api_key=api_key)
        logger.info(f"Gemini client initialized for plan generation ({self.model})")
        return self._client

    async def generate(self, request: PlanRequest) -> GeneratedPlan:
        """Call Gemini once and return the schema-validated plan."""
        client = self._get_client()

        config = genai_types.GenerateContentConfig(
            system_instruction=request.system_instruction,
            response_mime_type="application/json",
            response_schema=request.response_schema,
            temperature=settings.PLAN_TEMPERATURE,
            max_output_tokens=settings.PLAN_MAX_OUTPUT_TOKENS,
        )

        start = time.monotonic()
        try:
            response = await asyncio.wait_for(
                client.aio.models.generate_content(
                    model=self.model,
                    contents=request.prompt,
                    config=config,
                ),
                timeout=self.timeout_s,
            )
        except asyncio.TimeoutError as e:
            raise PlanServiceError(
                f"Plan generation timed out after {self.timeout_s:.0f}s"
            ) from e
        except Exception as e:
            raise PlanServiceError(f"Plan generation request failed: {e}") from e

        latency_ms = int((time.monotonic() - start) * 1000)
        plan = parse_plan_response(_response_text(response))

        usage = getattr(response, "usage_metadata", None)
        logger.info(
            f"Generated {request.mode.value} plan with {len(plan.drills)} drills in {latency_ms}ms",
            extra={
                "extra_fields": {
                    "mode": request.mode.value,
                    "model": self.model,
                    "latency_ms": latency_ms,
                    "input_tokens": getattr(usage, "prompt_token_count", 0) or 0,
                    "output_tokens": getattr(usage, "candidates_token_count", 0) or 0,
                }
            },
        )
        return plan


def _response_text(response: Any) -> str:
    """Concatenate the text parts of the first candidate."""
    if response is None or not getattr(response, "candidates", None):
        return ""
    candidate = response.candidates[0]
    if not candidate.content or not candidate.content.parts:
        return ""
    return "".join(part.text or "" for part in candidate.content.parts)


def parse_plan_response(raw_text: str) -> GeneratedPlan:
    """
    Parse and validate a plan reply.

    Raises PlanServiceError on any contract violation.
    """
    text = (raw_text or "").strip()
    if not text:
        raise PlanServiceError("Plan generation service returned an empty response")

    # Strip markdown fences if present
    if text.startswith("```"):
        lines = [line for line in text.split("\n") if not line.strip().startswith("```")]
        text = "\n".join(lines).strip()

    try:
        data = json.loads(text)
    except json.JSONDecodeError as e:
        logger.warning("Plan response is not valid JSON. Raw: %s", text[:200])
        raise PlanServiceError("Plan generation service returned malformed JSON") from e

    try:
        plan = GeneratedPlan.model_validate(data)
    except SchemaValidationError as e:
        logger.warning("Plan response does not match schema: %s", e.errors()[:3])
        raise PlanServiceError("Plan generation service response does not match the plan schema") from e

    if not plan.drills:
        raise PlanServiceError("Plan generation service returned a plan with no drills")

    return plan
