# src/core/tasks/interpreter.py
"""Language-model interpreter for free-form task commands.

Sends the raw command to a Pydantic AI agent, then strictly validates the
reply: optional code fences are stripped, the rest must decode as a JSON
object matching ModelTaskIntent. Anything else yields None so the caller
can fall back to the deterministic parse.
"""

import json
import logging
import re
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator
from pydantic_ai import Agent

from src.core.tasks.models import TaskIntent
from src.core.tasks.prompts import build_interpreter_prompt

logger = logging.getLogger(__name__)

CODE_FENCE_PATTERN = re.compile(
    r"^```(?:json)?\s*(.*?)\s*```$", re.DOTALL | re.IGNORECASE
)


class ModelTaskIntent(BaseModel):
    """JSON schema the model must answer with."""

    model_config = ConfigDict(extra="forbid")

    task_id: int | None = Field(None, alias="taskId", gt=0, strict=True)
    task_name: str | None = Field(None, alias="taskName")
    priority: Literal["High", "Medium", "Low"] | None = None
    due_date: str | None = Field(None, alias="dueDate", pattern=r"^\d{4}-\d{2}-\d{2}$")
    status: Literal["Not started", "In progress", "Done"] | None = None

    @field_validator("*", mode="before")
    @classmethod
    def _null_strings_are_unset(cls, value: Any) -> Any:
        """Treat "null", "none" and blank strings as absent."""
        if isinstance(value, str) and value.strip().lower() in ("", "null", "none"):
            return None
        return value

    def to_intent(self) -> TaskIntent:
        """Convert to the pipeline's TaskIntent."""
        name = self.task_name.strip() if self.task_name else None
        return TaskIntent(
            task_id=self.task_id,
            task_name=name or None,
            priority=self.priority,
            due_date=self.due_date,
            status=self.status,
        )


def strip_code_fences(text: str) -> str:
    """Remove a surrounding ``` or ```json fence, if any.

    Examples:
        >>> strip_code_fences('```json\\n{"a": 1}\\n```')
        '{"a": 1}'
        >>> strip_code_fences('{"a": 1}')
        '{"a": 1}'
    """
    stripped = text.strip()
    match = CODE_FENCE_PATTERN.match(stripped)
    return match.group(1) if match else stripped


def parse_model_output(text: str) -> TaskIntent | None:
    """Decode and validate a model reply.

    Args:
        text: Raw completion text.

    Returns:
        TaskIntent on success, None on malformed JSON or schema mismatch.
    """
    if not text or not text.strip():
        return None

    try:
        payload = json.loads(strip_code_fences(text))
    except json.JSONDecodeError:
        logger.warning("Model reply is not valid JSON: %s", text[:200])
        return None

    if not isinstance(payload, dict):
        logger.warning("Model reply is not a JSON object: %s", text[:200])
        return None

    try:
        return ModelTaskIntent.model_validate(payload).to_intent()
    except ValidationError as e:
        logger.warning("Model reply does not match task schema: %s", e)
        return None


class LanguageModelInterpreter:
    """Interprets natural-language task commands with a Pydantic AI agent.

    The agent is expected to carry the interpreter system prompt; see
    src.core.agent.factory.AgentFactory.create_agent().

    Example:
        >>> interpreter = LanguageModelInterpreter(agent)
        >>> intent = await interpreter.interpret("!task -id 3 mark it done", 2025)
        >>> if intent is None:
        ...     print("fall back to the flag parser")
    """

    def __init__(self, agent: Agent) -> None:
        """Initialize the interpreter.

        Args:
            agent: Agent producing plain-text completions.
        """
        self._agent = agent

    async def interpret(self, command: str, year: int) -> TaskIntent | None:
        """Ask the model for a structured intent.

        Args:
            command: Raw command text.
            year: Current calendar year for year-less dates.

        Returns:
            Validated TaskIntent, or None on any failure.
        """
        prompt = build_interpreter_prompt(command, year)
        try:
            result = await self._agent.run(prompt)
        except Exception as e:
            logger.warning("Language-model interpretation failed: %s", e)
            return None

        output = result.output
        if not isinstance(output, str):
            logger.warning("Unexpected model output type: %s", type(output).__name__)
            return None
        return parse_model_output(output)
