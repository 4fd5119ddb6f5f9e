# src/core/tasks/reconciler.py
"""Intent reconciler: flag parser first, language model only when needed."""

import logging
from dataclasses import replace
from datetime import date

from src.core.tasks.ambiguity import ambiguity_reasons
from src.core.tasks.interpreter import LanguageModelInterpreter
from src.core.tasks.models import Interpretation
from src.core.tasks.parser import parse_task_command

logger = logging.getLogger(__name__)


class IntentReconciler:
    """Decides which interpretation of a task command is authoritative.

    The flag parser always runs. When its result looks ambiguous and an
    interpreter is available, the model's answer, if usable, replaces the
    parsed intent entirely. Otherwise the parsed intent stands, with the
    residual text as task name.

    Attributes:
        model_available: Whether a language-model interpreter was provided.
    """

    def __init__(self, interpreter: LanguageModelInterpreter | None = None) -> None:
        """Initialize the reconciler.

        Args:
            interpreter: Optional language-model interpreter. None disables
                escalation.
        """
        self._interpreter = interpreter
        self.model_available = interpreter is not None

    async def reconcile(
        self, command: str, today: date | None = None
    ) -> Interpretation:
        """Turn a raw `!task` command into the final intent.

        Args:
            command: Raw message text starting with `!task`.
            today: Reference date for year-less due dates.

        Returns:
            Interpretation holding the chosen intent and its source.
        """
        today = today or date.today()
        parsed = parse_task_command(command, today=today)
        reasons = ambiguity_reasons(parsed)
        escalated = bool(reasons)

        if escalated and self._interpreter is not None:
            logger.info("Escalating command to language model: %s", ", ".join(reasons))
            model_intent = await self._interpreter.interpret(command, today.year)
            if model_intent is not None and model_intent.is_actionable:
                return Interpretation(
                    intent=model_intent, source="model", escalated=True
                )
            logger.info("Language model gave no usable intent, using flag parse")
        elif escalated:
            logger.debug("Command looks ambiguous but no language model is configured")

        intent = replace(parsed.intent, task_name=parsed.residual_text or None)
        return Interpretation(intent=intent, source="parser", escalated=escalated)
