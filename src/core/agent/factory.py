"""Agent factory for the task-command interpreter."""

import logging
import os

from pydantic_ai import Agent

from src.config import Settings
from src.core.tasks.interpreter import LanguageModelInterpreter
from src.core.tasks.prompts import INTERPRETER_SYSTEM_PROMPT

logger = logging.getLogger(__name__)


class AgentFactory:
    """Factory for Pydantic AI agents used to interpret task commands.

    The interpreter needs no tools; each agent only carries the model name
    and the interpreter system prompt.

    Usage:
        factory = AgentFactory(api_key="...", model_name="gemini-2.5-flash")
        agent = factory.create_agent()
        result = await agent.run(prompt)
    """

    def __init__(self, api_key: str, model_name: str) -> None:
        """Initialize the agent factory.

        Args:
            api_key: Google API key.
            model_name: Gemini model name (without provider prefix).

        Raises:
            ValueError: If no API key is given.
        """
        if not api_key:
            raise ValueError(
                "GOOGLE_API_KEY environment variable is required. "
                "Set it or pass api_key parameter."
            )
        os.environ["GOOGLE_API_KEY"] = api_key  # Pydantic AI reads this
        self._model_name = model_name

    def create_agent(self) -> Agent:
        """Create a new Agent producing plain-text completions.

        Returns:
            A new Pydantic AI Agent instance.
        """
        return Agent(
            f"google-gla:{self._model_name}",
            system_prompt=INTERPRETER_SYSTEM_PROMPT,
        )


def create_interpreter(settings: Settings) -> LanguageModelInterpreter | None:
    """Build the language-model interpreter if a model is configured.

    Args:
        settings: Application settings.

    Returns:
        LanguageModelInterpreter, or None when no API key is set. A missing
        key is a supported configuration: commands use the flag parser only.
    """
    if not settings.model_enabled:
        logger.info("No language-model API key set; natural-language fallback disabled")
        return None

    factory = AgentFactory(api_key=settings.api_key, model_name=settings.gemini_model)
    logger.info("Language-model interpreter enabled (model=%s)", settings.gemini_model)
    return LanguageModelInterpreter(factory.create_agent())
