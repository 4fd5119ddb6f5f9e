"""Agent module: builds the Pydantic AI agent behind the task interpreter."""

from src.core.agent.factory import AgentFactory, create_interpreter

__all__ = ["AgentFactory", "create_interpreter"]
