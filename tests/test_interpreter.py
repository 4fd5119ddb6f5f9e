"""Tests for the language-model interpreter."""

from unittest.mock import AsyncMock, MagicMock

import pytest
from pydantic_ai import Agent
from pydantic_ai.messages import ModelMessage, ModelResponse, TextPart
from pydantic_ai.models.function import AgentInfo, FunctionModel

from src.core.tasks.interpreter import (
    LanguageModelInterpreter,
    parse_model_output,
    strip_code_fences,
)
from src.core.tasks.models import TaskIntent
from src.core.tasks.prompts import INTERPRETER_SYSTEM_PROMPT, build_interpreter_prompt


def _agent_returning(output: object) -> AsyncMock:
    agent = AsyncMock()
    result = MagicMock()
    result.output = output
    agent.run.return_value = result
    return agent


class TestParseModelOutput:
    """Test suite for parse_model_output."""

    def test_valid_update(self) -> None:
        """A well-formed answer becomes a TaskIntent."""
        text = '{"taskId": 7, "taskName": null, "priority": null, "dueDate": null, "status": "Done"}'
        assert parse_model_output(text) == TaskIntent(task_id=7, status="Done")

    def test_code_fences_stripped(self) -> None:
        """```json fences around the object are tolerated."""
        text = '```json\n{"taskName": "write report", "priority": "High"}\n```'
        assert parse_model_output(text) == TaskIntent(task_name="write report", priority="High")

    def test_null_strings_are_unset(self) -> None:
        """Literal "null" strings count as absent fields."""
        text = '{"taskId": null, "taskName": "plan trip", "priority": "null", "dueDate": "null", "status": "None"}'
        assert parse_model_output(text) == TaskIntent(task_name="plan trip")

    def test_not_json(self) -> None:
        """Prose answers are rejected."""
        assert parse_model_output("Sure! Task 7 is now done.") is None

    def test_not_an_object(self) -> None:
        """JSON arrays and scalars are rejected."""
        assert parse_model_output('[{"taskId": 7}]') is None
        assert parse_model_output("7") is None

    def test_invalid_enum(self) -> None:
        """Values outside the enums are a schema mismatch."""
        assert parse_model_output('{"taskId": 7, "status": "finished"}') is None
        assert parse_model_output('{"taskName": "x", "priority": "urgent"}') is None

    def test_invalid_date_format(self) -> None:
        """Dates must be YYYY-MM-DD."""
        assert parse_model_output('{"taskName": "x", "dueDate": "Feb 20"}') is None

    def test_unknown_field(self) -> None:
        """Extra keys are a schema mismatch."""
        assert parse_model_output('{"taskName": "x", "assignee": "me"}') is None

    def test_non_positive_or_string_id(self) -> None:
        """Ids must be positive JSON integers."""
        assert parse_model_output('{"taskId": 0, "status": "Done"}') is None
        assert parse_model_output('{"taskId": "7", "status": "Done"}') is None

    def test_empty(self) -> None:
        """Blank output is rejected."""
        assert parse_model_output("   ") is None

    def test_strip_code_fences_plain(self) -> None:
        """Fence-less text is only trimmed."""
        assert strip_code_fences('  {"a": 1} ') == '{"a": 1}'


class TestInterpreterPrompt:
    """Test suite for build_interpreter_prompt."""

    def test_prompt_contents(self) -> None:
        """The prompt carries the command, enums, year and examples."""
        prompt = build_interpreter_prompt("!task -id 3 mark it done", 2026)
        assert prompt.rstrip().endswith("!task -id 3 mark it done")
        assert '"Not started", "In progress", "Done"' in prompt
        assert '"High", "Medium", "Low"' in prompt
        assert "Dates without a year are in 2026." in prompt
        assert "2026-02-20" in prompt


class TestLanguageModelInterpreter:
    """Test suite for LanguageModelInterpreter."""

    @pytest.mark.asyncio
    async def test_interpret_success(self) -> None:
        """A valid completion is returned as an intent."""
        agent = _agent_returning('{"taskId": 7, "status": "Done"}')
        interpreter = LanguageModelInterpreter(agent)

        intent = await interpreter.interpret("!task -id 7 mark it complete", 2026)

        assert intent == TaskIntent(task_id=7, status="Done")
        prompt = agent.run.call_args.args[0]
        assert "!task -id 7 mark it complete" in prompt

    @pytest.mark.asyncio
    async def test_interpret_invalid_json(self) -> None:
        """Malformed completions yield None."""
        interpreter = LanguageModelInterpreter(_agent_returning("not json at all"))
        assert await interpreter.interpret("!task -id 7 done", 2026) is None

    @pytest.mark.asyncio
    async def test_interpret_agent_error(self) -> None:
        """Agent exceptions are swallowed into None."""
        agent = AsyncMock()
        agent.run.side_effect = RuntimeError("503 from provider")
        interpreter = LanguageModelInterpreter(agent)
        assert await interpreter.interpret("!task -id 7 done", 2026) is None

    @pytest.mark.asyncio
    async def test_interpret_non_text_output(self) -> None:
        """Non-string outputs are rejected."""
        interpreter = LanguageModelInterpreter(_agent_returning({"taskId": 7}))
        assert await interpreter.interpret("!task -id 7 done", 2026) is None

    @pytest.mark.asyncio
    async def test_with_pydantic_ai_function_model(self) -> None:
        """End to end through a real Agent backed by a FunctionModel."""
        seen: list[str] = []

        def reply(messages: list[ModelMessage], info: AgentInfo) -> ModelResponse:
            seen.append(str(messages))
            return ModelResponse(
                parts=[TextPart('```json\n{"taskId": 12, "dueDate": "2026-02-20"}\n```')]
            )

        agent = Agent(FunctionModel(reply), system_prompt=INTERPRETER_SYSTEM_PROMPT)
        interpreter = LanguageModelInterpreter(agent)

        intent = await interpreter.interpret("!task -id 12 change the deadline to feb 20", 2026)

        assert intent == TaskIntent(task_id=12, due_date="2026-02-20")
        assert seen and "change the deadline" in seen[0]
