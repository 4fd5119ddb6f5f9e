"""Tests for the task command flag parser."""

from datetime import date

from src.core.tasks.models import TaskIntent
from src.core.tasks.parser import (
    is_list_command,
    is_task_command,
    parse_flags,
    parse_task_command,
)


class TestCommandDetection:
    """Test suite for command prefix detection."""

    def test_task_command(self) -> None:
        """`!task` followed by text or nothing is a task command."""
        assert is_task_command("!task buy milk")
        assert is_task_command("!task")
        assert is_task_command("  !TASK -high buy milk")

    def test_not_task_command(self) -> None:
        """Other messages are ignored."""
        assert not is_task_command("!tasks")
        assert not is_task_command("!taskforce meeting")
        assert not is_task_command("please !task this")
        assert not is_task_command("")

    def test_list_command_exact_match(self) -> None:
        """Only the exact `!tasks` text lists tasks."""
        assert is_list_command("!tasks")
        assert is_list_command("  !TASKS ")
        assert not is_list_command("!tasks please")
        assert not is_list_command("!task")


class TestParseTaskCommand:
    """Test suite for parse_task_command."""

    def test_plain_name(self, today: date) -> None:
        """Without flags the whole body is residual text."""
        result = parse_task_command("!task   buy milk  ", today=today)
        assert result.intent == TaskIntent()
        assert result.residual_text == "buy milk"

    def test_priority_flag(self, today: date) -> None:
        """Priority flags are capitalised."""
        result = parse_task_command("!task -HIGH buy milk", today=today)
        assert result.intent.priority == "High"
        assert result.residual_text == "buy milk"

    def test_all_flags_with_name(self, today: date) -> None:
        """Priority, month-name due date and name together."""
        result = parse_task_command("!task -medium -due feb 20 finish report", today=today)
        assert result.intent == TaskIntent(priority="Medium", due_date="2026-02-20")
        assert result.residual_text == "finish report"

    def test_flag_order_independence(self, today: date) -> None:
        """Flags parse the same in any order."""
        first = parse_task_command("!task -high -due 2/15 call bank", today=today)
        second = parse_task_command("!task -due 2/15 -high call bank", today=today)
        assert first == second
        assert first.intent.due_date == "2026-02-15"

    def test_all_flags(self, today: date) -> None:
        """All four flags can be combined."""
        result = parse_task_command(
            "!task -id 7 -status in progress -low -due 2026-03-01", today=today
        )
        assert result.intent == TaskIntent(
            task_id=7, priority="Low", due_date="2026-03-01", status="In progress"
        )
        assert result.residual_text == ""

    def test_multi_word_status(self, today: date) -> None:
        """`not started` is consumed as one status value."""
        result = parse_task_command("!task -status not started plan trip", today=today)
        assert result.intent.status == "Not started"
        assert result.residual_text == "plan trip"

    def test_to_do_status(self, today: date) -> None:
        """`to do` is consumed as one status value."""
        result = parse_task_command("!task -status to do plan trip", today=today)
        assert result.intent.status == "Not started"
        assert result.residual_text == "plan trip"

    def test_unknown_status_passes_through(self, today: date) -> None:
        """Unrecognized status words are kept for the caller to validate."""
        result = parse_task_command("!task -status blocked plan trip", today=today)
        assert result.intent.status == "blocked"
        assert result.residual_text == "plan trip"

    def test_unparseable_due_date_is_dropped(self, today: date) -> None:
        """A bad due token is consumed and not left in the name."""
        result = parse_task_command("!task -due tomorrow water plants", today=today)
        assert result.intent.due_date is None
        assert result.residual_text == "water plants"

    def test_repeated_flag_last_wins(self, today: date) -> None:
        """When a flag repeats the last value is kept."""
        result = parse_task_command("!task -high -low tidy desk", today=today)
        assert result.intent.priority == "Low"

    def test_id_flag(self, today: date) -> None:
        """The id flag is parsed as an integer."""
        result = parse_task_command("!task -id 42", today=today)
        assert result.intent.task_id == 42
        assert result.residual_text == ""

    def test_zero_id_is_dropped(self, today: date) -> None:
        """Ids must be positive."""
        result = parse_task_command("!task -id 0 -high", today=today)
        assert result.intent.task_id is None
        assert result.intent.priority == "High"

    def test_flags_after_name_stay_in_residual(self, today: date) -> None:
        """Flags are only recognized before the free text."""
        result = parse_task_command("!task buy milk -high", today=today)
        assert result.intent.priority is None
        assert result.residual_text == "buy milk -high"

    def test_flag_prefix_of_word_not_matched(self, today: date) -> None:
        """`-highway` is not the `-high` flag."""
        result = parse_task_command("!task -highway cleanup", today=today)
        assert result.intent.priority is None
        assert result.residual_text == "-highway cleanup"

    def test_empty_command(self, today: date) -> None:
        """A bare prefix yields an empty result."""
        result = parse_task_command("!task", today=today)
        assert result.intent == TaskIntent()
        assert result.residual_text == ""

    def test_due_flag_without_value(self, today: date) -> None:
        """A trailing `-due` with no value is left as residual text."""
        result = parse_flags("-due", today=today)
        assert result.intent.due_date is None
        assert result.residual_text == "-due"
