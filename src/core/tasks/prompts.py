# src/core/tasks/prompts.py
"""Prompt builder for language-model task interpretation.

The model is asked for a single JSON object shaped like a TaskIntent. The
worked examples pin the output format; the current year is passed in so
month-day dates resolve the same way the flag parser resolves them.
"""

from src.core.tasks.models import PRIORITIES, STATUSES

INTERPRETER_SYSTEM_PROMPT = """You convert chat commands about a task list into JSON.
Reply with exactly one JSON object and nothing else: no prose, no code fences."""


def build_interpreter_prompt(command: str, year: int) -> str:
    """Build the completion prompt for one command.

    Args:
        command: Raw command text, including the `!task` prefix.
        year: Current calendar year for dates given without a year.

    Returns:
        Prompt text listing the schema, allowed values, and examples.

    Example:
        >>> prompt = build_interpreter_prompt("!task -id 3 mark it done", 2025)
        >>> "!task -id 3 mark it done" in prompt
        True
        >>> "2025-02-20" in prompt
        True
    """
    priorities = ", ".join(f'"{p}"' for p in PRIORITIES)
    statuses = ", ".join(f'"{s}"' for s in STATUSES)

    return f"""[Schema]
{{
  "taskId": integer or null,    // id of an existing task to update; null creates a new task
  "taskName": string or null,   // name of a new task; null when updating
  "priority": one of {priorities} or null,
  "dueDate": "YYYY-MM-DD" or null,
  "status": one of {statuses} or null
}}

[Rules]
- Use null for anything the command does not mention.
- Dates without a year are in {year}.
- "-id N", "#N" or "task N" refer to an existing task: set taskId and leave taskName null.
- Words like finished/complete mean "Done"; started/working on/doing mean "In progress".

[Examples]
Command: !task -id 12 change the deadline to feb 20
{{"taskId": 12, "taskName": null, "priority": null, "dueDate": "{year}-02-20", "status": null}}

Command: !task -id 4 mark this as complete and make it urgent
{{"taskId": 4, "taskName": null, "priority": "High", "dueDate": null, "status": "Done"}}

Command: !task write the quarterly report, already in progress, due 3/15
{{"taskId": null, "taskName": "write the quarterly report", "priority": null, "dueDate": "{year}-03-15", "status": "In progress"}}

[Command]
{command}"""
