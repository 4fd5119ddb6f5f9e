# src/core/tasks/ambiguity.py
"""Heuristics deciding when a flag parse needs the language model.

The flag parser only understands exact flag syntax. When the residual text
still reads like an instruction ("-id 7 mark it done"), the parse is
probably incomplete and the command is escalated to the interpreter.
"""

import re

from src.core.tasks.models import ParseResult

UPDATE_VERBS = ("update", "change", "set", "mark", "move", "switch", "make")
DUE_WORDS = ("due", "deadline", "date")
PRIORITY_WORDS = ("priority", "urgent", "important")
STATUS_WORDS = ("complete", "finished", "progress", "started", "doing", "todo")


def _inflected(word: str) -> str:
    """Regex for a word and its -s, -ed and -ing forms."""
    if word.endswith("e"):
        return word[:-1] + "(?:e|es|ed|ing)"
    return word + "(?:s|ed|ing)?"


def _contains_any(text: str, words: tuple[str, ...]) -> bool:
    pattern = r"\b(?:" + "|".join(_inflected(word) for word in words) + r")\b"
    return re.search(pattern, text, re.IGNORECASE) is not None


def ambiguity_reasons(result: ParseResult) -> list[str]:
    """List the rules that flag a parse result as ambiguous.

    Args:
        result: Output of the flag parser.

    Returns:
        Rule names ("update_verb", "due_words", "priority_words",
        "status_words"); empty when the parse can be trusted.
    """
    intent = result.intent
    residual = result.residual_text
    if not residual:
        return []

    reasons: list[str] = []
    if intent.task_id is not None:
        if _contains_any(residual, UPDATE_VERBS):
            reasons.append("update_verb")
        if intent.due_date is None and _contains_any(residual, DUE_WORDS):
            reasons.append("due_words")
        if intent.priority is None and _contains_any(residual, PRIORITY_WORDS):
            reasons.append("priority_words")
    if intent.status is None and _contains_any(residual, STATUS_WORDS):
        reasons.append("status_words")
    return reasons


def needs_interpretation(result: ParseResult) -> bool:
    """Return True when the residual text suggests the parse is incomplete.

    Examples:
        >>> from src.core.tasks.parser import parse_task_command
        >>> needs_interpretation(
        ...     parse_task_command("!task -id 7 update the status to complete")
        ... )
        True
        >>> needs_interpretation(parse_task_command("!task -id 7 -status done"))
        False
    """
    return bool(ambiguity_reasons(result))
