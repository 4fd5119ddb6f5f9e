"""Task command module.

This module provides:
- TaskIntent, ParseResult, Interpretation, TaskRecord: pipeline data models
- normalize_due_date / normalize_status: token normalizers
- parse_task_command: deterministic flag parser
- needs_interpretation: ambiguity detector
- LanguageModelInterpreter: natural-language fallback
- IntentReconciler: chooses the authoritative intent
- TaskStore / StoreError: store protocol
- TaskCommandDispatcher: turns chat messages into store calls and replies
"""

from src.core.tasks.ambiguity import ambiguity_reasons, needs_interpretation
from src.core.tasks.dates import normalize_due_date
from src.core.tasks.dispatcher import TaskCommandDispatcher, ValidationFailure
from src.core.tasks.interpreter import LanguageModelInterpreter, parse_model_output
from src.core.tasks.models import (
    Interpretation,
    ParseResult,
    TaskIntent,
    TaskRecord,
)
from src.core.tasks.parser import (
    is_list_command,
    is_task_command,
    parse_task_command,
)
from src.core.tasks.reconciler import IntentReconciler
from src.core.tasks.status import normalize_status
from src.core.tasks.store import StoreError, TaskStore

__all__ = [
    "Interpretation",
    "IntentReconciler",
    "LanguageModelInterpreter",
    "ParseResult",
    "StoreError",
    "TaskCommandDispatcher",
    "TaskIntent",
    "TaskRecord",
    "TaskStore",
    "ValidationFailure",
    "ambiguity_reasons",
    "is_list_command",
    "is_task_command",
    "needs_interpretation",
    "normalize_due_date",
    "normalize_status",
    "parse_model_output",
    "parse_task_command",
]
