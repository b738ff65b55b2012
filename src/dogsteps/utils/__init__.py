"""
Utility functions and helpers for the DogSteps application.

This module contains the structured logging helpers shared by the services
and the Lambda handler. Every log line is a single JSON object printed to
stdout so CloudWatch can index it.
"""

import json
from datetime import datetime
from typing import Any, Dict, Iterable, Optional

__version__ = "0.1.0"

SENSITIVE_FIELDS = ("body", "name", "dog_name")


def log_event(event: str, **fields: Any) -> None:
    """
    Print a structured log line for an application event.

    Args:
        event: Event name, e.g. "WALK_SESSION_SAVED"
        **fields: Additional JSON-serializable context
    """
    log_data: Dict[str, Any] = {
        "event": event,
        "timestamp": datetime.utcnow().isoformat(),
    }
    log_data.update(fields)

    try:
        print(json.dumps(log_data, default=str))
    except (TypeError, ValueError) as e:
        print(f"Error logging event {event}: {e}")


def log_error(
    error_type: str,
    error_message: str,
    context: Optional[Dict[str, Any]] = None,
    redact: Iterable[str] = SENSITIVE_FIELDS,
) -> None:
    """
    Print a structured error log line.

    Args:
        error_type: Short error category, e.g. "SESSION_SAVE_ERROR"
        error_message: Detailed error message
        context: Optional extra context; keys listed in `redact` are dropped
        redact: Context keys that must never reach the logs
    """
    fields: Dict[str, Any] = {
        "errorType": error_type,
        "errorMessage": error_message,
    }

    if context:
        fields["context"] = {k: v for k, v in context.items() if k not in redact}

    log_event("ERROR", **fields)


def log_warning(warning_type: str, message: str, **fields: Any) -> None:
    """Print a structured warning for a locally recovered condition."""
    log_event("WARNING", warningType=warning_type, message=message, **fields)
