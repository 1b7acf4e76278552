"""Soft checks that warn about suspicious but valid configuration."""

import warnings
from typing import Any, Dict, List


def check_for_warnings(config_dict: Dict[str, Any]) -> List[str]:
    """Return warning messages for a raw configuration dictionary."""
    messages = []

    for source in config_dict.get("sources") or []:
        if isinstance(source, dict) and not source.get("enabled", True):
            messages.append(f"Source '{source.get('name', 'Unknown')}' is disabled and will be skipped")

    advanced = config_dict.get("advanced") or {}
    if isinstance(advanced, dict):
        wait = advanced.get("actor_wait_seconds")
        timeout = advanced.get("source_timeout")
        if isinstance(wait, int) and isinstance(timeout, int) and wait >= timeout:
            messages.append(
                f"actor_wait_seconds ({wait}) is not below source_timeout ({timeout}); "
                "partial results will rarely be fetched"
            )

    eligibility = config_dict.get("eligibility") or {}
    if isinstance(eligibility, dict) and eligibility.get("require_certification") \
            and not eligibility.get("require_target_role"):
        messages.append(
            "require_certification is on without require_target_role; "
            "postings outside the target role will be judged on its certification"
        )

    scoring = config_dict.get("scoring") or {}
    if isinstance(scoring, dict):
        threshold = scoring.get("apply_threshold")
        if isinstance(threshold, (int, float)) and threshold < 20:
            messages.append(f"Low apply_threshold ({threshold}) will recommend almost every posting")

    return messages


def emit_warnings(messages: List[str]) -> None:
    """Emit each message as a UserWarning."""
    for message in messages:
        warnings.warn(message, UserWarning, stacklevel=2)
