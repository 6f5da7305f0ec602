"""Record LLM calls to a JSONL file."""

import json
import logging
from dataclasses import asdict, dataclass
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict, Optional

logger = logging.getLogger(__name__)


@dataclass
class LLMCallRecord:
    """Record of a single streamed LLM response."""

    timestamp: str
    model: str
    provider: str
    input_tokens: int
    output_tokens: int
    message_count: int
    response_chars: int
    duration_ms: float
    usage_data: Optional[Dict[str, Any]] = None

    def to_dict(self) -> dict:
        """Convert to dictionary for JSON serialization."""
        return asdict(self)


class LLMCallLogger:
    """Keeps the session's call records and optionally appends them to a log file."""

    def __init__(self, log_path: Path, enabled: bool = True):
        """Initialize the logger.

        Args:
            log_path: Path to the JSONL log file
            enabled: Whether records are written to disk
        """
        self.log_path = log_path
        self.enabled = enabled
        self.session_calls: list[LLMCallRecord] = []

    def log_call(
        self,
        model: str,
        provider: str,
        message_count: int,
        response_chars: int,
        duration_ms: float,
        usage_data: Optional[Dict[str, Any]] = None,
    ) -> LLMCallRecord:
        usage = usage_data or {}
        record = LLMCallRecord(
            timestamp=datetime.now(timezone.utc).isoformat(),
            model=model,
            provider=provider,
            input_tokens=usage.get("input_tokens", 0),
            output_tokens=usage.get("output_tokens", 0),
            message_count=message_count,
            response_chars=response_chars,
            duration_ms=duration_ms,
            usage_data=usage_data,
        )
        self.session_calls.append(record)

        if self.enabled:
            self._write_to_log(record)

        return record

    def _write_to_log(self, record: LLMCallRecord):
        try:
            self.log_path.parent.mkdir(parents=True, exist_ok=True)
            with open(self.log_path, "a", encoding="utf-8") as f:
                f.write(json.dumps(record.to_dict()) + "\n")
        except OSError as e:
            # Don't fail the session if logging fails
            logger.warning(f"Failed to write to call log: {e}")

    def get_session_summary(self) -> Dict[str, Any]:
        """Totals for the current session."""
        return {
            "calls": len(self.session_calls),
            "input_tokens": sum(r.input_tokens for r in self.session_calls),
            "output_tokens": sum(r.output_tokens for r in self.session_calls),
        }
