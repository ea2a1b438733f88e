"""Structured logging: console summary lines plus a JSON-lines event file."""

import contextvars
import json
import logging
import os
import sys
import threading
import time
from dataclasses import asdict, dataclass
from datetime import datetime
from decimal import Decimal
from typing import Any

from introlink.core.config import config


def _format_duration(seconds: float) -> str:
    if seconds < 0:
        return "0s"
    if seconds >= 60:
        m = int(seconds // 60)
        s = seconds % 60
        if s < 0.05:
            return f"{m}m"
        return f"{m}m {s:.0f}s" if s >= 1 else f"{m}m {s:.1f}s"
    if seconds >= 0.05:
        return f"{seconds:.1f}s"
    if seconds > 0:
        return "<0.1s"
    return "0s"


def _short_reason(reason: str | None, max_len: int = 80) -> str:
    """One-line short reason for console (failed search)."""
    if not reason or not reason.strip():
        return ""
    s = reason.strip().replace("\n", " ").strip()
    return s[:max_len] + "..." if len(s) > max_len else s


# Start time of the submission being served by the current task.
_search_start: contextvars.ContextVar[float | None] = contextvars.ContextVar(
    "search_start", default=None
)


def _use_color() -> bool:
    if os.environ.get("NO_COLOR"):
        return False
    try:
        return sys.stdout.isatty()
    except Exception:
        return False


def _c(role: str) -> str:
    if not _use_color():
        return ""
    # 38;5;N = foreground 256-color
    codes = {
        "dim": "\033[38;5;239m",
        "domain": "\033[38;5;81m",
        "run": "\033[38;5;78m",
        "done_ok": "\033[38;5;78m",
        "done_fail": "\033[38;5;203m",
        "duration": "\033[38;5;221m",
        "cost": "\033[38;5;213m",
    }
    return codes.get(role, "")


def _reset() -> str:
    if not _use_color():
        return ""
    return "\033[0m"


@dataclass
class LogEvent:
    event_type: str
    timestamp: str
    data: dict[str, Any]

    def to_dict(self) -> dict:
        return asdict(self)

    def to_json(self) -> str:
        return json.dumps(self.to_dict(), default=str)


class IntrolinkLogger:
    def __init__(self):
        config.logs_dir.mkdir(parents=True, exist_ok=True)
        self.log_file = config.logs_dir / "search.log"
        self._file_lock = threading.Lock()
        self._log_file_handle = open(self.log_file, "a", encoding="utf-8")
        self._setup_console_logger()

    def _setup_console_logger(self):
        self.console = logging.getLogger("introlink")
        self.console.setLevel(logging.DEBUG)
        self._console_formatter = logging.Formatter(
            "%(asctime)s │ %(message)s", datefmt="%H:%M:%S"
        )
        if not self.console.handlers:
            handler = logging.StreamHandler()
            handler.setLevel(getattr(logging, config.log_level, logging.INFO))
            handler.setFormatter(self._console_formatter)
            self.console.addHandler(handler)
        # Third-party HTTP chatter stays at warning level on the console.
        for name in ("httpx", "httpcore"):
            logging.getLogger(name).setLevel(logging.WARNING)

    def log_event(self, event: LogEvent) -> None:
        with self._file_lock:
            self._log_file_handle.write(event.to_json() + "\n")
            self._log_file_handle.flush()

    def _timestamp(self) -> str:
        return datetime.now().isoformat()

    def search_submitted(self, domain: str, request_id: int, payload: dict[str, Any]):
        _search_start.set(time.monotonic())
        event = LogEvent(
            event_type="SEARCH_SUBMITTED",
            timestamp=self._timestamp(),
            data={"domain": domain, "request_id": request_id, "payload": payload},
        )
        self.log_event(event)
        filters = ", ".join(f"{k}={v!r}" for k, v in payload.items() if k != "strategy")
        self.console.info(
            f"{_c('run')}▶ Search{_reset()}  {_c('domain')}{domain}#{request_id}{_reset()}({filters})"
        )

    def search_settled(
        self,
        domain: str,
        request_id: int | None,
        success: bool,
        *,
        item_count: int = 0,
        reason: str | None = None,
        message: str | None = None,
    ) -> None:
        start = _search_start.get()
        _search_start.set(None)
        elapsed = (time.monotonic() - start) if start is not None else 0.0
        data: dict[str, Any] = {
            "domain": domain,
            "request_id": request_id,
            "success": success,
            "item_count": item_count,
            "duration_seconds": round(elapsed, 3),
        }
        if not success:
            data["reason"] = reason
            data["message"] = (message or "")[:500]
        event = LogEvent(event_type="SEARCH_SETTLED", timestamp=self._timestamp(), data=data)
        self.log_event(event)
        dur = f"{_c('duration')}{_format_duration(elapsed)}{_reset()}"
        label = f"{_c('domain')}{domain}#{request_id if request_id is not None else '-'}{_reset()}"
        if success:
            status_str = f"{_c('done_ok')}[ok]{_reset()}"
            self.console.info(f"✓ Settled  {label}  {item_count} items  in {dur}  {status_str}")
        else:
            status_str = f"{_c('done_fail')}[{reason}]{_reset()}"
            self.console.info(
                f"✗ Settled  {label}  in {dur}  {status_str} {_short_reason(message)}"
            )

    def response_discarded(self, domain: str, request_id: int, latest_id: int):
        _search_start.set(None)
        event = LogEvent(
            event_type="RESPONSE_DISCARDED",
            timestamp=self._timestamp(),
            data={"domain": domain, "request_id": request_id, "latest_id": latest_id},
        )
        self.log_event(event)
        self.console.info(
            f"{_c('dim')}↷ Discarded stale response {domain}#{request_id} (latest #{latest_id}){_reset()}"
        )

    def validation_failed(self, domain: str, field: str, reason: str):
        event = LogEvent(
            event_type="VALIDATION_FAILED",
            timestamp=self._timestamp(),
            data={"domain": domain, "field": field, "reason": reason},
        )
        self.log_event(event)
        self.console.info(f"✗ Invalid {domain} form: {field} ({reason})")

    def receipt_recorded(
        self,
        domain: str,
        request_id: int,
        provider: str,
        amount_paid_usd: Decimal,
        item_count: int,
    ):
        event = LogEvent(
            event_type="RECEIPT_RECORDED",
            timestamp=self._timestamp(),
            data={
                "domain": domain,
                "request_id": request_id,
                "provider": provider,
                "amount_paid_usd": amount_paid_usd,
                "item_count": item_count,
            },
        )
        self.log_event(event)
        self.console.info(
            f"  │ Paid {_c('cost')}${amount_paid_usd}{_reset()} to {provider} for {item_count} items"
        )

    def error(self, message: str, *args, exception: Exception | None = None, **kwargs):
        event = LogEvent(
            event_type="ERROR",
            timestamp=self._timestamp(),
            data={
                "message": message,
                "exception": str(exception) if exception else None,
            },
        )
        self.log_event(event)

        allowed = {"exc_info", "stack_info", "stacklevel", "extra"}
        log_kwargs = {k: v for k, v in kwargs.items() if k in allowed}
        if exception and "exc_info" not in log_kwargs:
            log_kwargs["exc_info"] = exception

        self.console.error(f"❌ Error: {message}", *args, **log_kwargs)

    def debug(self, message: str, *args, **kwargs):
        event = LogEvent(
            event_type="DEBUG", timestamp=self._timestamp(), data={"message": message}
        )
        self.log_event(event)

        allowed = {"exc_info", "stack_info", "stacklevel", "extra"}
        log_kwargs = {k: v for k, v in kwargs.items() if k in allowed}
        self.console.debug(message, *args, **log_kwargs)


logger = IntrolinkLogger()
