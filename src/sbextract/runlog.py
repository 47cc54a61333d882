"""Run logging — daily JSONL files per project, with automatic retention cleanup."""

from __future__ import annotations

import contextlib
import json
import os
import re
from datetime import UTC, datetime, timedelta
from pathlib import Path

DEFAULT_RETENTION_DAYS = 30
_LOG_ROOT = Path.home() / ".sbextract" / "logs"

_PASSWORD_RE = re.compile(r"(://[^:/@]+:)[^@]+(@)")


def mask_secrets(value: str) -> str:
    """Mask passwords in DSN-style connection strings."""
    return _PASSWORD_RE.sub(r"\1****\2", value)


def _project_slug() -> str:
    """Encode cwd into a directory-safe slug."""
    cwd = os.getcwd()
    return cwd.replace("/", "-").lstrip("-")


def _log_dir() -> Path:
    return _LOG_ROOT / _project_slug()


def _today_file() -> Path:
    today = datetime.now(UTC).strftime("%Y-%m-%d")
    return _log_dir() / f"{today}.jsonl"


def log_run(
    *,
    action: str,
    target: str,
    client: str,
    ok: bool,
    error_code: str | None = None,
    procedure: str | None = None,
    counts: dict[str, int] | None = None,
    duration_ms: float | None = None,
) -> None:
    """Append one run entry to today's JSONL file. Never records the API key."""
    entry = {
        "ts": datetime.now(UTC).isoformat(),
        "action": action,
        "target": mask_secrets(target),
        "client": client,
        "ok": ok,
        "error_code": error_code,
        "procedure": procedure,
        "counts": counts,
        "duration_ms": duration_ms,
    }

    log_file = _today_file()
    log_file.parent.mkdir(parents=True, exist_ok=True)
    with open(log_file, "a") as f:
        f.write(json.dumps(entry, default=str) + "\n")


def cleanup_old_logs(*, retention_days: int = DEFAULT_RETENTION_DAYS) -> int:
    """Delete log files older than retention_days. Returns count of deleted files."""
    cutoff = datetime.now(UTC) - timedelta(days=retention_days)
    deleted = 0

    log_dir = _log_dir()
    if not log_dir.exists():
        return 0

    for log_file in log_dir.glob("*.jsonl"):
        try:
            file_date = datetime.strptime(log_file.stem, "%Y-%m-%d").replace(tzinfo=UTC)
        except ValueError:
            continue
        if file_date < cutoff:
            log_file.unlink()
            deleted += 1

    # Only succeeds when the directory is empty.
    with contextlib.suppress(OSError):
        log_dir.rmdir()

    return deleted
