"""File loaders for trades, payouts and checklists.

Trade rows are returned as plain dicts and left unvalidated: the analytics
layer decides what to do with malformed values. Payout rows are validated
into Payout models.
"""

import csv
import json
import logging
from pathlib import Path
from typing import Any, Optional

from pydantic import ValidationError

from tradejournal.clock import parse_day
from tradejournal.models import Payout

logger = logging.getLogger(__name__)

SUPPORTED_SUFFIXES = (".json", ".csv")

TRUE_STRINGS = {"1", "true", "yes", "y", "x", "done", "on"}


def _read_json(path: Path) -> Any:
    try:
        with open(path, encoding="utf-8") as f:
            return json.load(f)
    except json.JSONDecodeError as e:
        raise ValueError(f"Invalid JSON in {path}: {e}") from e


def _read_csv(path: Path) -> list[dict[str, Any]]:
    with open(path, newline="", encoding="utf-8-sig") as f:
        reader = csv.DictReader(f)
        return [{(k or "").strip().lower(): v for k, v in row.items()} for row in reader]


def _check_path(path: Path) -> Path:
    path = Path(path)
    if not path.exists():
        raise ValueError(f"File not found: {path}")
    if path.suffix.lower() not in SUPPORTED_SUFFIXES:
        raise ValueError(
            f"Unsupported file type: {path.suffix or '(none)'}. Use one of {', '.join(SUPPORTED_SUFFIXES)}"
        )
    return path


def load_rows(path: Path, key: str = "trades") -> list[dict[str, Any]]:
    """Load a list of records from JSON or CSV.

    JSON may be a list of objects or an object holding the list under
    ``key``. Non-object entries are dropped.

    Raises:
        ValueError: If the file is missing, unsupported or malformed.
    """
    path = _check_path(path)
    if path.suffix.lower() == ".csv":
        return _read_csv(path)

    data = _read_json(path)
    if isinstance(data, dict):
        data = data.get(key, [])
    if not isinstance(data, list):
        raise ValueError(f"Expected a list of records in {path}")

    rows = [row for row in data if isinstance(row, dict)]
    if len(rows) != len(data):
        logger.debug("Dropped %d non-object entries from %s", len(data) - len(rows), path)
    return rows


def load_trades(path: Path) -> list[dict[str, Any]]:
    """Load trade events (``date``, ``pnl``) from a file."""
    return load_rows(path, key="trades")


def _optional_text(value: Any) -> Optional[str]:
    if value is None:
        return None
    text = str(value).strip()
    return text or None


def load_payouts(path: Path) -> list[Payout]:
    """Load payouts (``date``, ``amount``, optional ``source``/``notes``).

    Rows without a readable date or a finite amount are skipped with a
    warning.
    """
    payouts = []
    for row in load_rows(path, key="payouts"):
        try:
            payouts.append(Payout(
                date=parse_day(row.get("date")),
                amount=row.get("amount"),
                source=_optional_text(row.get("source")),
                notes=_optional_text(row.get("notes")),
            ))
        except ValidationError as e:
            logger.warning("Skipping invalid payout row %r: %s", row, e.errors()[0]["msg"])
    return payouts


def _as_bool(value: Any) -> bool:
    if isinstance(value, str):
        return value.strip().lower() in TRUE_STRINGS
    return bool(value)


def load_checklist(path: Path) -> dict[str, bool]:
    """Load a checklist as a label -> completed mapping.

    JSON: an object of label to flag, or a list of ``{"label", "done"}``
    objects. CSV: ``label`` and ``done`` columns. Later duplicates win.
    """
    path = _check_path(path)
    if path.suffix.lower() == ".csv":
        items = _read_csv(path)
    else:
        data = _read_json(path)
        if isinstance(data, dict):
            data = data.get("checklist", data)
        if isinstance(data, dict):
            return {str(label): _as_bool(done) for label, done in data.items()}
        if not isinstance(data, list):
            raise ValueError(f"Expected a checklist object or list in {path}")
        items = [item for item in data if isinstance(item, dict)]

    checklist = {}
    for item in items:
        label = str(item.get("label") or "").strip()
        if label:
            checklist[label] = _as_bool(item.get("done"))
    return checklist
