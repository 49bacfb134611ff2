"""Debounced autosave controller."""

from tradejournal.autosave.pump import AutosavePump, SaveState, SUSPEND_SIGNALS, serialize_payload

__all__ = ["AutosavePump", "SaveState", "SUSPEND_SIGNALS", "serialize_payload"]
