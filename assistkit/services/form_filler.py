"""Form autofill: builds prefilled Google Form URLs for saved entries."""

from __future__ import annotations

import logging
import webbrowser
from collections.abc import Callable
from pathlib import Path

import httpx
from pydantic import TypeAdapter, ValidationError

from assistkit.config import get_settings
from assistkit.errors import AssistkitError
from assistkit.models.form import ApplyFormResult, FormEntry
from assistkit.services.notifier import get_notifier

logger = logging.getLogger(__name__)

# Google Form "entry.<id>" question ids, in the order the form asks them.
FIELD_ENTRY_IDS = {
    "company_name": "entry.2005620554",
    "name": "entry.185333929",
    "email": "entry.1045781291",
    "address": "entry.1065046570",
    "phone": "entry.1166974658",
    "comment": "entry.839337160",
}

SAMPLE_ENTRIES: list[FormEntry] = [
    FormEntry(
        id=1,
        company_name="Sample Corporation 1",
        name="Taro Yamada",
        email="yamada@example.com",
        address="1-1-1 Shibuya, Shibuya-ku, Tokyo",
        phone="03-1234-5678",
        comment="This is a sample inquiry.",
    ),
    FormEntry(
        id=2,
        company_name="Sample Corporation 2",
        name="Ichiro Suzuki",
        email="suzuki@example.com",
        address="1-1-1 Chuo-ku, Osaka",
        phone="06-1234-5678",
    ),
]

_entries_adapter = TypeAdapter(list[FormEntry])


class FormEntriesError(AssistkitError):
    """The configured entries file could not be loaded."""


def load_entries(path: str | None = None) -> list[FormEntry]:
    """Load saved entries from a JSON file, or return the built-in samples."""
    if path is None:
        path = get_settings().form_entries_path
    if not path:
        return list(SAMPLE_ENTRIES)

    entries_path = Path(path).expanduser()
    try:
        return _entries_adapter.validate_json(entries_path.read_bytes())
    except (OSError, ValidationError) as e:
        raise FormEntriesError(f"Failed to load form entries from {entries_path}: {e}") from e


def find_entry(entry_id: int, entries: list[FormEntry] | None = None) -> FormEntry | None:
    for entry in entries if entries is not None else load_entries():
        if entry.id == entry_id:
            return entry
    return None


def build_form_url(entry: FormEntry, form_url: str | None = None) -> str:
    """Return the form URL with every question prefilled from ``entry``.

    Missing optional answers are sent as empty strings. Query parameters
    already on the form URL are kept.
    """
    params = {
        entry_id: getattr(entry, field) or ""
        for field, entry_id in FIELD_ENTRY_IDS.items()
    }
    return str(httpx.URL(form_url or get_settings().form_url).copy_merge_params(params))


def apply_form(
    entry: FormEntry,
    open_browser: bool = True,
    opener: Callable[[str], bool] | None = None,
) -> ApplyFormResult:
    """Build the prefilled URL for ``entry`` and open it in the browser."""
    url = build_form_url(entry)
    opened = False
    if open_browser:
        opened = bool((opener or webbrowser.open)(url))
        if not opened:
            logger.warning(f"No browser accepted {url}")

    if opened:
        get_notifier().success("Form opened", "Opened the prefilled form URL")
    else:
        get_notifier().success("Form URL ready", "Built the prefilled form URL")
    logger.info(f"Prepared form for entry {entry.id} ({entry.company_name})")
    return ApplyFormResult(entry_id=entry.id, url=url, opened=opened)
