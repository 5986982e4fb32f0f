"""Tests for prefilled form URL building."""

from __future__ import annotations

import json

import httpx
import pytest

from assistkit.models.form import FormEntry
from assistkit.services.form_filler import (
    FIELD_ENTRY_IDS,
    SAMPLE_ENTRIES,
    FormEntriesError,
    apply_form,
    build_form_url,
    find_entry,
    load_entries,
)
from assistkit.services.notifier import get_notifier

FORM_URL = "https://docs.google.com/forms/d/e/example/viewform"


def query_of(url: str) -> dict[str, str]:
    return dict(httpx.URL(url).params)


class TestBuildFormUrl:
    def test_all_fields_prefilled(self):
        url = build_form_url(SAMPLE_ENTRIES[0], FORM_URL)
        assert url.startswith(FORM_URL + "?")
        params = query_of(url)
        assert params["entry.2005620554"] == "Sample Corporation 1"
        assert params["entry.185333929"] == "Taro Yamada"
        assert params["entry.1045781291"] == "yamada@example.com"
        assert params["entry.1065046570"] == "1-1-1 Shibuya, Shibuya-ku, Tokyo"
        assert params["entry.1166974658"] == "03-1234-5678"
        assert params["entry.839337160"] == "This is a sample inquiry."

    def test_missing_optional_fields_are_empty(self):
        params = query_of(build_form_url(SAMPLE_ENTRIES[1], FORM_URL))
        assert params["entry.839337160"] == ""
        assert list(params) == list(FIELD_ENTRY_IDS.values())

    def test_non_ascii_values_are_encoded(self):
        entry = FormEntry(id=9, company_name="株式会社サンプル", name="山田太郎", email="a@b.c", address="東京都")
        url = build_form_url(entry, FORM_URL)
        assert "株式会社" not in url
        assert query_of(url)["entry.2005620554"] == "株式会社サンプル"

    def test_uses_configured_form_url(self, monkeypatch):
        monkeypatch.setenv("ASSISTKIT_FORM_URL", "https://forms.example.com/f")
        assert build_form_url(SAMPLE_ENTRIES[0]).startswith("https://forms.example.com/f?")

    def test_existing_query_is_kept(self):
        url = build_form_url(SAMPLE_ENTRIES[0], FORM_URL + "?usp=sf_link")
        params = query_of(url)
        assert params["usp"] == "sf_link"
        assert params["entry.185333929"] == "Taro Yamada"
        assert list(params) == ["usp", *FIELD_ENTRY_IDS.values()]


class TestEntries:
    def test_samples_by_default(self):
        assert [e.id for e in load_entries()] == [1, 2]

    def test_load_from_file(self, tmp_path):
        path = tmp_path / "entries.json"
        path.write_text(
            json.dumps([{"id": 7, "company_name": "ACME", "name": "Wile", "email": "w@acme.test", "address": "Desert"}]),
            encoding="utf-8",
        )
        entries = load_entries(str(path))
        assert entries[0].company_name == "ACME"
        assert entries[0].phone is None

    def test_invalid_file(self, tmp_path):
        path = tmp_path / "entries.json"
        path.write_text('[{"id": "x"}]', encoding="utf-8")
        with pytest.raises(FormEntriesError):
            load_entries(str(path))

    def test_find_entry(self):
        assert find_entry(2).name == "Ichiro Suzuki"
        assert find_entry(99) is None


class TestApplyForm:
    def test_opens_browser_and_notifies(self):
        opened = []
        result = apply_form(SAMPLE_ENTRIES[0], opener=lambda url: opened.append(url) or True)

        assert result.opened is True
        assert opened == [result.url]
        assert get_notifier().recent()[-1].title == "Form opened"

    def test_without_browser(self):
        result = apply_form(SAMPLE_ENTRIES[1], open_browser=False, opener=lambda url: pytest.fail("opened"))
        assert result.opened is False
        assert result.entry_id == 2
        assert get_notifier().recent()[-1].title == "Form URL ready"
