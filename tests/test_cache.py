"""Tests for the stored rate tables."""

from __future__ import annotations

import json
from datetime import date

from revproj import cache
from revproj.models import CurrencyCode

DAY = date(2026, 10, 19)


class TestRateTables:
    def test_save_and_load(self, tmp_path, monkeypatch) -> None:  # type: ignore[no-untyped-def]
        monkeypatch.setattr("revproj.cache.CACHE_DIR", tmp_path)

        cache.save_rates(DAY, {CurrencyCode.USD: 1.0, CurrencyCode.EUR: 0.92})

        assert cache.load_rates(DAY) == {CurrencyCode.USD: 1.0, CurrencyCode.EUR: 0.92}
        assert cache.load_rates(date(2026, 10, 18)) is None

    def test_file_layout(self, tmp_path, monkeypatch) -> None:  # type: ignore[no-untyped-def]
        monkeypatch.setattr("revproj.cache.CACHE_DIR", tmp_path)

        cache.save_rates(DAY, {CurrencyCode.INR: 84.1})

        data = json.loads((tmp_path / "usd_2026-10-19.json").read_text())
        assert data == {"base": "USD", "date": "2026-10-19", "rates": {"INR": 84.1}}

    def test_save_replaces_day(self, tmp_path, monkeypatch) -> None:  # type: ignore[no-untyped-def]
        monkeypatch.setattr("revproj.cache.CACHE_DIR", tmp_path)

        cache.save_rates(DAY, {CurrencyCode.EUR: 0.92})
        cache.save_rates(DAY, {CurrencyCode.GBP: 0.78})

        assert cache.load_rates(DAY) == {CurrencyCode.GBP: 0.78}

    def test_unsupported_codes_dropped(self, tmp_path, monkeypatch) -> None:  # type: ignore[no-untyped-def]
        monkeypatch.setattr("revproj.cache.CACHE_DIR", tmp_path)
        (tmp_path / "usd_2026-10-19.json").write_text(
            json.dumps({"rates": {"EUR": 0.9, "CHF": 0.8}})
        )
        assert cache.load_rates(DAY) == {CurrencyCode.EUR: 0.9}

    def test_load_corrupt(self, tmp_path, monkeypatch) -> None:  # type: ignore[no-untyped-def]
        monkeypatch.setattr("revproj.cache.CACHE_DIR", tmp_path)
        (tmp_path / "usd_2026-10-19.json").write_text("not json")
        assert cache.load_rates(DAY) is None

    def test_load_wrong_shape(self, tmp_path, monkeypatch) -> None:  # type: ignore[no-untyped-def]
        monkeypatch.setattr("revproj.cache.CACHE_DIR", tmp_path)
        (tmp_path / "usd_2026-10-19.json").write_text('{"rates": {"EUR": "abc"}}')
        assert cache.load_rates(DAY) is None


class TestStoredDays:
    def test_cached_days_sorted(self, tmp_path, monkeypatch) -> None:  # type: ignore[no-untyped-def]
        monkeypatch.setattr("revproj.cache.CACHE_DIR", tmp_path)
        cache.save_rates(DAY, {CurrencyCode.EUR: 0.92})
        cache.save_rates(date(2026, 1, 2), {CurrencyCode.EUR: 0.95})
        (tmp_path / "notes.txt").write_text("ignored")
        (tmp_path / "usd_garbage.json").write_text("{}")

        assert cache.cached_days() == [date(2026, 1, 2), DAY]

    def test_cached_days_missing_dir(self, tmp_path, monkeypatch) -> None:  # type: ignore[no-untyped-def]
        monkeypatch.setattr("revproj.cache.CACHE_DIR", tmp_path / "nope")
        assert cache.cached_days() == []

    def test_clear_rates(self, tmp_path, monkeypatch) -> None:  # type: ignore[no-untyped-def]
        monkeypatch.setattr("revproj.cache.CACHE_DIR", tmp_path)
        cache.save_rates(DAY, {CurrencyCode.EUR: 0.92})
        cache.save_rates(date(2026, 1, 2), {CurrencyCode.EUR: 0.95})
        (tmp_path / "notes.txt").write_text("kept")

        assert cache.clear_rates() == 2
        assert [p.name for p in tmp_path.iterdir()] == ["notes.txt"]

    def test_clear_nonexistent(self, tmp_path, monkeypatch) -> None:  # type: ignore[no-untyped-def]
        monkeypatch.setattr("revproj.cache.CACHE_DIR", tmp_path / "nope")
        assert cache.clear_rates() == 0
