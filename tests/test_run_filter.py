"""Tests for the word-list driver."""

from __future__ import annotations

import pytest

import run_filter
from settings import get_settings


@pytest.fixture(autouse=True)
def _small_filter(monkeypatch: pytest.MonkeyPatch):
    monkeypatch.setenv("BLOOM_BITS", "10000")
    monkeypatch.setenv("BLOOM_FUNCTION_COUNT", "5")
    monkeypatch.setenv("BLOOM_HASH_ALGORITHM", "md5")
    monkeypatch.setenv("BLOOM_LOG_LEVEL", "WARNING")
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


def test_reports_membership_and_probability(tmp_path, capsys) -> None:
    wordlist = tmp_path / "words.txt"
    wordlist.write_text("ABA\nAIDS\nzebra\n", encoding="utf-8")

    code = run_filter.main([str(wordlist), "ABA", "zebra"])

    out = capsys.readouterr().out.splitlines()
    assert code == 0
    assert out[0] == "3"
    assert out[1] == "Result: True (value: [ABA], existsInList: True, existsByFilter: True)"
    assert out[2] == "Result: True (value: [zebra], existsInList: True, existsByFilter: True)"
    assert out[3].startswith("False positive probability: ")
    assert 0.0 < float(out[3].split(": ")[1]) < 1.0


def test_default_probes_are_used(tmp_path, capsys) -> None:
    wordlist = tmp_path / "words.txt"
    wordlist.write_text("ABA\n", encoding="utf-8")

    assert run_filter.main([str(wordlist)]) == 0

    out = capsys.readouterr().out
    for probe in run_filter.DEFAULT_PROBES:
        assert f"[{probe}]" in out


def test_missing_wordlist_is_io_failure(tmp_path, capsys) -> None:
    code = run_filter.main([str(tmp_path / "missing.txt")])

    assert code == 1
    err = capsys.readouterr().err.strip().splitlines()
    assert len(err) == 1
    assert err[0].startswith("Cannot read word list")


def test_undecodable_wordlist_is_io_failure(tmp_path, capsys) -> None:
    wordlist = tmp_path / "words.txt"
    wordlist.write_bytes(b"ABA\n\xff\xfe bad\n")

    code = run_filter.main([str(wordlist)])

    assert code == 1
    captured = capsys.readouterr()
    assert captured.out == ""
    assert "Cannot read word list" in captured.err


def test_bad_algorithm_is_configuration_failure(tmp_path, monkeypatch, capsys) -> None:
    monkeypatch.setenv("BLOOM_HASH_ALGORITHM", "no-such-digest")
    get_settings.cache_clear()
    wordlist = tmp_path / "words.txt"
    wordlist.write_text("ABA\n", encoding="utf-8")

    assert run_filter.main([str(wordlist)]) == 2
    assert "Configuration error" in capsys.readouterr().err


def test_check_flags_disagreement() -> None:
    class AlwaysYes:
        def contains(self, value):
            return True

    line = run_filter.check(AlwaysYes(), {"a"}, "b")
    assert line == "Result: False (value: [b], existsInList: False, existsByFilter: True)"
