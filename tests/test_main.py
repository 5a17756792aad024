import pytest
from pydantic import ValidationError

from newest_check.checker.types import Item, OrderVerdict, RunOutcome
from newest_check.config import Settings
from newest_check.main import build_parser, print_summary, settings_from_args


def test_flags_map_onto_settings():
    base = Settings()
    args = build_parser().parse_args(["--show", "--csv", "--junit", "--trace", "--target", "30", "--max-hops", "2"])

    settings = settings_from_args(args, base=base)

    assert settings.headless is False
    assert settings.write_csv and settings.write_junit and settings.record_trace
    assert settings.target_count == 30
    assert settings.max_page_hops == 2
    assert base.headless is True


def test_no_flags_returns_base():
    base = Settings()

    assert settings_from_args(build_parser().parse_args([]), base=base) is base


def test_headless_env(monkeypatch):
    monkeypatch.setenv("HEADLESS", "false")

    assert Settings().headless is False


def test_settings_are_frozen():
    settings = Settings()

    with pytest.raises(ValidationError):
        settings.target_count = 5


def test_print_summary_pass(capsys):
    records = tuple(Item(id=str(i), title=f"Story {i}", url="u", timestamp_seconds=100 - i) for i in range(3))

    print_summary(RunOutcome(status="pass", verdict=OrderVerdict.passed(), records=records))

    output = capsys.readouterr().out
    assert "PASS: Exactly first 3 articles" in output
    assert "Oldest (index 2): 1970-01-01T00:01:38.000Z" in output
    assert "00  1970-01-01T00:01:40.000Z  Story 0" in output
