from __future__ import annotations

import logging
from pathlib import Path

import pytest

from tpn.errors import AmbiguousSourceError, NoSectionsFoundError
from tpn.models.configs import RegenerationConfig, TpnRepo
from tpn.models.section import SectionHeaderFormat
from tpn.orchestration.fetcher import CandidateResult
from tpn.orchestration.regenerate import TpnRegenerator
from tpn.settings import Settings


LOCAL_TPN = "Notices\n\n-----\n\nAlpha\n\nA1\n"
REMOTE_TPN = "Remote notices\n\nalpha\n----\n\nother A\n\nBeta\n----\n\nB1\n"


def _config(tpn_file: Path, **overrides) -> RegenerationConfig:
    values = {
        "tpn_file": tpn_file,
        "potential_paths": ["TPN.txt", "TPN.md"],
        "repos": [TpnRepo(name="org/remote", branch="main")],
        "base_url": "https://raw.test/",
    }
    values.update(overrides)
    return RegenerationConfig(**values)


def _settings() -> Settings:
    return Settings(raw_base_url="https://unused.test/", http_timeout=2.0, log_level="INFO")


def _results(*texts: str | None) -> list[CandidateResult]:
    paths = ["TPN.txt", "TPN.md"]
    return [
        CandidateResult(
            source="org/remote",
            branch="main",
            path=path,
            url=f"https://raw.test/org/remote/main/{path}",
            text=text,
        )
        for path, text in zip(paths, texts)
    ]


def test_regenerate_appends_new_sections(tmp_path: Path) -> None:
    tpn_file = tmp_path / "THIRD-PARTY-NOTICES.TXT"
    tpn_file.write_text(LOCAL_TPN, encoding="utf-8")

    report = TpnRegenerator(_config(tpn_file), settings=_settings()).regenerate(_results(REMOTE_TPN, None))

    assert report.written
    assert tpn_file.read_text(encoding="utf-8") == (
        "Notices\n\n-----\n\nAlpha\n\nA1\n\nBeta\n----\n\nB1\n"
    )
    assert [item.name for item in report.new_sections] == ["Beta"]
    assert [item.name for item in report.already_imported] == ["alpha"]
    assert report.sources[0].describe() == "found at TPN.txt"

    (existing,) = report.existing_sections
    assert (existing.first_line, existing.last_line) == (3, 5)
    assert existing.format is SectionHeaderFormat.SEPARATED


def test_dry_run_leaves_file_untouched(tmp_path: Path) -> None:
    tpn_file = tmp_path / "TPN.TXT"
    tpn_file.write_text(LOCAL_TPN, encoding="utf-8")

    report = TpnRegenerator(_config(tpn_file, dry_run=True), settings=_settings()).regenerate(
        _results(None, REMOTE_TPN)
    )

    assert not report.written
    assert tpn_file.read_text(encoding="utf-8") == LOCAL_TPN
    assert report.rendered.endswith("Beta\n----\n\nB1")


def test_ambiguous_source_never_writes(tmp_path: Path) -> None:
    tpn_file = tmp_path / "TPN.TXT"
    tpn_file.write_text(LOCAL_TPN, encoding="utf-8")
    regenerator = TpnRegenerator(_config(tpn_file), settings=_settings())

    with pytest.raises(AmbiguousSourceError):
        regenerator.regenerate(_results(REMOTE_TPN, REMOTE_TPN))

    assert tpn_file.read_text(encoding="utf-8") == LOCAL_TPN


def test_unparseable_local_file_is_left_untouched(tmp_path: Path) -> None:
    tpn_file = tmp_path / "TPN.TXT"
    tpn_file.write_text("Hand-written notes\nwithout any section headers\n", encoding="utf-8")
    regenerator = TpnRegenerator(_config(tpn_file), settings=_settings())

    with pytest.raises(NoSectionsFoundError):
        regenerator.regenerate(_results(REMOTE_TPN, None))

    assert tpn_file.read_text(encoding="utf-8") == "Hand-written notes\nwithout any section headers\n"


def test_byte_order_mark_is_kept_on_rewrite(tmp_path: Path) -> None:
    tpn_file = tmp_path / "TPN.TXT"
    tpn_file.write_bytes(b"\xef\xbb\xbf" + LOCAL_TPN.encode("utf-8"))

    TpnRegenerator(_config(tpn_file), settings=_settings()).regenerate(_results(REMOTE_TPN, None))

    data = tpn_file.read_bytes()
    assert data.startswith(b"\xef\xbb\xbfNotices")
    assert data.count(b"\xef\xbb\xbf") == 1
    assert data.endswith(b"Beta\n----\n\nB1\n")


def test_file_without_byte_order_mark_stays_without_one(tmp_path: Path) -> None:
    tpn_file = tmp_path / "TPN.TXT"
    tpn_file.write_text(LOCAL_TPN, encoding="utf-8")

    TpnRegenerator(_config(tpn_file), settings=_settings()).regenerate(_results(REMOTE_TPN, None))

    assert tpn_file.read_bytes().startswith(b"Notices")


def test_missing_local_file_is_reported(tmp_path: Path) -> None:
    regenerator = TpnRegenerator(_config(tmp_path / "absent.txt"), settings=_settings())

    with pytest.raises(FileNotFoundError):
        regenerator.regenerate(_results(REMOTE_TPN, None))


def test_run_fetches_every_candidate_and_logs_report(tmp_path: Path, caplog) -> None:
    tpn_file = tmp_path / "TPN.TXT"
    tpn_file.write_text(LOCAL_TPN, encoding="utf-8")
    requested: list[str] = []

    def fake_fetch(url: str, timeout: float):
        requested.append(url)
        assert timeout == 2.0
        return REMOTE_TPN if url.endswith("/TPN.md") else None

    regenerator = TpnRegenerator(_config(tpn_file), fetch=fake_fetch, settings=_settings())
    report = regenerator.run()

    assert sorted(requested) == [
        "https://raw.test/org/remote/main/TPN.md",
        "https://raw.test/org/remote/main/TPN.txt",
    ]
    assert [item.sources for item in report.new_sections] == [
        ("https://raw.test/org/remote/main/TPN.md",)
    ]

    caplog.set_level(logging.INFO)
    report.log()
    assert "Found already-imported section: 'alpha'" in caplog.text
    assert "Importing 1 sections..." in caplog.text
    assert f"Wrote new TPN contents to {tpn_file}." in caplog.text


def test_settings_supply_defaults_when_config_is_silent(tmp_path: Path) -> None:
    settings = Settings(raw_base_url="https://mirror.test", default_paths=["NOTICE.txt"])
    config = RegenerationConfig(tpn_file=tmp_path / "TPN.TXT")

    regenerator = TpnRegenerator(config, settings=settings)

    assert regenerator.base_url == "https://mirror.test/"
    assert regenerator.potential_paths == ["NOTICE.txt"]
