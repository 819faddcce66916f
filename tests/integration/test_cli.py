import sys

import pytest

from session_tracker.app_shell import cli


@pytest.fixture
def rules_file(tmp_path, monkeypatch):
    db_path = tmp_path / "cli.db"
    path = tmp_path / "tracker.yaml"
    path.write_text(
        "project:\n  slug: cli-test\n  rules_version: '1'\n"
        f"storage:\n  db_path: {db_path}\n"
        "logging:\n  level: WARNING\n"
    )
    monkeypatch.setattr(cli, "RULES_PATH", str(path))
    monkeypatch.delenv("TRACKER_DB_PATH", raising=False)
    return path


def run_cli(monkeypatch, *argv):
    monkeypatch.setattr(sys, "argv", ["session-tracker", *argv])
    cli.main()


def test_migrate(rules_file, monkeypatch, capsys):
    run_cli(monkeypatch, "migrate")
    assert "Applied 1 migrations" in capsys.readouterr().out

    run_cli(monkeypatch, "migrate")
    assert "Applied 0 migrations" in capsys.readouterr().out


def test_empty_sessions_list(rules_file, monkeypatch, capsys):
    run_cli(monkeypatch, "migrate")
    capsys.readouterr()

    run_cli(monkeypatch, "sessions")
    assert "No sessions recorded." in capsys.readouterr().out


def test_demo_then_show(rules_file, monkeypatch, capsys):
    run_cli(monkeypatch, "demo", "--user", "alice")
    out = capsys.readouterr().out
    session_id = out.strip().rsplit(" ", 1)[-1]

    run_cli(monkeypatch, "sessions", "--user", "alice")
    listing = capsys.readouterr().out
    assert session_id in listing
    assert "page_views=2" in listing

    run_cli(monkeypatch, "show", session_id)
    detail = capsys.readouterr().out
    assert "/feed  6s  scroll=50%" in detail
    assert "/lists  5s  scroll=0%" in detail
    assert "demo_click" in detail


def test_show_unknown_session_exits(rules_file, monkeypatch):
    run_cli(monkeypatch, "migrate")
    with pytest.raises(SystemExit):
        run_cli(monkeypatch, "show", "missing")


def test_missing_rules_file_exits(tmp_path, monkeypatch):
    monkeypatch.setattr(cli, "RULES_PATH", str(tmp_path / "absent.yaml"))
    with pytest.raises(SystemExit):
        run_cli(monkeypatch, "sessions")


def test_db_path_override(rules_file, tmp_path, monkeypatch):
    override = tmp_path / "override.db"
    monkeypatch.setenv("TRACKER_DB_PATH", str(override))

    assert cli.get_rules().storage.db_path == str(override)
