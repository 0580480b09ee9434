"""
Tests for the configure and rip commands.
"""

import json

import pytest

import cgpripper.cli.commands as commands
from cgpripper.cli.main import main
from cgpripper.core.errors import ConfigMissingError, InvalidArgumentError
from cgpripper.utils.config import load_session, save_session
from cgpripper.utils.validators import validate_book_id, validate_page_count, validate_quality


@pytest.fixture
def no_network(monkeypatch):
    def fail(*args, **kwargs):
        raise AssertionError("network client created")
    monkeypatch.setattr(commands, "create_client", fail)


def test_configure_writes_session(tmp_path, capsys):
    path = tmp_path / "config.json"
    assert main(["configure", "first-id", "-f", str(path)]) == 0
    assert json.loads(path.read_text()) == {"ASP.NET_SessionId": "first-id"}
    assert "Session configured" in capsys.readouterr().out


def test_configure_twice_keeps_latest(tmp_path):
    path = tmp_path / "config.json"
    main(["configure", "first-id", "--file", str(path)])
    main(["configure", "second-id", "--file", str(path)])

    assert json.loads(path.read_text()) == {"ASP.NET_SessionId": "second-id"}
    assert load_session(str(path)) == "second-id"


@pytest.mark.parametrize("quality", ["0", "5", "-1", "abc", "4.5"])
def test_bad_quality_fails_before_network(tmp_path, no_network, capsys, quality):
    path = tmp_path / "config.json"
    save_session("sid", str(path))

    code = main(["rip", "BK1", "-p", "3", "-q", quality, "-f", str(path), "-o", str(tmp_path)])

    assert code == 1
    assert "Quality must be between 1 and 4" in capsys.readouterr().err


@pytest.mark.parametrize("pages", [None, "abc", "0", "-2"])
def test_bad_page_count_fails_before_network(tmp_path, no_network, pages):
    path = tmp_path / "config.json"
    save_session("sid", str(path))
    argv = ["rip", "BK1", "-f", str(path), "-o", str(tmp_path)]
    if pages is not None:
        argv += ["--pages", pages]

    assert main(argv) == 1


def test_missing_config_fails_before_network(tmp_path, no_network, capsys):
    code = main(["rip", "BK1", "-p", "1", "-f", str(tmp_path / "nope.json")])

    assert code == 1
    assert "configure" in capsys.readouterr().err


def test_template_without_background_fails_before_network(tmp_path, no_network, capsys):
    path = tmp_path / "config.json"
    save_session("sid", str(path))
    template = tmp_path / "page.html"
    template.write_text("<html><body><div id=\"page\"></div></body></html>", encoding="utf-8")

    code = main(["rip", "BK1", "-p", "1", "-f", str(path), "-o", str(tmp_path), "-t", str(template)])

    assert code == 1
    err = capsys.readouterr().err
    assert err.startswith("Error:")
    assert "background" in err
    assert "Traceback" not in err


def test_no_command_prints_help(capsys):
    assert main([]) == 1
    assert "configure" in capsys.readouterr().out


def test_load_session_rejects_bad_files(tmp_path):
    broken = tmp_path / "broken.json"
    broken.write_text("{not json")
    with pytest.raises(ConfigMissingError):
        load_session(str(broken))

    empty = tmp_path / "empty.json"
    empty.write_text("{}")
    with pytest.raises(ConfigMissingError):
        load_session(str(empty))


def test_validators():
    assert validate_page_count("12") == 12
    assert [validate_quality(q) for q in ("1", "2", "3", 4)] == [1, 2, 3, 4]
    with pytest.raises(InvalidArgumentError):
        validate_quality("7")
    assert validate_book_id("abc123") == (True, "")
    assert validate_book_id("")[0] is False
    assert validate_book_id("../etc")[0] is False
