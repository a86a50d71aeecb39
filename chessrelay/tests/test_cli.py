"""
Tests for the command-line interface.
"""

import re

import pytest

from ..cli import build_parser, main
from ..api import app as app_module


def test_serve_defaults():
    args = build_parser().parse_args(["serve"])

    assert args.command == "serve"
    assert args.port == app_module.PORT
    assert args.host == app_module.HOST


def test_serve_port_override():
    args = build_parser().parse_args(["serve", "--port", "5055", "--host", "127.0.0.1"])

    assert args.port == 5055
    assert args.host == "127.0.0.1"


def test_serve_runs_uvicorn(monkeypatch):
    calls = []
    monkeypatch.setattr("uvicorn.run", lambda target, **kwargs: calls.append((target, kwargs)))

    main(["serve", "--port", "5055", "--log-level", "warning"])

    target, kwargs = calls[0]
    assert target == "chessrelay.api.app:app"
    assert kwargs["port"] == 5055
    assert kwargs["log_level"] == "warning"


def test_code_command(capsys):
    main(["code"])
    assert re.fullmatch(r"[A-Z]{6}\n", capsys.readouterr().out)


def test_no_command_exits():
    with pytest.raises(SystemExit) as excinfo:
        main([])
    assert excinfo.value.code == 1
