import json

import pytest
import requests

from mammoth_codegen import utils
from mammoth_codegen.cli import VPN_HINT, create_parser, main

from conftest import WHITELABEL_KOTLIN, make_document, make_event, make_parameter, make_value


@pytest.fixture
def schema_file(tmp_path, whitelabel_document):
    path = tmp_path / "schema.json"
    path.write_text(json.dumps(whitelabel_document), encoding="utf-8")
    return path


@pytest.fixture
def out_dir(tmp_path):
    path = tmp_path / "out"
    path.mkdir()
    return path


def test_parser_defaults():
    args = create_parser().parse_args([])
    assert args.project == "whitelabel"
    assert args.version == ""
    assert args.output_path == "."
    assert args.output_filename is None
    assert args.language == "kotlin"
    assert args.base_url == "https://mammoth.trafi.com"


def test_writes_kotlin_from_schema_file(schema_file, out_dir):
    assert main(["--schema-file", str(schema_file), "--output-path", str(out_dir)]) == 0
    assert (out_dir / "MammothEvents.kt").read_text(encoding="utf-8") == WHITELABEL_KOTLIN


def test_downloads_schema(monkeypatch, out_dir, whitelabel_document):
    requested = []

    class Response:
        status_code = 200
        text = ""

        def json(self):
            return whitelabel_document

    def fake_get(url, timeout):
        requested.append(url)
        return Response()

    monkeypatch.setattr(utils.requests, "get", fake_get)

    exit_code = main(
        ["--project", "whitelabel", "--version", "1", "--output-path", str(out_dir)]
    )

    assert exit_code == 0
    assert requested == ["https://mammoth.trafi.com/whitelabel/schema/1"]
    assert (out_dir / "MammothEvents.kt").exists()


def test_timeout_prints_vpn_hint(monkeypatch, out_dir, capsys):
    def fake_get(url, timeout):
        raise requests.exceptions.Timeout("timed out")

    monkeypatch.setattr(utils.requests, "get", fake_get)

    assert main(["--output-path", str(out_dir)]) == 1
    assert VPN_HINT in capsys.readouterr().out
    assert list(out_dir.iterdir()) == []


def test_http_error_has_no_vpn_hint(monkeypatch, out_dir, capsys):
    class Response:
        status_code = 500
        text = "boom"

    monkeypatch.setattr(utils.requests, "get", lambda url, timeout: Response())

    assert main(["--output-path", str(out_dir)]) == 1
    assert VPN_HINT not in capsys.readouterr().out


def test_generation_error_writes_nothing(tmp_path, out_dir):
    path = tmp_path / "bad.json"
    document = make_document([make_event(1, "Open", values=[make_value(make_parameter("x"))])])
    path.write_text(json.dumps(document), encoding="utf-8")

    assert main(["--schema-file", str(path), "--output-path", str(out_dir)]) == 1
    assert list(out_dir.iterdir()) == []


def test_python_output(schema_file, out_dir):
    exit_code = main(
        [
            "--schema-file",
            str(schema_file),
            "--output-path",
            str(out_dir),
            "-l",
            "py",
            "--class-name",
            "Events",
            "--no-schema-metadata",
        ]
    )

    assert exit_code == 0
    code = (out_dir / "mammoth_events.py").read_text(encoding="utf-8")
    assert "class Events:\n" in code
    assert "_SCHEMA_VERSION" not in code


def test_output_filename(schema_file, out_dir):
    args = ["--schema-file", str(schema_file), "--output-path", str(out_dir)]
    assert main(args + ["--output-filename", "Analytics.kt"]) == 0
    assert (out_dir / "Analytics.kt").exists()


def test_stdout_writes_no_file(schema_file, out_dir, capsys, monkeypatch):
    monkeypatch.chdir(out_dir)

    assert main(["--schema-file", str(schema_file), "--stdout"]) == 0
    assert "someScreenOpen" in capsys.readouterr().out
    assert list(out_dir.iterdir()) == []


def test_require_event_type(tmp_path, out_dir):
    path = tmp_path / "schema.json"
    path.write_text(json.dumps(make_document([make_event(1, "AppStart")])), encoding="utf-8")
    args = ["--schema-file", str(path), "--output-path", str(out_dir)]

    assert main(args + ["--require-event-type"]) == 1
    assert main(args) == 0


def test_strict_identifiers(tmp_path, out_dir):
    path = tmp_path / "schema.json"
    document = make_document([make_event(1, "screen_open"), make_event(2, "ScreenOpen")])
    path.write_text(json.dumps(document), encoding="utf-8")
    args = ["--schema-file", str(path), "--output-path", str(out_dir)]

    assert main(args + ["--strict-identifiers"]) == 1
    assert list(out_dir.iterdir()) == []
    assert main(args) == 0


def test_config_file(schema_file, out_dir, tmp_path):
    config_file = tmp_path / "mammoth.json"
    config_file.write_text(json.dumps({"package_name": "com.example"}), encoding="utf-8")

    args = ["--schema-file", str(schema_file), "--output-path", str(out_dir)]
    assert main(args + ["--config", str(config_file)]) == 0
    assert "package com.example\n" in (out_dir / "MammothEvents.kt").read_text(encoding="utf-8")


@pytest.mark.parametrize(
    "extra",
    [
        ["--language", "swift"],
        ["--stdout", "--output-filename", "x.kt"],
        ["--timeout", "0"],
        ["--output-path", "does/not/exist"],
        ["--config", "missing.json"],
    ],
)
def test_invalid_arguments(schema_file, extra, monkeypatch, tmp_path):
    monkeypatch.chdir(tmp_path)
    assert main(["--schema-file", str(schema_file)] + extra) == 1


def test_missing_schema_file(tmp_path):
    assert main(["--schema-file", str(tmp_path / "nope.json"), "--output-path", str(tmp_path)]) == 1


def test_list_languages(capsys):
    assert main(["--list-languages"]) == 0
    out = capsys.readouterr().out
    assert "kotlin" in out
    assert "python" in out


def test_broken_schema_file_has_no_vpn_hint(tmp_path, out_dir, capsys):
    path = tmp_path / "broken.json"
    path.write_text("{", encoding="utf-8")

    assert main(["--schema-file", str(path), "--output-path", str(out_dir)]) == 1
    out = capsys.readouterr().out
    assert "Invalid JSON" in out
    assert VPN_HINT not in out
