#!/usr/bin/env python3
"""
Tests for the command line interface.
"""

import json
from pathlib import Path
import sys

import pytest
from typer.testing import CliRunner

sys.path.insert(0, str(Path(__file__).parent.parent / "lib"))

from schema_cli import app


runner = CliRunner()


@pytest.fixture
def sample_file(tmp_path):
    path = tmp_path / "sample.json"
    path.write_text(json.dumps([
        {"id": 1, "email": "alice@example.com"},
        {"id": 2, "email": None},
    ]))
    return path


class TestInferCommand:

    def test_writes_schema(self, sample_file, tmp_path):
        output = tmp_path / "out" / "schema.json"
        result = runner.invoke(app, ["infer", str(sample_file), "-o", str(output)])

        assert result.exit_code == 0, result.output
        schema = json.loads(output.read_text())
        assert schema["items"]["required"] == ["id"]
        assert schema["items"]["properties"]["email"] == {
            "type": ["string", "null"],
            "format": "email",
        }

    def test_missing_sample(self, tmp_path):
        result = runner.invoke(app, ["infer", str(tmp_path / "nope.json")])
        assert result.exit_code != 0

    @pytest.mark.parametrize("content", [b'{"name": "\xff\xfe"}', b"{not json"])
    def test_unreadable_sample(self, tmp_path, content):
        path = tmp_path / "bad.json"
        path.write_bytes(content)

        result = runner.invoke(app, ["infer", str(path)])
        assert result.exit_code == 2
        assert isinstance(result.exception, SystemExit)


class TestValidateCommand:

    def test_create_then_validate(self, sample_file, tmp_path):
        schema_dir = tmp_path / "schemas"
        args = ["validate", "api", "users", str(sample_file), "--schema-dir", str(schema_dir)]

        result = runner.invoke(app, args + ["--create", "--quiet"])
        assert result.exit_code == 0, result.output
        assert (schema_dir / "api" / "users_schema.json").is_file()

        result = runner.invoke(app, args + ["--quiet"])
        assert result.exit_code == 0, result.output
        assert "is valid" in result.output

    def test_invalid_body(self, sample_file, tmp_path):
        schema_dir = tmp_path / "schemas"
        runner.invoke(app, [
            "validate", "api", "users", str(sample_file),
            "--schema-dir", str(schema_dir), "--create", "--quiet",
        ])

        bad = tmp_path / "bad.json"
        bad.write_text(json.dumps([{"id": "one"}]))
        result = runner.invoke(app, [
            "validate", "api", "users", str(bad), "--schema-dir", str(schema_dir), "--quiet",
        ])
        assert result.exit_code == 1

    def test_missing_schema(self, sample_file, tmp_path):
        result = runner.invoke(
            app,
            ["validate", "api", "users", str(sample_file), "--quiet"],
            env={"RESPONSE_SCHEMA_DIR": str(tmp_path / "empty")},
        )
        assert result.exit_code == 2

    def test_local_timestamps_round_trip(self, tmp_path):
        body = tmp_path / "events.json"
        body.write_text(json.dumps([
            {"at": "2024-07-25 13:36:08", "time": "13:36:08"},
            {"at": "2024-07-26T08:00:00", "time": "08:00:00"},
        ]))
        args = [
            "validate", "api", "events", str(body),
            "--schema-dir", str(tmp_path / "schemas"), "--quiet",
        ]

        assert runner.invoke(app, args + ["--create"]).exit_code == 0
        result = runner.invoke(app, args)
        assert result.exit_code == 0, result.output
