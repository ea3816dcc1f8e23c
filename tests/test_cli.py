"""Integration tests for the CLI using Typer's CliRunner."""

import json
from unittest.mock import patch

from typer.testing import CliRunner

from mtbridge.cli import app
from tests.conftest import RecordingBackend

runner = CliRunner()

_PATCH_CREATE = "mtbridge.cli.create_backend"


def _fake_backend(**kwargs):
    backend = RecordingBackend(**kwargs)
    return patch(_PATCH_CREATE, return_value=(backend, "fake")), backend


class TestCLITranslate:
    def test_translate_text(self):
        result = runner.invoke(app, ["translate", "Hello", "--backend", "dummy", "--to", "zh-CN"])
        assert result.exit_code == 0
        assert result.output.strip() == "[ZH-CN] Hello"

    def test_translate_from_stdin(self):
        result = runner.invoke(app, ["translate", "-b", "dummy"], input="Bonjour\n")
        assert result.exit_code == 0
        assert result.output.strip() == "[EN] Bonjour"

    def test_no_text(self):
        result = runner.invoke(app, ["translate", "-b", "dummy"], input="")
        assert result.exit_code == 1
        assert "No text provided" in result.output

    def test_languages_passed_to_backend(self):
        patcher, backend = _fake_backend()
        with patcher:
            result = runner.invoke(app, ["translate", "Hallo", "--from", "de", "--to", "fr"])
        assert result.exit_code == 0
        assert backend.calls == [("Hallo", "fr", "de")]

    def test_single_failure_exits_nonzero(self):
        patcher, _ = _fake_backend(fail_on={"boom"})
        with patcher:
            result = runner.invoke(app, ["translate", "boom"])
        assert result.exit_code == 1
        assert "Translation failed" in result.output

    def test_requires_api_key_for_deepl(self):
        result = runner.invoke(
            app, ["translate", "Hello", "--backend", "deepl"], env={"DEEPL_API_KEY": ""},
        )
        assert result.exit_code == 1
        assert "DeepL API key required" in result.output

    def test_unknown_backend(self):
        result = runner.invoke(app, ["translate", "Hello", "--backend", "bing"])
        assert result.exit_code == 1
        assert "Unknown backend" in result.output


class TestCLIBatch:
    def test_batch_comma_separated(self):
        result = runner.invoke(
            app, ["translate", "Hello, World,,Test", "--batch", "-b", "dummy"],
        )
        assert result.exit_code == 0
        assert result.output.splitlines() == ["[EN] Hello", "[EN] World", "[EN] Test"]

    def test_batch_pooled_keeps_order(self):
        texts = [f"t{i}" for i in range(8)]
        patcher, backend = _fake_backend(
            delays={t: (8 - i) * 0.005 for i, t in enumerate(texts)},
        )
        with patcher:
            result = runner.invoke(app, ["translate", ",".join(texts), "--batch"])
        assert result.exit_code == 0
        assert result.output.splitlines() == [f"t{i}->en" for i in range(8)]
        assert backend.max_in_flight <= 3

    def test_batch_failure_does_not_abort(self):
        patcher, _ = _fake_backend(fail_on={"b"})
        with patcher:
            result = runner.invoke(app, ["translate", "a,b,c", "--batch"])
        assert result.exit_code == 0
        assert "Error translating 'b'" in result.output
        assert "a->en" in result.output
        assert "c->en" in result.output

    def test_workers_option(self):
        patcher, backend = _fake_backend(delay=0.01)
        with patcher:
            result = runner.invoke(
                app, ["translate", ",".join(f"x{i}" for i in range(10)), "--batch", "-w", "1"],
            )
        assert result.exit_code == 0
        assert backend.max_in_flight == 1

    def test_batch_and_split_conflict(self):
        result = runner.invoke(app, ["translate", "a,b", "--batch", "--split", "-b", "dummy"])
        assert result.exit_code == 1

    def test_split_long_text(self):
        text = " ".join(f"Sentence {i} goes here." for i in range(50))
        patcher, backend = _fake_backend()
        with patcher:
            result = runner.invoke(app, ["translate", text, "--split", "--to", "ja"])
        assert result.exit_code == 0
        assert len(backend.calls) > 1
        assert result.output.strip().endswith("Sentence 49 goes here.->ja")

    def test_report(self, tmp_path):
        report = tmp_path / "report.json"
        result = runner.invoke(app, [
            "translate", "a,,b", "--batch", "-b", "dummy", "--report", str(report),
        ])
        assert result.exit_code == 0
        data = json.loads(report.read_text())
        assert data["total_items"] == 3
        assert data["empty_items"] == 1
        assert data["translated_items"] == 2
        assert data["strategy"] == "sequential"
        assert data["backend"] == "dummy"


class TestCLIJson:
    def test_single(self):
        payload = json.dumps({"text": "Hello", "from": "en", "to": "zh-CN"})
        result = runner.invoke(app, ["json", "-b", "dummy"], input=payload)
        assert result.exit_code == 0
        assert json.loads(result.output) == {
            "success": True,
            "original": "Hello",
            "translated": "[ZH-CN] Hello",
            "from": "en",
            "to": "zh-CN",
        }

    def test_batch(self):
        payload = json.dumps({"texts": ["Hello", "", "World"], "to": "fr"})
        result = runner.invoke(app, ["json", "-b", "dummy"], input=payload)
        assert result.exit_code == 0
        data = json.loads(result.output)
        assert data["success"] is True
        assert data["from"] == "auto"
        assert data["results"] == [
            {"original": "Hello", "translated": "[FR] Hello"},
            {"original": "", "translated": ""},
            {"original": "World", "translated": "[FR] World"},
        ]

    def test_batch_item_failure(self):
        patcher, _ = _fake_backend(fail_on={"t1"})
        payload = json.dumps({"texts": [f"t{i}" for i in range(5)]})
        with patcher:
            result = runner.invoke(app, ["json"], input=payload)
        assert result.exit_code == 0
        data = json.loads(result.output)
        assert data["success"] is True
        assert data["results"][1]["translated"] == ""
        assert "backend rejected" in data["results"][1]["error"]
        assert data["results"][4] == {"original": "t4", "translated": "t4->en"}

    def test_single_failure_is_reported_in_json(self):
        patcher, _ = _fake_backend(fail_on={"Hello"})
        with patcher:
            result = runner.invoke(app, ["json"], input='{"text": "Hello"}')
        assert result.exit_code == 0
        data = json.loads(result.output)
        assert data["success"] is False
        assert "backend rejected" in data["error"]

    def test_invalid_json(self):
        result = runner.invoke(app, ["json", "-b", "dummy"], input="{oops")
        assert result.exit_code == 1
        data = json.loads(result.output)
        assert data["success"] is False
        assert data["error"].startswith("Invalid JSON input")

    def test_text_required(self):
        result = runner.invoke(app, ["json", "-b", "dummy"], input='{"to": "de"}')
        assert result.exit_code == 1
        data = json.loads(result.output)
        assert data["error"] == "Text field is required"
        assert data["to"] == "de"


class TestCLIServe:
    def test_serve_builds_app(self):
        with patch("uvicorn.run") as mock_run:
            result = runner.invoke(app, [
                "serve", "-b", "dummy", "--port", "9000", "--timeout", "5", "-w", "2",
            ])
        assert result.exit_code == 0
        mock_run.assert_called_once()
        application = mock_run.call_args.args[0]
        assert mock_run.call_args.kwargs["port"] == 9000
        settings = application.state.dispatcher.settings
        assert settings.timeout == 5.0
        assert settings.max_workers == 2

    def test_serve_default_timeout(self):
        with patch("uvicorn.run") as mock_run:
            result = runner.invoke(app, ["serve", "-b", "dummy"])
        assert result.exit_code == 0
        settings = mock_run.call_args.args[0].state.dispatcher.settings
        assert settings.timeout == 30.0


class TestCLIMisc:
    def test_version(self):
        result = runner.invoke(app, ["--version"])
        assert result.exit_code == 0
        assert "mtbridge" in result.output

    def test_languages(self):
        result = runner.invoke(app, ["languages"])
        assert result.exit_code == 0
        assert "zh-CN" in result.output
        assert "auto" in result.output
