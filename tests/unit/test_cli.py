import json

import pytest

import authform_detector.core.config as config_module  # type: ignore[import]
from authform_detector import cli  # type: ignore[import]

LOGIN_HTML = (
    "<html><body><div class='card'><h2>Sign in</h2>"
    '<form><input type="email" name="email"><input type="password" name="password">'
    "<button>Sign in</button></form></div></body></html>"
)


@pytest.fixture(autouse=True)
def _isolated_env(monkeypatch, tmp_path):
    monkeypatch.setattr(config_module, "load_dotenv", lambda *_args, **_kwargs: False)
    monkeypatch.setenv("AUTHFORM_HISTORY", str(tmp_path / "history.json"))
    monkeypatch.delenv("AUTHFORM_MODE", raising=False)


def test_analyze_local_file_writes_report(tmp_path, capsys):
    page = tmp_path / "login.html"
    page.write_text(LOGIN_HTML, encoding="utf-8")
    report = tmp_path / "report.json"

    exit_code = cli.run_cli(["analyze", str(page), "--report", str(report), "--show-markup"])

    output = capsys.readouterr().out
    assert exit_code == 0
    assert "Form Detected" in output
    assert "  <input" in output
    data = json.loads(report.read_text(encoding="utf-8"))
    assert data["results"][0]["authForm"]["hasPasswordInput"] is True
    assert data["results"][0]["authForm"]["formElement"].startswith("<form>")


def test_analyze_remote_target_uses_runner(monkeypatch, tmp_path, capsys):
    calls = []

    def fake_analyze_url(url, config):
        calls.append((url, config.mode.value))
        return cli.analyze_markup(url, "<p>No inputs</p>", config, status=200)

    monkeypatch.setattr(cli, "analyze_url", fake_analyze_url)

    exit_code = cli.run_cli(["analyze", "https://example.com", "--strict", "--report", str(tmp_path / "r.json")])

    assert exit_code == 0
    assert calls == [("https://example.com", "strict")]
    assert "No Form Detected" in capsys.readouterr().out


def test_debug_flag_prints_signal_breakdown(tmp_path, capsys):
    page = tmp_path / "login.html"
    page.write_text(LOGIN_HTML, encoding="utf-8")

    cli.run_cli(["analyze", str(page), "--debug", "--report", str(tmp_path / "r.json")])

    assert '"totalInputs": 2' in capsys.readouterr().out


def test_history_add_list_and_limit(tmp_path, capsys):
    for index in range(5):
        assert cli.run_cli(["history", "add", f"site{index}.example.com"]) == 0

    assert cli.run_cli(["history", "add", "extra.example.com"]) == 1
    assert cli.run_cli(["history", "list"]) == 0

    output = capsys.readouterr().out
    assert "5 URLs limit reached." in output
    assert "URLs added: 5/5" in output

    saved = json.loads((tmp_path / "history.json").read_text(encoding="utf-8"))
    assert [entry["url"] for entry in saved][0] == "https://site0.example.com"


def test_history_remove_unknown_entry():
    assert cli.run_cli(["history", "remove", "nope"]) == 1
