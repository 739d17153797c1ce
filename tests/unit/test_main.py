"""End-to-end tests for the CLI entrypoint (no network, no real CRE CLI)."""

from __future__ import annotations

import json
import logging
import shutil
import subprocess
from collections.abc import Callable, Iterator
from pathlib import Path
from unittest.mock import Mock

import pytest
import requests

from cre_workflow_toolkit.main import main

WriteFile = Callable[[str, str], Path]


@pytest.fixture(autouse=True)
def restore_root_logging(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Iterator[None]:
    # `main` reconfigures the root logger; keep that from leaking into other tests.
    monkeypatch.chdir(tmp_path)
    root = logging.getLogger()
    handlers = list(root.handlers)
    level = root.level
    yield
    for handler in list(root.handlers):
        root.removeHandler(handler)
    for handler in handlers:
        root.addHandler(handler)
    root.setLevel(level)


def _json_out(capsys: pytest.CaptureFixture[str]) -> dict[str, object]:
    lines = capsys.readouterr().out.strip().splitlines()
    assert len(lines) == 1
    return json.loads(lines[0])


def test_validate_invalid_workflow_still_exits_zero(
    workflow_dir: Path, write_file: WriteFile, capsys: pytest.CaptureFixture[str]
) -> None:
    write_file("workflow.yaml", "")

    exit_code = main(["validate", str(workflow_dir)])

    payload = _json_out(capsys)
    assert exit_code == 0
    assert payload["valid"] is False
    assert payload["errors"] == ["Missing TypeScript entry point (src/index.ts or index.ts)"]


def test_analyze_limits_prints_report(
    workflow_dir: Path, write_file: WriteFile, capsys: pytest.CaptureFixture[str]
) -> None:
    write_file("src/index.ts", "const r = httpClient.sendRequest(req);\n" * 6)

    exit_code = main(["analyze-limits", str(workflow_dir)])

    payload = _json_out(capsys)
    assert exit_code == 0
    assert payload["warnings"] == ["Found 6 potential HTTP call sites - limit is 5 per execution"]
    assert payload["files_analyzed"] == 1


def test_analyze_limits_defaults_to_current_directory(
    capsys: pytest.CaptureFixture[str],
) -> None:
    exit_code = main(["analyze-limits"])

    payload = _json_out(capsys)
    assert exit_code == 0
    assert payload["path"] == "."
    assert payload["info"] == ["No TypeScript files found"]


def test_check_cli_when_not_installed(
    monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
) -> None:
    monkeypatch.setattr(shutil, "which", lambda name: None)

    exit_code = main(["check-cli"])

    payload = _json_out(capsys)
    assert exit_code == 0
    assert payload["installed"] is False
    assert "https://docs.chain.link/cre" in payload["install_instructions"]


def test_check_cli_uses_configured_binary(
    monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
) -> None:
    monkeypatch.setenv("CRE_CLI_BINARY", "cre-nightly")
    looked_up: list[str] = []

    def fake_which(name: str) -> None:
        looked_up.append(name)
        return None

    monkeypatch.setattr(shutil, "which", fake_which)

    main(["check-cli"])

    assert looked_up == ["cre-nightly"]
    assert _json_out(capsys)["installed"] is False


def test_simulate_without_cli_fails(
    workflow_dir: Path, monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
) -> None:
    monkeypatch.setattr(shutil, "which", lambda name: None)

    exit_code = main(["simulate", str(workflow_dir)])

    payload = _json_out(capsys)
    assert exit_code == 1
    assert payload["success"] is False
    assert "CRE CLI not installed" in payload["error"]


def test_simulate_missing_path_fails(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
) -> None:
    monkeypatch.setattr(shutil, "which", lambda name: "/opt/cre")

    exit_code = main(["simulate", str(tmp_path / "missing")])

    assert exit_code == 1
    assert _json_out(capsys)["error"].startswith("Workflow path not found:")


def test_simulate_forwards_args_and_mirrors_exit_code(
    workflow_dir: Path, monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
) -> None:
    monkeypatch.setattr(shutil, "which", lambda name: "/opt/cre")
    run = Mock(
        return_value=subprocess.CompletedProcess(args=[], returncode=4, stdout=None, stderr=None)
    )
    monkeypatch.setattr(subprocess, "run", run)

    exit_code = main(["simulate", str(workflow_dir), "--target", "production-settings"])

    assert exit_code == 4
    run.assert_called_once_with(
        ["/opt/cre", "workflow", "simulate", ".", "--target", "production-settings"],
        cwd=workflow_dir,
        check=False,
    )
    out = capsys.readouterr().out
    assert "Simulation failed with exit code: 4" in out


def test_simulate_injects_default_target(
    workflow_dir: Path, monkeypatch: pytest.MonkeyPatch
) -> None:
    monkeypatch.setattr(shutil, "which", lambda name: "/opt/cre")
    run = Mock(
        return_value=subprocess.CompletedProcess(args=[], returncode=0, stdout=None, stderr=None)
    )
    monkeypatch.setattr(subprocess, "run", run)

    exit_code = main(["simulate", str(workflow_dir), "--broadcast"])

    assert exit_code == 0
    command = run.call_args.args[0]
    assert command[4:] == ["--target", "staging-settings", "--broadcast"]


def test_simulate_injection_can_be_disabled(
    workflow_dir: Path, monkeypatch: pytest.MonkeyPatch
) -> None:
    monkeypatch.setattr(shutil, "which", lambda name: "/opt/cre")
    run = Mock(
        return_value=subprocess.CompletedProcess(args=[], returncode=0, stdout=None, stderr=None)
    )
    monkeypatch.setattr(subprocess, "run", run)

    main(["simulate", "--no-default-target", str(workflow_dir), "--broadcast"])

    assert run.call_args.args[0][4:] == ["--broadcast"]


def test_fetch_docs_failure_exits_non_zero(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
) -> None:
    def offline(self: requests.Session, url: str, **kwargs: object) -> None:
        raise requests.ConnectionError("offline")

    monkeypatch.setattr(requests.Session, "get", offline)

    exit_code = main(
        ["fetch-docs", "--url", "https://docs.example.test/x.txt", "--output", str(tmp_path / "x")]
    )

    payload = _json_out(capsys)
    assert exit_code == 1
    assert payload == {
        "success": False,
        "error": "Failed to fetch docs from https://docs.example.test/x.txt",
    }


def test_chain_selectors_table(capsys: pytest.CaptureFixture[str]) -> None:
    exit_code = main(["chain-selectors"])

    out = capsys.readouterr().out
    assert exit_code == 0
    assert out.splitlines()[0].startswith("Chain")
    assert "polygon-testnet-amoy" in out


def test_chain_selectors_lookup(capsys: pytest.CaptureFixture[str]) -> None:
    exit_code = main(["chain-selectors", "ethereum-mainnet-base-1"])

    assert exit_code == 0
    assert _json_out(capsys) == {
        "success": True,
        "name": "Base Mainnet",
        "selector_name": "ethereum-mainnet-base-1",
        "selector_id": 15971525489660198786,
    }


def test_chain_selectors_unknown_query(capsys: pytest.CaptureFixture[str]) -> None:
    exit_code = main(["chain-selectors", "solana-mainnet"])

    assert exit_code == 1
    assert _json_out(capsys)["error"] == "Unknown chain: solana-mainnet"


def test_chain_selectors_json(capsys: pytest.CaptureFixture[str]) -> None:
    main(["chain-selectors", "--json"])

    payload = _json_out(capsys)
    assert len(payload["chains"]) == 14


def test_templates_list(capsys: pytest.CaptureFixture[str]) -> None:
    exit_code = main(["templates", "list"])

    payload = _json_out(capsys)
    assert exit_code == 0
    assert {"name", "trigger", "description", "filename"} <= set(payload["templates"][0])


def test_templates_show_prints_source(capsys: pytest.CaptureFixture[str]) -> None:
    exit_code = main(["templates", "show", "workflow-using-secret"])

    assert exit_code == 0
    assert "getSecret" in capsys.readouterr().out


def test_templates_scaffold_conflict(
    workflow_dir: Path, write_file: WriteFile, capsys: pytest.CaptureFixture[str]
) -> None:
    write_file("src/index.ts", "// mine\n")

    exit_code = main(["templates", "scaffold", "workflow-cron", str(workflow_dir)])

    payload = _json_out(capsys)
    assert exit_code == 1
    assert "--force" in payload["error"]


def test_templates_unknown_name(capsys: pytest.CaptureFixture[str]) -> None:
    exit_code = main(["templates", "show", "nope"])

    assert exit_code == 1
    assert "Unknown template" in _json_out(capsys)["error"]


def test_invalid_configuration_exits_two(
    monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
) -> None:
    monkeypatch.setenv("CRE_DOCS_TIMEOUT_SECONDS", "-1")

    exit_code = main(["analyze-limits"])

    assert exit_code == 2
    assert "Configuration error" in capsys.readouterr().err


def test_unknown_log_level_exits_two(
    monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
) -> None:
    monkeypatch.setenv("LOG_LEVEL", "verbose")

    exit_code = main(["analyze-limits"])

    captured = capsys.readouterr()
    assert exit_code == 2
    assert captured.out == ""
    assert "Unknown log level" in captured.err
