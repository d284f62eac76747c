"""CLI 端到端测试（CliRunner + 内存客户端）"""

from __future__ import annotations

from pathlib import Path

import pytest
from click.testing import CliRunner

import domainrepo.core.config as cfgmod
from domainrepo.cli import main
from domainrepo.cli.cmd_pipeline import EXIT_NOT_SUCCESS, wait
from domainrepo.clients.factory import ClientFactory
from domainrepo.core.models import Commit, Pipeline
from domainrepo.services.container import reset_container
from domainrepo.services.domain_repository_service import CHECK_PIPELINE_DELAY
from domainrepo.utils.logger import reset_logging

_REAL_CREATE = ClientFactory.create

_YAML = """\
repository: gitlab
wait_attempts: 2
repositories:
  gitlab:
    url: https://gitlab.example.com/api/v4
    token: t
    domain_project_id: "1"
"""


@pytest.fixture()
def config_file(tmp_path: Path) -> str:
    p = tmp_path / "config.yml"
    p.write_text(_YAML, encoding="utf-8")
    return str(p)


@pytest.fixture(autouse=True)
def _isolate(fake_client, monkeypatch: pytest.MonkeyPatch):
    monkeypatch.setattr(cfgmod, "_current", None)
    monkeypatch.setattr(ClientFactory, "create", lambda self, name, config=None: fake_client)
    monkeypatch.setattr("time.sleep", lambda s: None)
    monkeypatch.setenv("DOMAINREPO_LOG_LEVEL", "ERROR")
    reset_container()
    yield
    reset_container()
    reset_logging()


def _run(config_file: str, *args: str):
    return CliRunner().invoke(main, ["--config", config_file, *args])


class TestDomainCommands:
    def test_add_creates_file(self, config_file, fake_client) -> None:
        r = _run(config_file, "add", "a.com", "--server", "ssl1", "--type", "white")
        assert r.exit_code == 0, r.output
        assert "c1" in r.output.splitlines()
        assert fake_client.files["ssl1.white-domains.txt"] == "a.com"

    def test_add_duplicate_fails(self, config_file, fake_client) -> None:
        fake_client.files["ssl1.white-domains.txt"] = "a.com\n"
        r = _run(config_file, "add", "a.com", "-s", "ssl1", "-t", "white")
        assert r.exit_code == 1
        assert "ALREADY_ADDED" in r.output

    def test_remove(self, config_file, fake_client) -> None:
        fake_client.files["ssl1.black-domains.txt"] = "a.com\nb.com"
        r = _run(config_file, "remove", "a.com", "-s", "ssl1", "-t", "black", "-m", "drop a.com")
        assert r.exit_code == 0, r.output
        assert fake_client.files["ssl1.black-domains.txt"] == "b.com"

    def test_remove_absent_fails(self, config_file, fake_client) -> None:
        fake_client.files["ssl1.black-domains.txt"] = "b.com"
        r = _run(config_file, "remove", "a.com", "-s", "ssl1", "-t", "black")
        assert r.exit_code == 1
        assert "NOT_EXISTS" in r.output


class TestPipelineCommands:
    def test_status_success(self, config_file, fake_client) -> None:
        fake_client.commits["abc"] = Commit(id="abc", last_pipeline=Pipeline(id=1, status="success"))
        r = _run(config_file, "status", "abc")
        assert r.exit_code == 0
        assert "success" in r.output

    def test_status_failed(self, config_file, fake_client) -> None:
        fake_client.commits["abc"] = Commit(id="abc", last_pipeline=Pipeline(id=1, status="failed"))
        r = _run(config_file, "status", "abc")
        assert r.exit_code == EXIT_NOT_SUCCESS == 3

    def test_retry(self, config_file, fake_client) -> None:
        fake_client.pipelines["abc"] = [Pipeline(id=4, status="failed")]
        r = _run(config_file, "retry", "abc")
        assert r.exit_code == 0, r.output
        assert fake_client.retried == [4]

    def test_retry_without_pipeline_fails(self, config_file) -> None:
        r = _run(config_file, "retry", "abc")
        assert r.exit_code == 1

    def test_wait_gives_up(self, config_file, fake_client) -> None:
        fake_client.commits["abc"] = Commit(id="abc", last_pipeline=Pipeline(id=1, status="running"))
        r = _run(config_file, "wait", "abc", "--delay", "0")
        assert r.exit_code == 1

    def test_find(self, config_file, fake_client) -> None:
        fake_client.commits["abc"] = Commit(id="abc", title="add a.com", message="add a.com")
        r = _run(config_file, "find", "a.com")
        assert r.exit_code == 0
        assert "abc" in r.output

    def test_wait_delay_defaults_to_service_constant(self) -> None:
        delay = next(p for p in wait.params if p.name == "delay")
        assert delay.default == CHECK_PIPELINE_DELAY


class TestConfigErrors:
    def test_empty_repositories_reports_config_error(self, tmp_path: Path, monkeypatch) -> None:
        monkeypatch.setattr(ClientFactory, "create", _REAL_CREATE)
        p = tmp_path / "empty.yml"
        p.write_text("repository: gitlab\nrepositories:\n", encoding="utf-8")
        r = _run(str(p), "status", "abc")
        assert r.exit_code == 1
        assert "CONFIG_ERROR" in r.output

    def test_non_mapping_repositories_reports_config_error(self, tmp_path: Path) -> None:
        p = tmp_path / "bad.yml"
        p.write_text("repositories: gitlab\n", encoding="utf-8")
        r = _run(str(p), "status", "abc")
        assert r.exit_code == 1
        assert "必须是映射" in r.output
