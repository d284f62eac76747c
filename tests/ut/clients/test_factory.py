"""ClientFactory 单元测试"""

from __future__ import annotations

import pytest

from domainrepo.clients.factory import ClientFactory
from domainrepo.clients.gitlab import GitlabClient
from domainrepo.core.config import Config
from domainrepo.core.exceptions import ConfigError


@pytest.fixture()
def config() -> Config:
    return Config(repositories={
        "gitlab": {
            "url": "https://gitlab.example.com/api/v4",
            "token": "t",
            "domain_project_id": "7",
            "branch": "prod",
        },
    })


class TestClientFactory:
    def test_create_gitlab(self, config: Config) -> None:
        client = ClientFactory().create("gitlab", config)
        assert isinstance(client, GitlabClient)
        assert client.branch == "prod"

    def test_unknown_name_raises(self, config: Config) -> None:
        with pytest.raises(ConfigError, match="Repository name 'bitbucket' not found"):
            ClientFactory().create("bitbucket", config)

    def test_register_custom(self, config: Config) -> None:
        factory = ClientFactory()
        config.repositories["custom"] = config.repositories["gitlab"]
        factory.register("custom", lambda settings: ("custom", settings.project_id))
        assert factory.create("custom", config) == ("custom", "7")
        assert factory.available() == ["custom", "gitlab"]

    def test_register_does_not_leak(self) -> None:
        ClientFactory().register("tmp", lambda s: s)
        assert "tmp" not in ClientFactory().available()
