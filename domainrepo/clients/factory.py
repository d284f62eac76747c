"""仓库客户端工厂 — 按配置的平台名称选择具体实现"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any, Callable

from domainrepo.clients.gitlab import GitlabClient
from domainrepo.core.exceptions import ConfigError

if TYPE_CHECKING:
    from domainrepo.core.config import Config, RepositorySettings
    from domainrepo.core.protocols import DomainRepositoryClient

logger = logging.getLogger(__name__)

ClientConstructor = Callable[["RepositorySettings"], Any]


class ClientFactory:
    """客户端工厂

    用法:
        client = ClientFactory().create("gitlab", config)
    """

    _builtin: dict[str, ClientConstructor] = {
        "gitlab": GitlabClient,
    }

    def __init__(self) -> None:
        self._registry: dict[str, ClientConstructor] = dict(self._builtin)

    def register(self, name: str, constructor: ClientConstructor) -> None:
        """注册新的平台实现"""
        self._registry[name] = constructor

    def available(self) -> list[str]:
        return sorted(self._registry)

    def create(self, repository_name: str, config: Config | None = None) -> DomainRepositoryClient:
        constructor = self._registry.get(repository_name)
        if constructor is None:
            raise ConfigError(f"Repository name '{repository_name}' not found")
        if config is None:
            from domainrepo.core.config import get_config
            config = get_config()
        client: DomainRepositoryClient = constructor(config.repository_settings(repository_name))
        logger.debug("已创建仓库客户端: %s", repository_name)
        return client
