"""服务容器 — 统一装配配置、仓库客户端与服务

CLI 通过 get_container() 获取服务，而非直接构造客户端。

依赖关系:
  domain_repository → client → config

用法:
    container = ServiceContainer()
    svc = container.domain_repository     # 懒加载

    # 显式注入配置
    cfg = Config.from_file("my_config.yml")
    container = ServiceContainer(config=cfg)
"""

from __future__ import annotations

import logging
import threading
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from domainrepo.core.config import Config
    from domainrepo.core.protocols import DomainRepositoryClient
    from domainrepo.services.domain_repository_service import DomainRepositoryService

logger = logging.getLogger(__name__)


class ServiceContainer:
    """懒加载服务容器 — 同一容器内共享客户端实例"""

    def __init__(self, config: Config | None = None) -> None:
        self._instances: dict[str, object] = {}
        if config is None:
            from domainrepo.core.config import get_config
            config = get_config()
        self._config = config

    @property
    def config(self) -> Config:
        return self._config

    @property
    def client(self) -> DomainRepositoryClient:
        if "client" not in self._instances:
            from domainrepo.clients.factory import ClientFactory
            self._instances["client"] = ClientFactory().create(
                self._config.repository, self._config,
            )
        return self._instances["client"]  # type: ignore[return-value]

    @property
    def domain_repository(self) -> DomainRepositoryService:
        if "domain_repository" not in self._instances:
            from domainrepo.services.domain_repository_service import DomainRepositoryService
            self._instances["domain_repository"] = DomainRepositoryService(self.client)
        return self._instances["domain_repository"]  # type: ignore[return-value]


# ---- 全局单例 ----

_global: ServiceContainer | None = None
_global_lock = threading.Lock()


def get_container() -> ServiceContainer:
    """获取全局 ServiceContainer 单例（线程安全）"""
    global _global  # noqa: PLW0603
    if _global is not None:
        return _global
    with _global_lock:
        if _global is None:
            _global = ServiceContainer()
        return _global


def reset_container() -> None:
    """重置全局容器（仅用于测试）"""
    global _global  # noqa: PLW0603
    with _global_lock:
        _global = None
