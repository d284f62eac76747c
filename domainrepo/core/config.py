"""集中配置管理

支持从 YAML 文件加载 + 编程式覆盖。

配置示例 (configs/default.yml):

    repository: gitlab
    http_timeout: 15
    repositories:
      gitlab:
        url: https://gitlab.example.com/api/v4
        token: ""                      # 留空则读取 DOMAINREPO_GITLAB_TOKEN
        domain_project_id: infra/domains
        branch: main
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass, field
from typing import Any

from domainrepo.core.exceptions import ConfigError
from domainrepo.utils.yaml_io import load_yaml

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_PATH = "configs/default.yml"


@dataclass
class RepositorySettings:
    """单个仓库平台的连接参数"""

    url: str
    token: str
    project_id: str
    branch: str = "main"
    timeout: int = 15

    @classmethod
    def from_dict(cls, name: str, data: dict[str, Any], *, timeout: int = 15) -> RepositorySettings:
        """从配置段构造，token 缺省时回退到环境变量 DOMAINREPO_<NAME>_TOKEN"""
        url = str(data.get("url") or "").rstrip("/")
        token = str(data.get("token") or "") or os.getenv(
            f"DOMAINREPO_{name.upper()}_TOKEN", "",
        )
        project_id = str(data.get("domain_project_id") or "")
        if not (url and token and project_id):
            raise ConfigError(
                f"仓库 '{name}' 配置不完整: 需要 url / token / domain_project_id"
            )
        return cls(
            url=url,
            token=token,
            project_id=project_id,
            branch=str(data.get("branch") or "main"),
            timeout=int(data.get("timeout", timeout)),
        )


@dataclass
class Config:
    """全局配置"""

    # 当前使用的仓库平台（ClientFactory 的键）
    repository: str = "gitlab"
    repositories: dict[str, dict[str, Any]] = field(default_factory=dict)

    http_timeout: int = 15
    commit_message: str = "update domain list"
    wait_attempts: int = 10

    # 放不到字段里的配置项
    extra: dict = field(default_factory=dict)

    @classmethod
    def from_file(cls, path: str = DEFAULT_CONFIG_PATH) -> Config:
        """从 YAML 文件加载配置，不存在则返回默认"""
        data = load_yaml(path)
        if not data:
            return cls()
        known = {f.name for f in cls.__dataclass_fields__.values()}
        matched = {k: v for k, v in data.items() if k in known}
        repositories = matched.get("repositories")
        if repositories is None:
            matched["repositories"] = {}
        elif not isinstance(repositories, dict):
            raise ConfigError("repositories 必须是映射")
        extra = {k: v for k, v in data.items() if k not in known}
        cfg = cls(**matched)
        cfg.extra = extra
        return cfg

    def repository_settings(self, name: str = "") -> RepositorySettings:
        """获取指定仓库平台的连接参数"""
        name = name or self.repository
        section = self.repositories.get(name)
        if not isinstance(section, dict):
            raise ConfigError(f"缺少仓库配置: repositories.{name}")
        return RepositorySettings.from_dict(name, section, timeout=self.http_timeout)

    def to_dict(self) -> dict:
        from dataclasses import asdict
        return asdict(self)


# 全局单例，首次 import 时不加载文件；由 CLI 入口显式初始化
_current: Config | None = None


def get_config() -> Config:
    """获取当前配置（未初始化则返回默认值）"""
    global _current  # noqa: PLW0603
    if _current is None:
        _current = Config()
    return _current


def init_config(path: str = DEFAULT_CONFIG_PATH) -> Config:
    """从文件初始化全局配置"""
    global _current  # noqa: PLW0603
    _current = Config.from_file(path)
    logger.info("配置已加载: %s", path)
    return _current
