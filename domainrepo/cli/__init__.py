"""domainrepo 命令行接口

命令按领域拆分为子模块，每个模块注册自己的命令到 main group。
"""

import os
from typing import Any

import click

from domainrepo import __version__
from domainrepo.core.config import DEFAULT_CONFIG_PATH, init_config
from domainrepo.core.exceptions import DomainRepoError
from domainrepo.services.container import get_container, reset_container
from domainrepo.utils.logger import setup_logging


def _svc() -> Any:
    """获取全局服务容器的快捷方式"""
    return get_container()


@click.group()
@click.version_option(version=__version__)
@click.option(
    "--config", "-c", "config_path",
    default=lambda: os.getenv("DOMAINREPO_CONFIG", DEFAULT_CONFIG_PATH),
    help="配置文件路径",
)
def main(config_path: str) -> None:
    """domainrepo - 域名白/黑名单仓库维护"""
    setup_logging(
        level=os.getenv("DOMAINREPO_LOG_LEVEL", "INFO"),
        json_output=os.getenv("DOMAINREPO_LOG_JSON", "") == "1",
    )
    try:
        init_config(config_path)
    except DomainRepoError as e:
        raise click.ClickException(f"[{e.code}] {e}") from e
    reset_container()


from domainrepo.cli.cmd_domain import register as _reg_domain  # noqa: E402
from domainrepo.cli.cmd_pipeline import register as _reg_pipeline  # noqa: E402

_reg_domain(main)
_reg_pipeline(main)
