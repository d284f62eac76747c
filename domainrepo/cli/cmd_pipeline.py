"""流水线命令：status, retry, wait, find"""

import click

from domainrepo.core.exceptions import DomainRepoError
from domainrepo.services.domain_repository_service import CHECK_PIPELINE_DELAY

# 流水线未成功时 status 的退出码（2 为 click 用法错误）
EXIT_NOT_SUCCESS = 3


def register(main: click.Group) -> None:
    main.add_command(status)
    main.add_command(retry)
    main.add_command(wait)
    main.add_command(find)


def _service():
    from domainrepo.cli import _svc
    return _svc().domain_repository


@click.command()
@click.argument("commit_id")
def status(commit_id: str) -> None:
    """查看提交的流水线是否成功"""
    try:
        ok = _service().is_pipeline_success(commit_id)
    except DomainRepoError as e:
        raise click.ClickException(f"[{e.code}] {e}") from e
    click.echo("success" if ok else "not success")
    if not ok:
        raise SystemExit(EXIT_NOT_SUCCESS)


@click.command()
@click.argument("commit_id")
def retry(commit_id: str) -> None:
    """重启提交的最新流水线（已成功则跳过）"""
    try:
        ok = _service().restart_pipeline(commit_id)
    except DomainRepoError as e:
        raise click.ClickException(f"[{e.code}] {e}") from e
    if not ok:
        raise click.ClickException(f"流水线重启失败: {commit_id}")
    click.echo(f"流水线已就绪: {commit_id}")


@click.command()
@click.argument("commit_id")
@click.option("--attempts", default=0, type=int, help="最大轮询次数（默认取配置 wait_attempts）")
@click.option("--delay", default=CHECK_PIPELINE_DELAY, type=float, help="轮询间隔（秒）")
def wait(commit_id: str, attempts: int, delay: float) -> None:
    """轮询直到流水线成功"""
    from domainrepo.cli import _svc

    container = _svc()
    try:
        ok = container.domain_repository.wait_for_pipeline(
            commit_id, attempts=attempts or container.config.wait_attempts, delay=delay,
        )
    except DomainRepoError as e:
        raise click.ClickException(f"[{e.code}] {e}") from e
    if not ok:
        raise click.ClickException(f"流水线未成功: {commit_id}")
    click.echo("success")


@click.command()
@click.argument("fragment")
def find(fragment: str) -> None:
    """按提交信息片段搜索最近一次提交"""
    try:
        commit = _service().find_last_commit(fragment)
    except DomainRepoError as e:
        raise click.ClickException(f"[{e.code}] {e}") from e
    if commit is None:
        click.echo("没有匹配的提交。")
        return
    click.echo(f"{commit.id}  {commit.title}")
