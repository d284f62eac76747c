"""域名列表命令：add, remove"""

import click

from domainrepo.core.exceptions import DomainRepoError
from domainrepo.core.models import Domain, DomainListAction


def register(main: click.Group) -> None:
    main.add_command(add)
    main.add_command(remove)


def _update(action: DomainListAction, name: str, server: str, domain_type: str, message: str) -> None:
    from domainrepo.cli import _svc

    container = _svc()
    msg = message or f"{container.config.commit_message}: {action.value} {name}"
    try:
        commit_id = container.domain_repository.update_file(
            action, Domain(name=name, server=server, type=domain_type), msg,
        )
    except DomainRepoError as e:
        raise click.ClickException(f"[{e.code}] {e}") from e
    click.echo(commit_id)


_domain_options = [
    click.argument("name"),
    click.option("--server", "-s", required=True, help="SSL 服务器标识"),
    click.option("--type", "-t", "domain_type", required=True, help="域名类型（如 white / black）"),
    click.option("--message", "-m", default="", help="提交信息"),
]


def _with_domain_options(func):
    for opt in reversed(_domain_options):
        func = opt(func)
    return func


@click.command()
@_with_domain_options
def add(name: str, server: str, domain_type: str, message: str) -> None:
    """添加域名并提交，输出 commit id"""
    _update(DomainListAction.ADD, name, server, domain_type, message)


@click.command()
@_with_domain_options
def remove(name: str, server: str, domain_type: str, message: str) -> None:
    """删除域名并提交，输出 commit id"""
    _update(DomainListAction.REMOVE, name, server, domain_type, message)
