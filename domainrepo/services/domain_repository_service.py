"""域名仓库服务 — 域名列表增删 + 流水线状态

通过仓库客户端读取 {server}.{type}-domains.txt，修改后以提交写回，
提交 id 作为后续查询 / 重试流水线的句柄。
"""

from __future__ import annotations

import logging
import time

from domainrepo.core.exceptions import ClientError, NotExistsError, NotFoundError, ValidationError
from domainrepo.core.models import Commit, Domain, DomainListAction
from domainrepo.core.protocols import DomainRepositoryClient
from domainrepo.services.domain_list import DomainList, normalize_domain

logger = logging.getLogger(__name__)

# 提交后检查流水线前的等待间隔（秒）
CHECK_PIPELINE_DELAY = 2


class DomainRepositoryService:
    """域名仓库服务"""

    def __init__(self, client: DomainRepositoryClient) -> None:
        self._client = client

    def update_file(
        self, action: DomainListAction | str, domain: Domain, message: str,
    ) -> str:
        """增删域名并提交，返回 commit id

        Raises:
            AlreadyAddedError: 添加已存在的域名
            NotExistsError: 删除不存在的域名
        """
        action = _parse_action(action)
        name = normalize_domain(domain.name)
        file_path = domain.list_file_path

        current = self._client.get_file_content(file_path)
        if current is None:
            if action is DomainListAction.REMOVE:
                raise NotExistsError()
            commit_id = self._client.create_file(file_path, name, message)
            logger.info("列表文件已创建: %s (+%s) commit=%s", file_path, name, commit_id)
            return commit_id

        domains = DomainList.parse(current)
        if action is DomainListAction.ADD:
            domains.add(name)
        else:
            domains.remove(name)

        commit_id = self._client.update_file_content(file_path, domains.render(), message)
        logger.info(
            "列表文件已更新: %s (%s %s) commit=%s",
            file_path, action.value, name, commit_id,
        )
        return commit_id

    def is_pipeline_success(self, commit_id: str) -> bool:
        """提交的最近一次流水线是否成功"""
        commit = self._client.get_commit(commit_id)
        pipeline = commit.last_pipeline
        return pipeline is not None and pipeline.success

    def restart_pipeline(self, commit_id: str) -> bool:
        """重启提交的最新流水线

        已成功的流水线不重复触发，直接返回 True；
        没有流水线、或令牌权限不足（重试需要 Maintainer，GitLab 返回 403）时返回 False。
        其余请求失败以 ClientError 抛出。
        """
        try:
            pipelines = self._client.get_commit_pipelines(commit_id)
            if not pipelines:
                logger.warning("提交没有流水线: %s", commit_id)
                return False
            last = pipelines[0]
            if last.success:
                return True
            new_id = self._client.retry_pipeline(last.id)
        except NotFoundError:
            logger.warning("流水线不存在: %s", commit_id)
            return False
        except ClientError as e:
            if e.status != 403:
                raise
            logger.warning("无权重试流水线: %s (%s)", commit_id, e)
            return False

        logger.info("流水线已重试: %s -> %s", last.id, new_id)
        return new_id is not None

    def wait_for_pipeline(
        self, commit_id: str, *, attempts: int = 10, delay: float = CHECK_PIPELINE_DELAY,
    ) -> bool:
        """轮询流水线状态直到成功或次数耗尽"""
        for attempt in range(1, max(1, attempts) + 1):
            time.sleep(delay)
            if self.is_pipeline_success(commit_id):
                return True
            logger.debug("流水线未成功: %s (%d/%d)", commit_id, attempt, attempts)
        return False

    def find_last_commit(self, fragment: str) -> Commit | None:
        return self._client.find_last_commit_by_message(fragment)


def _parse_action(action: DomainListAction | str) -> DomainListAction:
    try:
        return DomainListAction(action)
    except ValueError:
        raise ValidationError(f"不支持的列表动作: {action}") from None
