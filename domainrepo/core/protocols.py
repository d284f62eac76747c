"""领域协议定义

集中定义服务层与仓库客户端之间的接口契约（Protocol），
实现依赖倒置 — 服务层依赖抽象而非具体平台实现。

使用 typing.Protocol 而非 ABC，测试中的内存桩无需继承即可满足协议。
"""

from __future__ import annotations

from typing import Any, Protocol

from domainrepo.core.models import Commit, Pipeline


class DomainRepositoryClient(Protocol):
    """域名仓库客户端协议

    每个 Git 托管平台一个实现，由 ClientFactory 按名称选择。
    请求失败抛出 ClientError，远端返回 404 抛出 NotFoundError。
    """

    def get_file_content(self, file_path: str) -> str | None:
        """读取文件内容，文件不存在返回 None"""
        ...

    def create_file(
        self, file_path: str, content: str, message: str = "file created",
    ) -> str:
        """创建文件，返回 commit id"""
        ...

    def update_file_content(self, file_path: str, content: str, message: str) -> str:
        """更新文件内容，返回 commit id"""
        ...

    def create_commit(self, message: str, actions: list[dict[str, Any]]) -> dict[str, Any]:
        """提交一组文件动作"""
        ...

    def get_commit(self, commit_id: str) -> Commit:
        """获取提交（含最近一次流水线）"""
        ...

    def get_commit_pipelines(self, commit_id: str) -> list[Pipeline]:
        """获取提交关联的流水线，最新的在前"""
        ...

    def retry_pipeline(self, pipeline_id: int) -> int | None:
        """重试流水线，返回新流水线 id"""
        ...

    def find_last_commit_by_message(self, fragment: str) -> Commit | None:
        """按提交信息片段搜索最近一次提交"""
        ...
