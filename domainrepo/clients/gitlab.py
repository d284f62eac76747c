"""GitLab 仓库客户端

通过 GitLab REST API v4 读写域名列表文件、查询提交与流水线。

响应分类:
  - 2xx: 返回解析后的 JSON
  - 404: NotFoundError
  - 其他状态码 / 网络异常 / 响应非 JSON: ClientError
"""

from __future__ import annotations

import base64
import json
import logging
import urllib.error
import urllib.request
from typing import Any
from urllib.parse import quote, urlencode, urlparse

from domainrepo.core.config import RepositorySettings
from domainrepo.core.exceptions import ClientError, ConfigError, NotFoundError, ValidationError
from domainrepo.core.models import Commit, Pipeline

logger = logging.getLogger(__name__)

# 提交动作
ACTION_CREATE = "create"
ACTION_UPDATE = "update"

_ALLOWED_SCHEMES = frozenset(("http", "https"))


class GitlabClient:
    """GitLab 客户端"""

    def __init__(self, settings: RepositorySettings) -> None:
        base_url = settings.url.rstrip("/")
        if not (base_url and settings.token and settings.project_id):
            raise ConfigError("GitLab 配置不完整: 需要 url / token / domain_project_id")

        scheme = urlparse(base_url).scheme
        if scheme not in _ALLOWED_SCHEMES:
            raise ValidationError(f"GitLab url 仅支持 http/https，实际为 '{scheme}': {base_url}")

        self.base_url = base_url
        self.token = settings.token
        self.project_id = quote(settings.project_id, safe="")
        self.branch = settings.branch
        self.timeout = settings.timeout

    # ---- 请求 ----

    def _send_request(
        self, endpoint: str, method: str = "GET", data: dict[str, Any] | None = None,
    ) -> Any:
        """发送请求并解析 JSON 响应

        GET 参数拼接为 query string，其余方法以 JSON body 发送。
        """
        method = method.upper()
        url = f"{self.base_url}/{endpoint.strip('/')}"
        headers = {"PRIVATE-TOKEN": self.token, "Accept": "application/json"}
        body = None
        if method == "GET":
            if data:
                url = f"{url}?{urlencode(data)}"
        else:
            body = json.dumps(data or {}, ensure_ascii=False).encode("utf-8")
            headers["Content-Type"] = "application/json"

        req = urllib.request.Request(url, data=body, method=method, headers=headers)
        try:
            with urllib.request.urlopen(req, timeout=self.timeout) as resp:  # nosec B310
                raw = resp.read().decode("utf-8")
        except urllib.error.HTTPError as e:
            if e.code == 404:
                raise NotFoundError(f"{method} {endpoint}: 404") from e
            logger.error("GitLab 请求失败: %s %s -> HTTP %s %s", method, endpoint, e.code, e.reason)
            raise ClientError(f"HTTP 错误 {e.code}: {e.reason}", status=e.code) from e
        except (urllib.error.URLError, OSError) as e:
            logger.error("GitLab 网络错误: %s %s -> %s", method, endpoint, e)
            raise ClientError(f"网络错误: {e}") from e

        if not raw:
            return {}
        try:
            return json.loads(raw)
        except json.JSONDecodeError as e:
            raise ClientError(f"响应格式错误: {e}") from e

    # ---- 文件 ----

    def get_file_content(self, file_path: str) -> str | None:
        """读取文件内容，文件不存在返回 None"""
        encoded = quote(file_path, safe="")
        try:
            data = self._send_request(
                f"/projects/{self.project_id}/repository/files/{encoded}",
                "GET", {"ref": self.branch},
            )
        except NotFoundError:
            return None
        try:
            return base64.b64decode(data.get("content", "")).decode("utf-8")
        except (ValueError, AttributeError) as e:
            raise ClientError(f"文件内容解码失败: {file_path}") from e

    def create_file(
        self, file_path: str, content: str, message: str = "file created",
    ) -> str:
        commit = self.create_commit(message, [
            {"action": ACTION_CREATE, "file_path": file_path, "content": content},
        ])
        return str(commit["id"])

    def update_file_content(self, file_path: str, content: str, message: str) -> str:
        commit = self.create_commit(message, [
            {"action": ACTION_UPDATE, "file_path": file_path, "content": content},
        ])
        return str(commit["id"])

    # ---- 提交 ----

    def create_commit(self, message: str, actions: list[dict[str, Any]]) -> dict[str, Any]:
        """在当前分支上创建提交"""
        commit = self._send_request(
            f"/projects/{self.project_id}/repository/commits", "POST", {
                "branch": self.branch,
                "commit_message": message,
                "actions": actions,
            },
        )
        if not isinstance(commit, dict) or "id" not in commit:
            raise ClientError("提交响应缺少 id")
        logger.info("已提交: %s (%s)", commit["id"], message)
        return commit

    def get_commit(self, commit_id: str) -> Commit:
        data = self._send_request(
            f"/projects/{self.project_id}/repository/commits/{commit_id}",
            "GET", {"ref_name": self.branch},
        )
        return Commit.from_dict(data)

    def find_last_commit_by_message(self, fragment: str) -> Commit | None:
        """按提交信息片段搜索，返回第一条命中"""
        commits = self._send_request(
            f"/projects/{self.project_id}/search", "GET",
            {"scope": "commits", "search": fragment},
        )
        if not commits:
            return None
        return Commit.from_dict(commits[0])

    # ---- 流水线 ----

    def get_commit_pipelines(self, commit_id: str) -> list[Pipeline]:
        data = self._send_request(
            f"/projects/{self.project_id}/pipelines", "GET", {"sha": commit_id},
        )
        return [Pipeline.from_dict(p) for p in data or []]

    def retry_pipeline(self, pipeline_id: int) -> int | None:
        """重试流水线（需要 Maintainer 及以上权限，否则返回 403）"""
        data = self._send_request(
            f"/projects/{self.project_id}/pipelines/{pipeline_id}/retry",
            "POST", {"ref": self.branch},
        )
        new_id = data.get("id") if isinstance(data, dict) else None
        return int(new_id) if new_id else None
