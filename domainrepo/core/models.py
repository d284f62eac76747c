"""核心数据模型

域名、提交、流水线等实体集中定义，客户端与服务层统一从此处导入。
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any

PIPELINE_SUCCESS = "success"


class DomainListAction(str, Enum):
    """域名列表变更动作"""

    ADD = "add"
    REMOVE = "remove"


@dataclass
class Domain:
    """待维护的域名

    列表文件按 SSL 服务器 + 域名类型区分，
    命名规则: {server}.{type}-domains.txt
    """

    name: str
    server: str
    type: str

    @property
    def list_file_path(self) -> str:
        return f"{self.server}.{self.type}-domains.txt"


@dataclass
class Pipeline:
    """CI 流水线"""

    id: int
    status: str = ""
    sha: str = ""
    ref: str = ""
    web_url: str = ""

    @property
    def success(self) -> bool:
        return self.status == PIPELINE_SUCCESS

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Pipeline:
        return cls(
            id=int(data.get("id", 0)),
            status=data.get("status") or "",
            sha=data.get("sha") or "",
            ref=data.get("ref") or "",
            web_url=data.get("web_url") or "",
        )


@dataclass
class Commit:
    """仓库提交，id 作为查询流水线的句柄"""

    id: str
    short_id: str = ""
    title: str = ""
    message: str = ""
    last_pipeline: Pipeline | None = None

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Commit:
        pipeline = data.get("last_pipeline")
        return cls(
            id=str(data.get("id", "")),
            short_id=data.get("short_id") or "",
            title=data.get("title") or "",
            message=data.get("message") or "",
            last_pipeline=Pipeline.from_dict(pipeline) if pipeline else None,
        )
