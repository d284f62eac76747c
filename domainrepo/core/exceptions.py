"""统一异常体系

所有业务异常继承 DomainRepoError，替代散落的 ValueError / RuntimeError。
CLI 层可据此输出友好提示。
"""

from __future__ import annotations


class DomainRepoError(Exception):
    """基础异常"""

    code: str = "UNKNOWN"
    default_message: str = ""

    def __init__(self, message: str = "") -> None:
        super().__init__(message or self.default_message)


class ConfigError(DomainRepoError):
    """配置文件缺失或内容无效"""

    code = "CONFIG_ERROR"


class ValidationError(DomainRepoError):
    """输入数据校验失败"""

    code = "VALIDATION_ERROR"


class ClientError(DomainRepoError):
    """仓库客户端请求失败（网络异常、非预期响应）"""

    code = "CLIENT_ERROR"
    default_message = "Domain client exception"

    def __init__(self, message: str = "", status: int | None = None) -> None:
        super().__init__(message)
        # HTTP 状态码，网络异常时为 None
        self.status = status


class NotFoundError(DomainRepoError):
    """远端资源不存在（HTTP 404）"""

    code = "NOT_FOUND"


class AlreadyAddedError(DomainRepoError):
    """域名已在列表中"""

    code = "ALREADY_ADDED"
    default_message = "Domain already added"


class NotExistsError(DomainRepoError):
    """域名不在列表中"""

    code = "NOT_EXISTS"
    default_message = "Domain not exists in file"
