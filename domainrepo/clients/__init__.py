"""仓库客户端

- gitlab.py: GitLab REST API 实现
- factory.py: 按平台名称选择实现
"""

from domainrepo.clients.factory import ClientFactory
from domainrepo.clients.gitlab import GitlabClient

__all__ = [
    "ClientFactory",
    "GitlabClient",
]
