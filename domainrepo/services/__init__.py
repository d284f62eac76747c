"""服务层

- domain_list.py: 域名列表文本操作
- domain_repository_service.py: 域名增删提交 + 流水线状态
- container.py: 服务容器
"""

from domainrepo.services.domain_list import DomainList
from domainrepo.services.domain_repository_service import (
    CHECK_PIPELINE_DELAY,
    DomainRepositoryService,
)

__all__ = [
    "CHECK_PIPELINE_DELAY",
    "DomainList",
    "DomainRepositoryService",
]
