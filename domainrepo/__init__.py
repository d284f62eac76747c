"""domainrepo - 基于 Git 托管平台的域名白/黑名单维护工具"""

__version__ = "0.1.0"
