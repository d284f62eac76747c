"""域名列表文本操作

列表文件每行一个域名，比较时忽略首尾空白，重写时丢弃空行。
"""

from __future__ import annotations

from dataclasses import dataclass, field

from domainrepo.core.exceptions import AlreadyAddedError, NotExistsError, ValidationError


@dataclass
class DomainList:
    """解析后的域名列表"""

    lines: list[str] = field(default_factory=list)
    trailing_newline: bool = False
    # 沿用原文件的换行符
    separator: str = "\n"

    @classmethod
    def parse(cls, content: str) -> DomainList:
        lines = [line.strip() for line in content.split("\n")]
        return cls(
            lines=[line for line in lines if line],
            trailing_newline=content.endswith("\n"),
            separator="\r\n" if "\r\n" in content else "\n",
        )

    def render(self) -> str:
        text = self.separator.join(self.lines)
        if self.trailing_newline and self.lines:
            text += self.separator
        return text

    def __contains__(self, domain: object) -> bool:
        return isinstance(domain, str) and domain.strip() in self.lines

    def add(self, domain: str) -> None:
        name = normalize_domain(domain)
        if name in self.lines:
            raise AlreadyAddedError()
        self.lines.append(name)

    def remove(self, domain: str) -> None:
        name = normalize_domain(domain)
        if name not in self.lines:
            raise NotExistsError()
        self.lines = [line for line in self.lines if line != name]


def normalize_domain(domain: str) -> str:
    name = domain.strip()
    if not name or "\n" in name:
        raise ValidationError(f"非法域名: {domain!r}")
    return name
