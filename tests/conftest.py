"""共享 fixture — 内存版仓库客户端"""

from __future__ import annotations

from typing import Any

import pytest

from domainrepo.core.exceptions import NotFoundError
from domainrepo.core.models import Commit, Pipeline


class FakeClient:
    """内存版仓库客户端"""

    def __init__(self) -> None:
        self.files: dict[str, str] = {}
        self.commits: dict[str, Commit] = {}
        self.pipelines: dict[str, list[Pipeline]] = {}
        self.retried: list[int] = []
        self.retry_result: int | None = 100
        self.calls: list[tuple[str, Any]] = []
        self._seq = 0

    def _next_id(self) -> str:
        self._seq += 1
        return f"c{self._seq}"

    def get_file_content(self, file_path: str) -> str | None:
        return self.files.get(file_path)

    def create_file(self, file_path: str, content: str, message: str = "file created") -> str:
        self.calls.append(("create", file_path))
        self.files[file_path] = content
        return self._next_id()

    def update_file_content(self, file_path: str, content: str, message: str) -> str:
        self.calls.append(("update", file_path))
        self.files[file_path] = content
        return self._next_id()

    def create_commit(self, message: str, actions: list[dict[str, Any]]) -> dict[str, Any]:
        return {"id": self._next_id()}

    def get_commit(self, commit_id: str) -> Commit:
        if commit_id not in self.commits:
            raise NotFoundError()
        return self.commits[commit_id]

    def get_commit_pipelines(self, commit_id: str) -> list[Pipeline]:
        return self.pipelines.get(commit_id, [])

    def retry_pipeline(self, pipeline_id: int) -> int | None:
        self.retried.append(pipeline_id)
        return self.retry_result

    def find_last_commit_by_message(self, fragment: str) -> Commit | None:
        for c in self.commits.values():
            if fragment in c.message:
                return c
        return None


@pytest.fixture()
def fake_client() -> FakeClient:
    return FakeClient()
