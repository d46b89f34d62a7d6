"""结果汇总"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterator

from ..common.exceptions import AggregatorSealedError
from .models import ExtractedRecord


@dataclass(frozen=True)
class SkippedLink:
    """被跳过的链接及原因"""

    url: str
    error: str


class ResultAggregator:
    """按提取顺序保存成功的记录

    集合是稠密的：被跳过的链接不留空位。seal() 之后不允许再追加。
    """

    def __init__(self) -> None:
        self._records: list[ExtractedRecord] = []
        self._skipped: list[SkippedLink] = []
        self._sealed = False

    def add(self, record: ExtractedRecord) -> None:
        if self._sealed:
            raise AggregatorSealedError("Result collection has already been exported")
        self._records.append(record)

    def skip(self, url: str, error: BaseException | str) -> None:
        """记录一个被跳过的链接"""
        if self._sealed:
            raise AggregatorSealedError("Result collection has already been exported")
        message = error if isinstance(error, str) else f"{type(error).__name__}: {error}"
        self._skipped.append(SkippedLink(url=url, error=message))

    def seal(self) -> tuple[ExtractedRecord, ...]:
        """封存集合并返回只读快照"""
        self._sealed = True
        return self.snapshot()

    def snapshot(self) -> tuple[ExtractedRecord, ...]:
        return tuple(self._records)

    @property
    def sealed(self) -> bool:
        return self._sealed

    @property
    def skipped(self) -> tuple[SkippedLink, ...]:
        return tuple(self._skipped)

    def __len__(self) -> int:
        return len(self._records)

    def __iter__(self) -> Iterator[ExtractedRecord]:
        return iter(self.snapshot())
