"""详情页提取数据模型定义"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any

from ..common.constants import PHONE_ICON_GLYPH
from ..common.exceptions import FieldPostProcessError

_RATING_NUMBER_RE = re.compile(r"^\s*(\d+(?:[.,]\d+)?)")


def utc_timestamp() -> str:
    """ISO-8601 UTC 时间戳（毫秒精度，Z 结尾）"""
    return (
        datetime.now(timezone.utc)
        .isoformat(timespec="milliseconds")
        .replace("+00:00", "Z")
    )


@dataclass(frozen=True)
class RawPlaceFields:
    """页面脚本返回的原始字段

    每个字段独立读取，选择器不存在时为 None。
    """

    name: str | None = None
    category: str | None = None
    star_rating_label: str | None = None
    address: str | None = None
    phone: str | None = None
    website: tuple[str, ...] = ()

    @classmethod
    def from_dict(cls, data: dict[str, Any] | None) -> "RawPlaceFields":
        data = data or {}
        websites = data.get("website") or []
        return cls(
            name=_clean_text(data.get("name")),
            category=_clean_text(data.get("category")),
            star_rating_label=data.get("starRatingLabel"),
            address=_clean_text(data.get("address")),
            phone=data.get("phone"),
            website=tuple(str(w) for w in websites if w),
        )


@dataclass(frozen=True)
class ExtractedRecord:
    """一条商家记录

    所有字段均可缺失（None）。email 与 contacted 为预留字段，提取阶段不填充。
    """

    source_url: str  # 来源详情页 URL
    name: str | None = None  # 名称
    category: str | None = None  # 类型
    star_rating: str | None = None  # 评分（已去掉单位）
    address: str | None = None  # 地址
    phone: str | None = None  # 电话
    website: tuple[str, ...] = field(default_factory=tuple)  # 网站链接（按页面顺序）
    scraped_at: str = field(default_factory=utc_timestamp)  # 提取时间
    email: str | None = None  # 预留
    contacted: bool = False  # 预留，供后续人工标记


def _clean_text(value: Any) -> str | None:
    if value is None:
        return None
    text = str(value).strip()
    return text or None


def normalize_star_rating(raw: str | None, strict: bool = True, url: str = "") -> str | None:
    """去掉评分 aria-label 末尾的单位

    "4,5 Sterne " -> "4,5"，"4.5 stars" -> "4.5"。没有数字前缀时去掉最后一个字符。

    Raises:
        FieldPostProcessError: strict 模式下原始值缺失
    """
    if raw is None:
        if strict:
            raise FieldPostProcessError("star_rating", url)
        return None

    match = _RATING_NUMBER_RE.match(raw)
    if match:
        return match.group(1)
    return raw[:-1].strip() or None


def normalize_phone(raw: str | None, strict: bool = True, url: str = "") -> str | None:
    """去掉电话行前的图标字符

    Raises:
        FieldPostProcessError: strict 模式下原始值缺失
    """
    if raw is None:
        if strict:
            raise FieldPostProcessError("phone", url)
        return None
    return raw.replace(PHONE_ICON_GLYPH, "").strip() or None


def build_record(raw: RawPlaceFields, url: str, strict: bool = True) -> ExtractedRecord:
    """由原始字段构建记录，评分和电话经过后处理"""
    return ExtractedRecord(
        source_url=url,
        name=raw.name,
        category=raw.category,
        star_rating=normalize_star_rating(raw.star_rating_label, strict=strict, url=url),
        address=raw.address,
        phone=normalize_phone(raw.phone, strict=strict, url=url),
        website=raw.website,
    )
