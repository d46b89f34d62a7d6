"""提取数据模型单元测试"""

import dataclasses
from datetime import datetime

import pytest

from conftest import full_place_payload, place_url
from mapspider.common.exceptions import FieldPostProcessError
from mapspider.field.models import (
    ExtractedRecord,
    RawPlaceFields,
    build_record,
    normalize_phone,
    normalize_star_rating,
    utc_timestamp,
)


class TestStarRating:
    """评分后处理测试"""

    @pytest.mark.parametrize(
        "raw, expected",
        [
            ("4,6 Sterne ", "4,6"),
            ("4.5 stars", "4.5"),
            ("5 Sterne", "5"),
        ],
    )
    def test_strips_unit(self, raw, expected):
        assert normalize_star_rating(raw) == expected

    def test_without_number_drops_last_char(self):
        """没有数字前缀时去掉最后一个字符"""
        assert normalize_star_rating("abc ") == "abc"

    def test_missing_strict_raises(self):
        with pytest.raises(FieldPostProcessError) as exc_info:
            normalize_star_rating(None, strict=True, url="u")
        assert exc_info.value.field_name == "star_rating"
        assert exc_info.value.url == "u"

    def test_missing_lenient_is_none(self):
        assert normalize_star_rating(None, strict=False) is None


class TestPhone:
    """电话后处理测试"""

    def test_removes_icon_glyph(self):
        assert normalize_phone("\ue0b0+49 30 1234567") == "+49 30 1234567"

    def test_plain_phone_unchanged(self):
        assert normalize_phone(" 030 1234 ") == "030 1234"

    def test_missing_strict_raises(self):
        with pytest.raises(FieldPostProcessError):
            normalize_phone(None)

    def test_missing_lenient_is_none(self):
        assert normalize_phone(None, strict=False) is None


class TestRawPlaceFields:
    """原始字段解析测试"""

    def test_from_full_payload(self):
        raw = RawPlaceFields.from_dict(full_place_payload())
        assert raw.name == "Bäckerei Schmidt"
        assert raw.star_rating_label == "4,6 Sterne "
        assert raw.website == ("https://baeckerei-schmidt.de/",)

    def test_from_empty_payload(self):
        """脚本返回 None 时所有字段缺失"""
        raw = RawPlaceFields.from_dict(None)
        assert raw == RawPlaceFields()

    def test_blank_text_becomes_none(self):
        raw = RawPlaceFields.from_dict({"name": "   ", "address": "\n"})
        assert raw.name is None
        assert raw.address is None

    def test_multiple_websites_keep_order(self):
        raw = RawPlaceFields.from_dict({"website": ["https://a.de/", None, "", "tel:+4930"]})
        assert raw.website == ("https://a.de/", "tel:+4930")


class TestExtractedRecord:
    """记录构建测试"""

    def test_build_record_defaults(self):
        url = place_url("x")
        record = build_record(RawPlaceFields.from_dict(full_place_payload()), url)

        assert record.source_url == url
        assert record.email is None
        assert record.contacted is False
        assert record.star_rating == "4,6"
        assert record.phone == "+49 30 1234567"

    def test_record_is_immutable(self):
        record = ExtractedRecord(source_url=place_url("x"))
        with pytest.raises(dataclasses.FrozenInstanceError):
            record.name = "changed"

    def test_utc_timestamp_format(self):
        stamp = utc_timestamp()
        assert stamp.endswith("Z")
        # 毫秒精度
        assert len(stamp.split(".")[1]) == 4
        datetime.fromisoformat(stamp.replace("Z", "+00:00"))
