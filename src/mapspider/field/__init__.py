"""详情页提取模块"""

from .aggregator import ResultAggregator, SkippedLink
from .models import (
    ExtractedRecord,
    RawPlaceFields,
    build_record,
    normalize_phone,
    normalize_star_rating,
)
from .place_extractor import PlaceExtractor

__all__ = [
    "ExtractedRecord",
    "PlaceExtractor",
    "RawPlaceFields",
    "ResultAggregator",
    "SkippedLink",
    "build_record",
    "normalize_phone",
    "normalize_star_rating",
]
