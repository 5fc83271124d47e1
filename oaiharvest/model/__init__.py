from .granularity import AUTO_DETECT, AutoDetect, DateGranularity, GranularitySetting
from .record_page import PaginationInfo, RecordPage
from .request_parameters import RequestParameters

__all__ = [
    "AUTO_DETECT",
    "AutoDetect",
    "DateGranularity",
    "GranularitySetting",
    "PaginationInfo",
    "RecordPage",
    "RequestParameters",
]
