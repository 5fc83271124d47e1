"""Client for harvesting metadata over OAI-PMH."""

from oaiharvest.config import Settings, Source, __version__, get_source, load_sources
from oaiharvest.exceptions import (
    ConfigError,
    HttpAdapterError,
    MalformedResponseError,
    OaiHarvestError,
    OaipmhError,
    ResumptionTokenLoopError,
)
from oaiharvest.harvest import Client, Endpoint, harvest_records, normalize_record
from oaiharvest.http import HttpAdapter, RequestsAdapter
from oaiharvest.model import (
    AUTO_DETECT,
    DateGranularity,
    PaginationInfo,
    RecordPage,
    RequestParameters,
)
from oaiharvest.parse import decode_response

__all__ = [
    "AUTO_DETECT",
    "Client",
    "ConfigError",
    "DateGranularity",
    "Endpoint",
    "HttpAdapter",
    "HttpAdapterError",
    "MalformedResponseError",
    "OaiHarvestError",
    "OaipmhError",
    "PaginationInfo",
    "RecordPage",
    "RequestParameters",
    "RequestsAdapter",
    "ResumptionTokenLoopError",
    "Settings",
    "Source",
    "__version__",
    "decode_response",
    "get_source",
    "harvest_records",
    "load_sources",
    "normalize_record",
]
