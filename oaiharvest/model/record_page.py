from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import datetime
from typing import Optional, Tuple

from lxml import etree

from oaiharvest.model.granularity import DateGranularity
from oaiharvest.model.request_parameters import RequestParameters
from oaiharvest.parse.response import child_text, find_child

logger = logging.getLogger(__name__)

# verb -> element holding one item inside the verb's container
RECORD_ELEMENTS = {
    "GetRecord": "record",
    "ListRecords": "record",
    "ListIdentifiers": "header",
    "ListSets": "set",
    "ListMetadataFormats": "metadataFormat",
}


def _optional_int(value: Optional[str], name: str) -> Optional[int]:
    if value is None or not value.strip():
        return None
    try:
        return int(value)
    except ValueError:
        logger.warning("Ignoring non-numeric %s=%r on resumptionToken", name, value)
        return None


def _optional_utc(value: Optional[str]) -> Optional[datetime]:
    if not value:
        return None
    try:
        return DateGranularity.DATE_TIME.parse_datestamp(value)
    except ValueError:
        logger.warning("Ignoring unparseable expirationDate=%r", value)
        return None


@dataclass(frozen=True)
class PaginationInfo:
    resumption_token: Optional[str] = None
    cursor: Optional[int] = None
    complete_list_size: Optional[int] = None
    expiration_date: Optional[datetime] = None

    @property
    def has_resumption_token(self) -> bool:
        # An empty <resumptionToken/> is how many servers mark the last page.
        return bool(self.resumption_token)

    @classmethod
    def from_element(cls, token_el) -> "PaginationInfo":
        if token_el is None:
            return cls()
        return cls(
            resumption_token=(token_el.text or "").strip(),
            cursor=_optional_int(token_el.get("cursor"), "cursor"),
            complete_list_size=_optional_int(token_el.get("completeListSize"), "completeListSize"),
            expiration_date=_optional_utc(token_el.get("expirationDate")),
        )


@dataclass(frozen=True)
class RecordPage:
    """One decoded response page: its items plus what is needed to fetch the next one."""

    records: Tuple = ()
    pagination_info: PaginationInfo = field(default_factory=PaginationInfo)
    request_parameters: Optional[RequestParameters] = None
    granularity: Optional[DateGranularity] = None
    response_date: Optional[datetime] = None

    def __iter__(self):
        return iter(self.records)

    def __len__(self) -> int:
        return len(self.records)

    @classmethod
    def build_from_raw_xml(
        cls,
        root,
        request_parameters: RequestParameters,
        granularity: Optional[DateGranularity] = None,
    ) -> "RecordPage":
        verb = request_parameters.verb
        container = find_child(root, verb)

        records: Tuple = ()
        token_el = None
        if container is not None:
            token_el = find_child(container, "resumptionToken")
            item_name = RECORD_ELEMENTS.get(verb)
            if item_name is not None:
                records = tuple(container.iterfind("{*}" + item_name))
            else:
                records = tuple(
                    el for el in container
                    if isinstance(el.tag, str) and etree.QName(el).localname != "resumptionToken"
                )

        return cls(
            records=records,
            pagination_info=PaginationInfo.from_element(token_el),
            request_parameters=request_parameters,
            granularity=granularity,
            response_date=_optional_utc(child_text(root, "responseDate")),
        )

    def datestamp(self, text: str) -> datetime:
        """Interpret a header datestamp from this page at the server's resolution."""
        granularity = self.granularity or DateGranularity.DATE
        return granularity.parse_datestamp(text)
