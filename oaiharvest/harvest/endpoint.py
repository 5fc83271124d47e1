from __future__ import annotations

from datetime import date, datetime
from typing import Dict, Iterator, Optional, Union

from oaiharvest.harvest.client import Client
from oaiharvest.model.granularity import DateGranularity
from oaiharvest.model.request_parameters import RequestParameters

DateArg = Optional[Union[str, date, datetime]]


class Endpoint:
    """Verb-level helpers for one repository URL.

    Listing verbs return the client's lazy record sequence; ``identify`` and
    ``get_record`` return the decoded document.
    """

    def __init__(self, url: str, client: Optional[Client] = None):
        self.url = url
        self.client = client or Client()
        self._granularity: Optional[DateGranularity] = None

    def _params(self, verb: str, **params: Optional[str]) -> RequestParameters:
        return RequestParameters(
            self.url, verb, {k: v for k, v in params.items() if v is not None}
        )

    def _date(self, value: DateArg) -> Optional[str]:
        if value is None or isinstance(value, str):
            return value
        return self.granularity().format_date(value)

    def granularity(self) -> DateGranularity:
        if self._granularity is None:
            self._granularity = self.client.get_date_granularity(self.url)
        return self._granularity

    def identify(self):
        return self.client.get_record(self._params("Identify"))

    def list_metadata_formats(self, identifier: Optional[str] = None) -> Iterator:
        return self.client.iterate_records(self._params("ListMetadataFormats", identifier=identifier))

    def list_sets(self) -> Iterator:
        return self.client.iterate_records(self._params("ListSets"))

    def get_record(self, identifier: str, metadata_prefix: str = "oai_dc"):
        return self.client.get_record(
            self._params("GetRecord", identifier=identifier, metadataPrefix=metadata_prefix)
        )

    def _listing(self, verb, metadata_prefix, from_, until, set_) -> RequestParameters:
        params: Dict[str, Optional[str]] = {
            "metadataPrefix": metadata_prefix,
            "from": self._date(from_),
            "until": self._date(until),
            "set": set_,
        }
        return self._params(verb, **params)

    def list_identifiers(
        self,
        metadata_prefix: str = "oai_dc",
        from_: DateArg = None,
        until: DateArg = None,
        set_: Optional[str] = None,
    ) -> Iterator:
        return self.client.iterate_records(
            self._listing("ListIdentifiers", metadata_prefix, from_, until, set_)
        )

    def list_records(
        self,
        metadata_prefix: str = "oai_dc",
        from_: DateArg = None,
        until: DateArg = None,
        set_: Optional[str] = None,
    ) -> Iterator:
        return self.client.iterate_records(
            self._listing("ListRecords", metadata_prefix, from_, until, set_)
        )
