from __future__ import annotations

import logging
from typing import Dict, Iterator, Optional

from oaiharvest.exceptions import ResumptionTokenLoopError
from oaiharvest.http.adapter import HttpAdapter, RequestsAdapter
from oaiharvest.model.granularity import AUTO_DETECT, DateGranularity, GranularitySetting
from oaiharvest.model.record_page import RecordPage
from oaiharvest.model.request_parameters import RequestParameters
from oaiharvest.parse.response import decode_response, extract_granularity

logger = logging.getLogger(__name__)

RESUMPTION_TOKEN = "resumptionToken"


class Client:
    """Issues OAI-PMH requests and turns paged listings into lazy sequences.

    Errors are never retried here: MalformedResponseError and OaipmhError
    come from decoding, and whatever the HTTP adapter raises propagates as is.
    """

    def __init__(
        self,
        http_client: Optional[HttpAdapter] = None,
        date_granularity: GranularitySetting = AUTO_DETECT,
    ):
        self.http_client = http_client if http_client is not None else RequestsAdapter.from_settings()
        self.date_granularity = date_granularity

    def get_record(self, request_parameters: RequestParameters):
        """Single-shot call (Identify, GetRecord, ...) returning the decoded document."""
        return self._request(request_parameters)

    def get_date_granularity(
        self, endpoint_url: str, extra_params: Optional[Dict[str, str]] = None
    ) -> DateGranularity:
        """Configured granularity, or a fresh Identify lookup when auto-detecting."""
        if isinstance(self.date_granularity, DateGranularity):
            return self.date_granularity

        root = self._request(RequestParameters(endpoint_url, "Identify", extra_params or {}))
        text = extract_granularity(root)
        granularity = DateGranularity.from_string(text) if text else DateGranularity.DATE
        logger.info(
            "Detected date granularity %s", granularity.value,
            extra={"endpoint": endpoint_url, "advertised": text},
        )
        return granularity

    def iterate_pages(self, request_parameters: RequestParameters) -> Iterator[RecordPage]:
        granularity = self.get_date_granularity(request_parameters.endpoint_url)

        params = request_parameters
        done = False
        while not done:
            root = self._request(params)
            page = RecordPage.build_from_raw_xml(root, params, granularity)
            info = page.pagination_info

            logger.debug(
                "Fetched %s page with %s item(s)", params.verb, len(page.records),
                extra={"resumption_token": info.resumption_token, "cursor": info.cursor},
            )

            if info.has_resumption_token:
                if info.resumption_token == params.get(RESUMPTION_TOKEN):
                    # Hand over what the page holds, then stop on the next pull.
                    yield page
                    raise ResumptionTokenLoopError(info.resumption_token)
                params = params.with_param(RESUMPTION_TOKEN, info.resumption_token)
            else:
                done = True

            yield page

    def iterate_records(self, request_parameters: RequestParameters) -> Iterator:
        for page in self.iterate_pages(request_parameters):
            yield from page.records

    def get_num_total_records(self, request_parameters: RequestParameters) -> Optional[int]:
        """``completeListSize`` of the first page; None when the server does not say."""
        first_page = next(iter(self.iterate_pages(request_parameters)))
        return first_page.pagination_info.complete_list_size

    def decode_response(self, body):
        return decode_response(body)

    def _request(self, request_parameters: RequestParameters):
        logger.debug(
            "OAI-PMH request", extra={"endpoint": request_parameters.endpoint_url, "verb": request_parameters.verb},
        )
        body = self.http_client.request(request_parameters.endpoint_url, request_parameters.query_params())
        return self.decode_response(body)
