from __future__ import annotations

import logging
from itertools import islice
from typing import Any, Dict, List, Optional

from oaiharvest.harvest.client import Client
from oaiharvest.model.request_parameters import RequestParameters

logger = logging.getLogger(__name__)

NAMESPACES = {
    "oai": "http://www.openarchives.org/OAI/2.0/",
    "dc": "http://purl.org/dc/elements/1.1/",
    "oai_dc": "http://www.openarchives.org/OAI/2.0/oai_dc/",
    "d": "http://datacite.org/schema/kernel-4",
}


def _text(el):
    return (el.text or "").strip()


def _first(xpath, root, ns=None):
    res = root.xpath(xpath, namespaces=ns or {})
    return res[0] if res else None


def normalize_record(record) -> Dict[str, Any]:
    """Flatten one ``<record>`` element into a plain dict.

    DataCite (Zenodo's ``oai_datacite``) is read first; any field it lacks
    falls back to Dublin Core.
    """
    ns = NAMESPACES

    # XPath relative to the record so sibling records never leak in.
    oai_id_el = _first(".//oai:header/oai:identifier", record, ns)
    if oai_id_el is None:
        oai_id_el = _first(".//*[local-name()='header']/*[local-name()='identifier']", record)
    oai_id = _text(oai_id_el) if oai_id_el is not None else None

    title_el = _first(".//d:title", record, ns)
    creators_els = record.xpath(".//d:creator/d:creatorName", namespaces=ns)
    subjects_els = record.xpath(".//d:subject", namespaces=ns)
    desc_el = _first(".//d:description", record, ns)
    date_el = _first(".//d:publicationYear", record, ns)
    url_el = _first(".//d:identifier[@identifierType='URL']", record, ns)
    doi_el = _first(".//d:identifier[@identifierType='DOI']", record, ns)

    if title_el is None:
        title_el = _first(".//dc:title", record, ns)
    if not creators_els:
        creators_els = record.xpath(".//dc:creator", namespaces=ns)
    if not subjects_els:
        subjects_els = record.xpath(".//dc:subject", namespaces=ns)
    if desc_el is None:
        desc_el = _first(".//dc:description", record, ns)
    if date_el is None:
        date_el = _first(".//dc:date", record, ns)
    if url_el is None:
        # dc:identifier may contain URL
        ids = [(_text(x) or "") for x in record.xpath(".//dc:identifier", namespaces=ns)]
        url = next((x for x in ids if x.startswith("http")), None)
    else:
        url = _text(url_el)
    doi = _text(doi_el) if doi_el is not None else None

    return {
        "oai_identifier": oai_id,
        "id": doi or oai_id,
        "title": _text(title_el) if title_el is not None else None,
        "creators": "; ".join(_text(x) for x in creators_els if _text(x)),
        "subjects": "; ".join(_text(x) for x in subjects_els if _text(x)),
        "description": _text(desc_el) if desc_el is not None else None,
        "date": _text(date_el) if date_el is not None else None,
        "url": url,
    }


def harvest_records(
    client: Client,
    request_parameters: RequestParameters,
    limit: Optional[int] = 100,
) -> List[Dict[str, Any]]:
    """Harvest a listing and return normalized dicts, at most ``limit`` of them.

    Pages past the one that reaches ``limit`` are never requested.
    """
    out: List[Dict[str, Any]] = []
    for record in islice(client.iterate_records(request_parameters), limit):
        out.append(normalize_record(record))

    logger.info(
        "Harvested %s record(s)", len(out),
        extra={"endpoint": request_parameters.endpoint_url, "verb": request_parameters.verb},
    )
    return out
