from __future__ import annotations

import logging
from typing import Optional, Tuple, Union

from lxml import etree

from oaiharvest.exceptions import MalformedResponseError, OaipmhError

logger = logging.getLogger(__name__)

OAI_NAMESPACE = "http://www.openarchives.org/OAI/2.0/"

# Entity expansion and network lookups stay off for remote payloads.
_PARSER = etree.XMLParser(resolve_entities=False, no_network=True)
# Text bodies were already decoded by the transport; ignore the declared encoding.
_TEXT_PARSER = etree.XMLParser(resolve_entities=False, no_network=True, encoding="utf-8")


def _text(el) -> str:
    return (el.text or "").strip()


def find_child(parent, name: str):
    """First direct child called ``name``, in the OAI namespace or none at all."""
    if parent is None:
        return None
    return parent.find("{*}" + name)


def child_text(parent, name: str) -> Optional[str]:
    el = find_child(parent, name)
    return _text(el) if el is not None else None


def extract_error(root) -> Optional[Tuple[str, str]]:
    """``(code, message)`` of a top-level ``<error>`` element, if any."""
    error_el = find_child(root, "error")
    if error_el is None:
        return None
    return error_el.get("code", ""), "".join(error_el.itertext()).strip()


def extract_granularity(root) -> Optional[str]:
    """Text of ``Identify/granularity``; None when the server leaves it out."""
    value = child_text(find_child(root, "Identify"), "granularity")
    return value or None


def decode_response(body: Union[str, bytes]):
    """Parse an OAI-PMH response body into an lxml root element.

    Raises MalformedResponseError when ``body`` is not XML and OaipmhError
    when the document carries a protocol ``<error>``.
    """
    if isinstance(body, str):
        raw, parser = body.encode("utf-8"), _TEXT_PARSER
    else:
        raw, parser = body, _PARSER
    try:
        root = etree.fromstring(raw, parser=parser)
    except (etree.XMLSyntaxError, ValueError) as exc:
        logger.warning("Undecodable OAI-PMH response", extra={"error": str(exc)})
        raise MalformedResponseError(f"Could not decode XML Response: {exc}") from exc
    if root is None:
        raise MalformedResponseError("Could not decode XML Response: empty document")

    error = extract_error(root)
    if error is not None:
        code, message = error
        logger.warning("OAI-PMH error %s: %s", code, message)
        raise OaipmhError(code, message)

    return root
