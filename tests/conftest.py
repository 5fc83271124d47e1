import sys
from pathlib import Path

import pytest

# Ensure `oaiharvest` is importable when running tests from repo root
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

OAI_HEADER = '<OAI-PMH xmlns="http://www.openarchives.org/OAI/2.0/"><responseDate>2024-01-01T00:00:00Z</responseDate>'


def identify_xml(granularity=None):
    gran = f"<granularity>{granularity}</granularity>" if granularity else ""
    return (
        f"{OAI_HEADER}<request verb=\"Identify\">http://fake/oai</request>"
        f"<Identify><repositoryName>Fake</repositoryName>{gran}</Identify></OAI-PMH>"
    )


def list_records_xml(identifiers, token=None, **token_attrs):
    records = "".join(
        f"<record><header><identifier>{i}</identifier><datestamp>2024-01-01</datestamp></header></record>"
        for i in identifiers
    )
    token_el = ""
    if token is not None:
        attrs = "".join(f' {k}="{v}"' for k, v in token_attrs.items())
        token_el = f"<resumptionToken{attrs}>{token}</resumptionToken>"
    return f"{OAI_HEADER}<ListRecords>{records}{token_el}</ListRecords></OAI-PMH>"


class ScriptedAdapter:
    """Plays back canned bodies in order and remembers every request."""

    def __init__(self, *bodies):
        self.bodies = list(bodies)
        self.calls = []

    def request(self, url, params):
        self.calls.append((url, dict(params)))
        if not self.bodies:
            raise AssertionError(f"unexpected request to {url} with {params}")
        body = self.bodies.pop(0)
        if isinstance(body, Exception):
            raise body
        return body


@pytest.fixture
def scripted():
    return ScriptedAdapter
