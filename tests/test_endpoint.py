from datetime import date, datetime, timezone

from oaiharvest import Client, DateGranularity, Endpoint

from conftest import OAI_HEADER, identify_xml, list_records_xml

URL = "http://fake/oai"


def test_list_records_formats_dates_with_detected_granularity(scripted):
    adapter = scripted(
        identify_xml("YYYY-MM-DDThh:mm:ssZ"),
        identify_xml("YYYY-MM-DDThh:mm:ssZ"),
        list_records_xml(["a"]),
    )
    endpoint = Endpoint(URL, Client(adapter))

    records = list(
        endpoint.list_records(
            from_=datetime(2024, 1, 2, 3, 4, 5, tzinfo=timezone.utc), until="2024-02-01", set_="math"
        )
    )

    assert len(records) == 1
    assert adapter.calls[-1][1] == {
        "verb": "ListRecords",
        "metadataPrefix": "oai_dc",
        "from": "2024-01-02T03:04:05Z",
        "until": "2024-02-01",
        "set": "math",
    }


def test_granularity_is_cached_on_the_endpoint(scripted):
    adapter = scripted()
    endpoint = Endpoint(URL, Client(adapter, date_granularity=DateGranularity.DATE))
    assert endpoint.granularity() is DateGranularity.DATE
    assert adapter.calls == []


def test_list_identifiers_omits_unset_arguments(scripted):
    body = f"{OAI_HEADER}<ListIdentifiers><header><identifier>x</identifier></header></ListIdentifiers></OAI-PMH>"
    adapter = scripted(body)
    endpoint = Endpoint(URL, Client(adapter, date_granularity=DateGranularity.DATE))

    headers = list(endpoint.list_identifiers(metadata_prefix="mods", from_=date(2023, 12, 31)))

    assert len(headers) == 1
    assert adapter.calls[0][1] == {"verb": "ListIdentifiers", "metadataPrefix": "mods", "from": "2023-12-31"}


def test_single_shot_verbs(scripted):
    adapter = scripted(
        identify_xml("YYYY-MM-DD"),
        f"{OAI_HEADER}<GetRecord><record/></GetRecord></OAI-PMH>",
    )
    endpoint = Endpoint(URL, Client(adapter))

    assert endpoint.identify().findtext("{*}Identify/{*}repositoryName") == "Fake"
    endpoint.get_record("oai:x:1", metadata_prefix="oai_dc")

    assert adapter.calls[1][1] == {"verb": "GetRecord", "identifier": "oai:x:1", "metadataPrefix": "oai_dc"}


def test_sets_and_formats(scripted):
    adapter = scripted(
        f"{OAI_HEADER}<ListSets><set><setSpec>a</setSpec></set><set><setSpec>b</setSpec></set></ListSets></OAI-PMH>",
        f"{OAI_HEADER}<ListMetadataFormats><metadataFormat><metadataPrefix>oai_dc</metadataPrefix>"
        "</metadataFormat></ListMetadataFormats></OAI-PMH>",
    )
    endpoint = Endpoint(URL, Client(adapter, date_granularity=DateGranularity.DATE))

    assert [s.findtext("{*}setSpec") for s in endpoint.list_sets()] == ["a", "b"]
    formats = list(endpoint.list_metadata_formats(identifier="oai:x:1"))
    assert [f.findtext("{*}metadataPrefix") for f in formats] == ["oai_dc"]
    assert adapter.calls[1][1] == {"verb": "ListMetadataFormats", "identifier": "oai:x:1"}
