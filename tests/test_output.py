import io
import json

import pytest
from rich.console import Console

from iplens.enrichment import EnrichmentTables
from iplens.models import Details, LiteDetails, CoreDetails
from iplens.output import ConsoleOutput, JsonExporter, summarize

from .payloads import details_payload


@pytest.fixture(scope="module")
def tables():
    return EnrichmentTables.load()


@pytest.fixture
def google(tables):
    return tables.enrich(Details.from_dict(details_payload()))


@pytest.fixture
def buffer_output():
    buffer = io.StringIO()
    return ConsoleOutput(Console(file=buffer, width=120)), buffer


def test_summarize_standard(google):
    summary = summarize(google)
    assert summary == {
        "ip": "8.8.8.8",
        "location": "Mountain View, California",
        "country": "\U0001F1FA\U0001F1F8 United States",
        "network": "AS15169 Google LLC",
        "timezone": "America/Los_Angeles",
    }


def test_summarize_lite(tables, lite_payload):
    record = tables.enrich(LiteDetails.from_dict(lite_payload))
    summary = summarize(record)
    assert summary["location"] == "North America"
    assert summary["network"] == "AS15169, Google LLC"
    assert summary["timezone"] == "-"


def test_summarize_core(tables, core_payload):
    record = tables.enrich(CoreDetails.from_dict(core_payload))
    summary = summarize(record)
    assert summary["location"] == "Mountain View, California"
    assert summary["country"].endswith("United States")
    assert summary["timezone"] == "America/Los_Angeles"


def test_summarize_empty_record():
    summary = summarize(Details(ip="8.8.8.8"))
    assert summary["location"] == "-"
    assert summary["country"] == "-"


def test_print_details(buffer_output, google):
    output, buffer = buffer_output
    output.print_details(google)
    text = buffer.getvalue()
    assert "8.8.8.8" in text
    assert "Mountain View" in text
    assert "USD ($)" in text
    assert "dns.google" in text


def test_print_details_for_bogon(buffer_output):
    output, buffer = buffer_output
    output.print_details(Details(ip="10.0.0.1", bogon=True))
    assert "bogon" in buffer.getvalue()


def test_print_batch(buffer_output, google):
    output, buffer = buffer_output
    output.print_batch({"8.8.8.8": google, "127.0.0.1": Details(ip="127.0.0.1", bogon=True)})
    text = buffer.getvalue()
    assert "Mountain View" in text
    assert "127.0.0.1" in text
    assert "bogon" in text


def test_json_export(tmp_path, google):
    path = tmp_path / "out" / "results.json"

    data = JsonExporter().export({"8.8.8.8": google}, path)

    written = json.loads(path.read_text(encoding="utf-8"))
    assert written == data
    assert written["meta"]["data_source"] == "ipinfo.io"
    record = written["results"]["8.8.8.8"]
    assert record["country"] == "US"
    assert record["country_name"] == "United States"
    assert record["country_currency"] == {"code": "USD", "symbol": "$"}
    assert record["continent"] == {"code": "NA", "name": "North America"}


def test_json_export_without_file(google):
    data = JsonExporter(source="test").export({"8.8.8.8": google})
    assert data["meta"]["data_source"] == "test"
    assert list(data["results"]) == ["8.8.8.8"]


@pytest.mark.parametrize("text", ["[bold]8.8.8.8", "[/]", "1.2.3.4[/red]"])
def test_untrusted_text_is_printed_literally(buffer_output, text):
    output, buffer = buffer_output

    output.print_bogon(text, None)
    output.print_error(f"application error: {text}")
    output.print_map_url(f"https://ipinfo.io/tools/map/{text}")
    output.print_batch({text: Details(ip=text, city=text)})

    printed = buffer.getvalue()
    assert f"{text}: not a bogon" in printed
    assert f"application error: {text}" in printed
    assert f"https://ipinfo.io/tools/map/{text}" in printed
    assert printed.count(text) >= 5
