"""Unit tests for rendering tables back into hosts files."""
from __future__ import annotations

import pytest

from hostman.parsing import parse_document
from hostman.region import locate_region
from hostman.render import render_block, render_document
from hostman.table import Table, extract_table

pytestmark = pytest.mark.unit


def _render(text: str, table: Table) -> str:
    document = parse_document(text)
    return render_document(document, locate_region(document), table)


def test_block_formatting():
    table = Table({"web": "172.20.0.11", "db": "172.20.0.12", "api": "172.20.0.10"})
    assert render_block(table) == (
        "# hostman:start\n"
        "172.20.0.10\tapi\n"
        "172.20.0.12\tdb\n"
        "172.20.0.11\tweb\n"
        "# hostman:end\n"
    )


def test_first_sync_appends_block():
    rendered = _render("10.0.0.1\tfoo\n", Table({"box1": "192.168.1.5"}))
    assert rendered == "10.0.0.1\tfoo\n# hostman:start\n192.168.1.5\tbox1\n# hostman:end\n"


def test_append_to_empty_file():
    assert _render("", Table()) == "# hostman:start\n# hostman:end\n"


def test_existing_block_is_replaced():
    text = (
        "127.0.0.1   localhost\n"
        "# keep me\n"
        "# hostman:start\n"
        "1.1.1.1\told\n"
        "# hostman:end\n"
        "10.0.0.1  foo   bar\n"
    )
    rendered = _render(text, Table({"new": "2.2.2.2"}))
    assert rendered == (
        "127.0.0.1   localhost\n"
        "# keep me\n"
        "# hostman:start\n"
        "2.2.2.2\tnew\n"
        "# hostman:end\n"
        "10.0.0.1  foo   bar\n"
    )


def test_empty_table_empties_block():
    rendered = _render("# hostman:start\n1.1.1.1\told\n# hostman:end\n", Table())
    assert rendered == "# hostman:start\n# hostman:end\n"


def test_missing_final_newline_is_added():
    rendered = _render("# hostman:start\n# hostman:end", Table({"a": "1.1.1.1"}))
    assert rendered == "# hostman:start\n1.1.1.1\ta\n# hostman:end\n"


def test_crlf_lines_lose_carriage_return():
    rendered = _render("# hi\r\n# hostman:start\r\n# hostman:end\r\n", Table())
    assert rendered == "# hi\n# hostman:start\n# hostman:end\n"


def test_round_trip_of_canonical_file():
    text = (
        "127.0.0.1\tlocalhost\n"
        "#   odd   spacing kept  \n"
        "::1  localhost   ip6-localhost\n"
        "# hostman:start\n"
        "1.1.1.1\ta\n"
        "2.2.2.2\tb\n"
        "# hostman:end\n"
        "10.0.0.1 tail\n"
    )
    document = parse_document(text)
    region = locate_region(document)
    assert render_document(document, region, extract_table(document, region)) == text


def test_applying_a_table_twice_is_stable():
    table = Table({"h2": "5.6.7.8", "h1": "1.2.3.4"})
    once = _render("10.0.0.1\tfoo\n", table)
    twice = _render(once, table)
    assert once == twice

    document = parse_document(twice)
    assert extract_table(document, locate_region(document)) == table
