"""Unit tests for the managed-region locator."""
from __future__ import annotations

import pytest

from hostman.exceptions import RegionError
from hostman.parsing import parse_document
from hostman.region import ManagedRegion, locate_region

pytestmark = pytest.mark.unit


def test_region_between_sentinels():
    document = parse_document(
        "127.0.0.1\tlocalhost\n"
        "# hostman:start\n"
        "1.1.1.1\told\n"
        "2.2.2.2\tolder\n"
        "# hostman:end\n"
    )
    region = locate_region(document)
    assert region == ManagedRegion(2, 4)
    assert len(region) == 2
    assert 2 in region and 3 in region and 4 not in region


def test_empty_region():
    region = locate_region(parse_document("# hostman:start\n# hostman:end\n"))
    assert region == ManagedRegion(1, 1)
    assert len(region) == 0


@pytest.mark.parametrize(
    "text",
    [
        "",
        "10.0.0.1\tfoo\n",
        "# hostman:start\n10.0.0.1\tfoo\n",
        "10.0.0.1\tfoo\n# hostman:end\n",
    ],
)
def test_missing_sentinel_means_no_region(text):
    assert locate_region(parse_document(text)) is None


def test_markers_must_match_exactly():
    document = parse_document("#hostman:start\n# hostman:end\n")
    assert locate_region(document) is None
    document = parse_document("# hostman:start \n# hostman:end\n")
    assert locate_region(document) is None


def test_first_occurrence_of_each_marker_wins():
    document = parse_document(
        "# hostman:start\n"
        "1.1.1.1\ta\n"
        "# hostman:end\n"
        "# hostman:start\n"
        "2.2.2.2\tb\n"
        "# hostman:end\n"
    )
    assert locate_region(document) == ManagedRegion(1, 2)


def test_end_before_start_is_rejected():
    document = parse_document("# hostman:end\n1.1.1.1\ta\n# hostman:start\n")
    with pytest.raises(RegionError) as exc_info:
        locate_region(document)
    assert exc_info.value.details == {"start_line": 3, "end_line": 1}
