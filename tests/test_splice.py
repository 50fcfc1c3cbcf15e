import pytest

from index_engine.errors import PlaceholderNotFoundError
from index_engine.splice import insert_index, remove_soft_page_breaks


def test_sentinel_paragraph_is_replaced_whole():
    body = (
        '<office:text><text:p text:style-name="P1">Intro</text:p>'
        '<text:p text:style-name="P2">[INDEX_HERE]</text:p>'
        "<text:p>End</text:p></office:text>"
    )
    assert insert_index(body, "IDX") == (
        '<office:text><text:p text:style-name="P1">Intro</text:p>IDX<text:p>End</text:p></office:text>'
    )


def test_sentinel_inside_span():
    body = '<text:p text:style-name="P2"><text:span text:style-name="T1">[INDEX_HERE]</text:span></text:p>tail'
    assert insert_index(body, "IDX") == "IDXtail"


def test_page_number_field_is_not_taken_for_a_paragraph():
    body = '<text:p text:style-name="P2">see <text:page-number>3</text:page-number>[INDEX_HERE]</text:p>'
    assert insert_index(body, "IDX") == "IDX"


def test_custom_sentinel():
    assert insert_index("<text:p>{{index}}</text:p>", "IDX", sentinel="{{index}}") == "IDX"


def test_missing_sentinel():
    with pytest.raises(PlaceholderNotFoundError) as exc:
        insert_index("<text:p>no index here</text:p>", "IDX")
    assert exc.value.offset is None


def test_sentinel_outside_a_paragraph():
    with pytest.raises(PlaceholderNotFoundError) as exc:
        insert_index("foo [INDEX_HERE] bar", "IDX")
    assert exc.value.offset == 4


def test_remove_soft_page_breaks():
    body = "<text:p>a</text:p><text:soft-page-break/><text:p>b<text:soft-page-break/></text:p>"
    assert remove_soft_page_breaks(body) == "<text:p>a</text:p><text:p>b</text:p>"
