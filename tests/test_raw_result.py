import pytest
from multidict import CIMultiDict

from httpdispatch.core.models.raw_result import RawResult


def test_plain_header_dict_is_looked_up_case_insensitively():
    raw = RawResult(status=200, headers={"Content-Type": "application/json"})
    assert raw.header("content-type") == "application/json"
    assert raw.header("accept") is None
    assert raw.header_values("accept") == []


def test_repeated_headers_are_kept():
    raw = RawResult(
        status=200,
        headers=CIMultiDict([("Set-Cookie", "a=1"), ("set-cookie", "b=2")]),
    )
    assert raw.header_values("Set-Cookie") == ["a=1", "b=2"]
    assert len(raw.headers) == 2


def test_headers_are_read_only():
    source = {"Retry-After": "30"}
    raw = RawResult(status=429, headers=source)
    with pytest.raises(TypeError):
        raw.headers["Retry-After"] = "60"
    # later changes to the source mapping do not leak in
    source["Retry-After"] = "0"
    assert raw.header("retry-after") == "30"
    assert raw.headers == {"Retry-After": "30"}


@pytest.mark.parametrize("body, expected", [(None, False), (b"", False), (b"{}", True)])
def test_has_body(body, expected):
    assert RawResult(status=200, body=body).has_body is expected
