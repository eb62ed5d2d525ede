import pytest

from httpdispatch.core.managers.status_classifier import StatusBand, classify_status


@pytest.mark.parametrize(
    "code, band",
    [
        (100, StatusBand.SERVER_ERROR),
        (199, StatusBand.SERVER_ERROR),
        (200, StatusBand.SUCCESS),
        (204, StatusBand.SUCCESS),
        (299, StatusBand.SUCCESS),
        (300, StatusBand.SERVER_ERROR),
        (304, StatusBand.SERVER_ERROR),
        (399, StatusBand.SERVER_ERROR),
        (400, StatusBand.CLIENT_ERROR),
        (404, StatusBand.CLIENT_ERROR),
        (499, StatusBand.CLIENT_ERROR),
        (500, StatusBand.SERVER_ERROR),
        (599, StatusBand.SERVER_ERROR),
        (600, StatusBand.SERVER_ERROR),
        (0, StatusBand.SERVER_ERROR),
    ],
)
def test_classify_status_boundaries(code, band):
    assert classify_status(code) is band


def test_every_code_lands_in_exactly_one_band():
    for code in range(0, 1000):
        band = classify_status(code)
        if 200 <= code < 300:
            assert band is StatusBand.SUCCESS
        elif 400 <= code < 500:
            assert band is StatusBand.CLIENT_ERROR
        else:
            assert band is StatusBand.SERVER_ERROR
