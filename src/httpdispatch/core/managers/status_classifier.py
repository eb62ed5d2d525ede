"""Classification of HTTP status codes into dispatch bands.

Bands are tested in order with half-open intervals; anything that is neither
2xx nor 4xx falls through to SERVER_ERROR, including 1xx, 3xx and codes of
600 and above from non-conformant servers.
"""

from enum import Enum


class StatusBand(str, Enum):
    SUCCESS = "success"
    CLIENT_ERROR = "client_error"
    SERVER_ERROR = "server_error"


_BANDS = (
    (200, 300, StatusBand.SUCCESS),
    (400, 500, StatusBand.CLIENT_ERROR),
)


def classify_status(code: int) -> StatusBand:
    for lower, upper, band in _BANDS:
        if code >= lower and code < upper:
            return band
    return StatusBand.SERVER_ERROR
