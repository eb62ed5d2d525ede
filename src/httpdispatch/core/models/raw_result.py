from dataclasses import dataclass, field
from typing import List, Mapping, Optional

from multidict import CIMultiDict, CIMultiDictProxy


@dataclass(frozen=True)
class RawResult:
    """Transport-level success envelope: the remote endpoint answered.

    Any status code counts, 4xx and 5xx included. `body` is None when the
    transport received no payload at all. Headers are kept as a read-only
    case-insensitive multidict; repeated headers such as Set-Cookie keep
    every value.
    """

    status: int
    headers: Mapping[str, str] = field(default_factory=dict)
    body: Optional[bytes] = None

    def __post_init__(self) -> None:
        if not isinstance(self.headers, CIMultiDictProxy):
            object.__setattr__(self, "headers", CIMultiDictProxy(CIMultiDict(self.headers)))

    def header(self, name: str) -> Optional[str]:
        """First value of a response header, matched case-insensitively."""
        return self.headers.get(name)

    def header_values(self, name: str) -> List[str]:
        return self.headers.getall(name, [])

    @property
    def has_body(self) -> bool:
        return bool(self.body)
