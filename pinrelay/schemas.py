"""Request/response schemas for the upload relay.

Holds the Pydantic model for Pinata's pin reply and the plain dataclasses
that carry per-file outcomes and the aggregated /upload response.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, BinaryIO, Dict, List, Union

from pydantic import BaseModel


class PinataResponse(BaseModel):
    """Successful reply of the pinFileToIPFS endpoint.

    ``Timestamp`` is kept exactly as Pinata sends it; its format is not
    validated.
    """

    IpfsHash: str
    PinSize: int
    Timestamp: str


@dataclass
class FileEntry:
    filename: str
    stream: BinaryIO


@dataclass
class UploadSuccess:
    filename: str
    pin: PinataResponse


@dataclass
class UploadFailure:
    filename: str
    message: str


UploadOutcome = Union[UploadSuccess, UploadFailure]


@dataclass
class AggregateResult:
    """Merged outcome of one upload batch.

    ``successes`` is in completion order, not input order.
    """

    successes: List[PinataResponse] = field(default_factory=list)
    errors: List[str] = field(default_factory=list)

    def __len__(self) -> int:
        return len(self.successes) + len(self.errors)

    @property
    def status_code(self) -> int:
        # 206 whether some or all files failed
        return 206 if self.errors else 200

    def to_dict(self) -> Dict[str, Any]:
        out: Dict[str, Any] = {"successful_uploads": [s.model_dump() for s in self.successes]}
        if self.errors:
            out["errors"] = list(self.errors)
        return out
