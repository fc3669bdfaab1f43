"""HTTP transport used by the probes.

Probes only need two capabilities: stream the body of a GET and send a
POST returning its status. Tests swap in an in-memory implementation.
"""

from __future__ import annotations

import logging
from contextlib import contextmanager
from dataclasses import dataclass
from typing import ContextManager, Iterable, Iterator, Optional, Protocol, Tuple, runtime_checkable

import requests
from urllib3.exceptions import ProtocolError, ReadTimeoutError, SSLError

LOGGER = logging.getLogger(__name__)


@dataclass
class StreamedResponse:
    content_length: Optional[int]
    chunks: Iterable[bytes]


@runtime_checkable
class Transport(Protocol):
    def stream_get(self, url: str) -> ContextManager[StreamedResponse]:
        ...

    def post(self, url: str, body: bytes) -> int:
        ...


def _parse_content_length(raw: Optional[str]) -> Optional[int]:
    if raw is None:
        return None
    try:
        value = int(raw)
    except ValueError:
        LOGGER.debug("Ignoring malformed Content-Length header %r", raw)
        return None
    return value if value > 0 else None


class RequestsTransport:
    def __init__(
        self,
        timeout: Tuple[float, float] = (10.0, 30.0),
        user_agent: str = "netbolt",
        chunk_size: int = 65536,
        session: Optional[requests.Session] = None,
    ):
        self.timeout = timeout
        self.chunk_size = chunk_size
        self.session = session or requests.Session()
        self.session.headers["User-Agent"] = user_agent
        # Throughput is measured in bytes on the wire, not decompressed bytes.
        self.session.headers["Accept-Encoding"] = "identity"

    @contextmanager
    def stream_get(self, url: str) -> Iterator[StreamedResponse]:
        LOGGER.debug("GET %s", url)
        with self.session.get(url, stream=True, timeout=self.timeout) as response:
            response.raise_for_status()
            if response.headers.get("Content-Encoding", "identity") != "identity":
                LOGGER.debug(
                    "Server sent %s encoded body; counting raw bytes",
                    response.headers["Content-Encoding"],
                )
            yield StreamedResponse(
                content_length=_parse_content_length(response.headers.get("Content-Length")),
                chunks=self._wire_chunks(response),
            )

    def _wire_chunks(self, response: requests.Response) -> Iterator[bytes]:
        # Same exception mapping as Response.iter_content, minus the decoding.
        try:
            yield from response.raw.stream(self.chunk_size, decode_content=False)
        except ProtocolError as exc:
            raise requests.exceptions.ChunkedEncodingError(exc) from exc
        except ReadTimeoutError as exc:
            raise requests.exceptions.ConnectionError(exc) from exc
        except SSLError as exc:
            raise requests.exceptions.SSLError(exc) from exc

    def post(self, url: str, body: bytes) -> int:
        LOGGER.debug("POST %s (%d bytes)", url, len(body))
        response = self.session.post(url, data=body, timeout=self.timeout)
        response.close()
        return response.status_code

    def close(self) -> None:
        self.session.close()
