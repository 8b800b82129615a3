# flixcloud/services/transport.py
from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Dict, Optional, Protocol, Tuple, Union

import requests


class TrustMode(str, Enum):
    DEFAULT = "default"
    CA_FILE = "ca_file"
    CA_DIR = "ca_dir"
    INSECURE = "insecure"


@dataclass(frozen=True)
class TransportOptions:
    """
    Connection settings for one POST.

    timeout bounds connection establishment only; 0 or None means wait
    forever. insecure wins over certificate / certificate_dir.
    """
    timeout: Optional[float] = None
    certificate: Optional[str] = None
    certificate_dir: Optional[str] = None
    insecure: bool = False

    @property
    def trust_mode(self) -> TrustMode:
        if self.insecure:
            return TrustMode.INSECURE
        if self.certificate:
            return TrustMode.CA_FILE
        if self.certificate_dir:
            return TrustMode.CA_DIR
        return TrustMode.DEFAULT

    def verify(self) -> Union[bool, str]:
        """Value for the ``verify`` argument of requests."""
        mode = self.trust_mode
        if mode is TrustMode.INSECURE:
            return False
        if mode is TrustMode.CA_FILE:
            return self.certificate  # type: ignore[return-value]
        if mode is TrustMode.CA_DIR:
            return self.certificate_dir  # type: ignore[return-value]
        return True

    def timeouts(self) -> Optional[Tuple[float, None]]:
        """(connect, read) pair; the read side is never bounded."""
        if not self.timeout:
            return None
        return (float(self.timeout), None)


@dataclass(frozen=True)
class TransportResponse:
    status_code: Optional[int]
    body: str


class TransportError(Exception):
    """Connection-level failure: nothing usable came back from the server."""

    def __init__(self, code: str, description: str) -> None:
        super().__init__(f"{code}: {description}")
        self.code = code
        self.description = description


class HttpTransport(Protocol):
    def post(
        self,
        url: str,
        body: str,
        headers: Dict[str, str],
        options: TransportOptions,
    ) -> TransportResponse:
        ...


class RequestsTransport:
    """
    HttpTransport backed by ``requests``.

    Redirects are not followed so a 302 reaches the caller's status table.
    """

    def __init__(self, session: Optional[requests.Session] = None) -> None:
        self._session = session

    def post(
        self,
        url: str,
        body: str,
        headers: Dict[str, str],
        options: TransportOptions,
    ) -> TransportResponse:
        post = self._session.post if self._session is not None else requests.post
        try:
            resp = post(
                url,
                data=body.encode("utf-8"),
                headers=headers,
                timeout=options.timeouts(),
                verify=options.verify(),
                allow_redirects=False,
            )
        except requests.RequestException as e:
            logging.error("[FLIXCLOUD TRANSPORT] %s: %s", type(e).__name__, e)
            raise TransportError(type(e).__name__, str(e)) from e

        return TransportResponse(status_code=resp.status_code, body=resp.text)
