# application/ports/http_client.py
from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Optional

from domain.http_message import Headers, HttpResponseMessage


class HttpClientPort(ABC):
    @abstractmethod
    def fetch(
        self,
        method: str,
        url: str,
        headers: Optional[Headers] = None,
        data: Optional[bytes] = None,
        allow_redirects: Optional[bool] = None,
    ) -> HttpResponseMessage:
        """
        Final response of the transaction. Earlier hops are reachable through
        resp.request.response.
        """
        ...
