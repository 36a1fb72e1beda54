"""Client for the bibliographic metadata lookup service."""
from __future__ import annotations

import logging
from typing import Any, Dict, Optional, Type, TypeVar
from urllib.parse import quote_plus

import httpx
from pydantic import BaseModel, ValidationError, field_validator

from .config import Settings
from .errors import MetadataLookupError

logger = logging.getLogger(__name__)

ResponseModel = TypeVar("ResponseModel", bound=BaseModel)


def encode_component(value: str) -> str:
    """Encode a path component: alphanumerics and ``-_.~`` kept, spaces as ``+``."""
    return quote_plus(value, safe="")


class _LookupRecord(BaseModel):
    @field_validator("*", mode="before")
    @classmethod
    def coerce_to_text(cls, value: Any) -> Any:
        # the service sometimes reports years as numbers
        if isinstance(value, bool):
            return value
        if isinstance(value, float) and value.is_integer():
            value = int(value)
        if isinstance(value, (int, float)):
            return str(value)
        return value

    @field_validator("*")
    @classmethod
    def require_text(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("field must not be empty")
        return value


class BookMetadata(_LookupRecord):
    author: str
    title: str
    publisher: str
    year: str


class PageTitle(_LookupRecord):
    title: str


class MetadataLookupClient:
    """Fetch book metadata by ISBN and page titles by URL.

    Every failure mode (transport, status, body, missing fields) raises
    :class:`MetadataLookupError`; there is no retry.
    """

    def __init__(
        self,
        settings: Optional[Settings] = None,
        transport: Optional[httpx.BaseTransport] = None,
    ) -> None:
        self.settings = settings or Settings()
        self._transport = transport

    def _headers(self) -> Dict[str, str]:
        return {
            "Accept": "application/json",
            "User-Agent": self.settings.user_agent,
        }

    def fetch_book_metadata(self, isbn: str) -> BookMetadata:
        logger.info("Looking up book metadata for ISBN %s", isbn)
        return self._get(f"isbn/{encode_component(isbn)}", BookMetadata)

    def fetch_page_title(self, url: str) -> PageTitle:
        logger.info("Looking up page title for %s", url)
        return self._get(f"title/{encode_component(url)}", PageTitle)

    def _get(self, path: str, model: Type[ResponseModel]) -> ResponseModel:
        url = f"{self.settings.api_endpoint}/{path}"
        try:
            with httpx.Client(
                timeout=self.settings.lookup_timeout,
                headers=self._headers(),
                transport=self._transport,
            ) as client:
                response = client.get(url)
                response.raise_for_status()
                payload = response.json()
        except httpx.HTTPStatusError as exc:
            raise MetadataLookupError(
                f"Lookup {url} returned status {exc.response.status_code}"
            ) from exc
        except httpx.HTTPError as exc:
            raise MetadataLookupError(f"Lookup {url} failed: {exc}") from exc
        except ValueError as exc:
            raise MetadataLookupError(f"Lookup {url} returned a malformed body") from exc

        if not isinstance(payload, dict):
            raise MetadataLookupError(f"Lookup {url} returned a malformed body")
        try:
            return model.model_validate(payload)
        except ValidationError as exc:
            missing = ", ".join(str(err["loc"][0]) for err in exc.errors() if err["loc"])
            raise MetadataLookupError(
                f"Lookup {url} response is missing or has invalid field(s): {missing}"
            ) from exc


__all__ = [
    "BookMetadata",
    "PageTitle",
    "MetadataLookupClient",
    "encode_component",
]
