"""Typed view of the options mapping, validated at the transport boundary."""

from __future__ import annotations

import sys
from typing import Any, Literal, Mapping

from pydantic import BaseModel, ConfigDict, Field, ValidationError, model_validator

from .exceptions import InvalidOptionsError
from .request_options import VerifyHost


UNLIMITED_REDIRECTS = sys.maxsize


class CurlOptionsModel(BaseModel):
    model_config = ConfigDict(
        extra="forbid",
        populate_by_name=True,
        frozen=True,
        coerce_numbers_to_str=True,
    )


class TransferSettings(CurlOptionsModel):
    timeout: int = 15
    follow_location: bool = Field(default=False, alias="followLocation")
    max_redirs: int = Field(default=10, alias="maxRedirs")
    return_transfer: bool = Field(default=True, alias="returnTransfer")
    referer: str | None = None
    user_agent: str | None = Field(default=None, alias="userAgent")
    ssl_version: int | None = Field(default=None, alias="sslVersion")
    ssl_cipher_list: str | None = None
    ssl_verify_peer: bool | None = Field(default=None, alias="ssl_verifyPeer")
    ssl_verify_host: VerifyHost | None = Field(default=None, alias="ssl_verifyHost")
    ca_info: str | None = Field(default=None, alias="caInfo")
    ca_path: str | None = Field(default=None, alias="caPath")

    @model_validator(mode="after")
    def _single_trust_source(self) -> TransferSettings:
        if self.ca_info is not None and self.ca_path is not None:
            raise ValueError("caInfo and caPath are mutually exclusive")
        return self

    @classmethod
    def from_options(cls, options: Mapping[str, Any]) -> TransferSettings:
        try:
            return cls.model_validate(dict(options))
        except ValidationError as exc:
            raise InvalidOptionsError(f"Invalid request options: {exc}", cause=exc) from exc

    @property
    def trust_source(self) -> tuple[Literal["file", "directory"], str] | None:
        if self.ca_info is not None:
            return "file", self.ca_info
        if self.ca_path is not None:
            return "directory", self.ca_path
        return None

    @property
    def transfer_timeout(self) -> float | None:
        """Timeout in seconds for httpx; zero or negative means no timeout, as in curl."""
        if self.timeout <= 0:
            return None
        return float(self.timeout)

    @property
    def redirect_limit(self) -> int:
        """Redirect cap for httpx; a negative ``maxRedirs`` means unlimited, as in curl."""
        if self.max_redirs < 0:
            return UNLIMITED_REDIRECTS
        return self.max_redirs

    @property
    def has_tls_options(self) -> bool:
        return any(
            value is not None
            for value in (
                self.ssl_version,
                self.ssl_cipher_list,
                self.ssl_verify_peer,
                self.ssl_verify_host,
                self.ca_info,
                self.ca_path,
            )
        )

    def to_options(self) -> dict[str, Any]:
        """Return the mapping form, leaving out options that were never set."""
        options = self.model_dump(by_alias=True, exclude_none=True)
        if self.ssl_verify_host is not None:
            options["ssl_verifyHost"] = int(self.ssl_verify_host)
        return options
