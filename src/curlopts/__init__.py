"""Fluent, validated options for HTTP(S) transfers."""

from .exceptions import (
    CurlOptionsError,
    InvalidArgumentError,
    InvalidOptionsError,
    MissingCertificateError,
    TransferError,
    TransferNetworkError,
    TransferTimeoutError,
)
from .models import TransferSettings
from .request_options import RequestOptions, SslVersion, VerifyHost
from .transport import HttpxTransport, build_ssl_context, client_kwargs

__all__ = [
    "CurlOptionsError",
    "HttpxTransport",
    "InvalidArgumentError",
    "InvalidOptionsError",
    "MissingCertificateError",
    "RequestOptions",
    "SslVersion",
    "TransferError",
    "TransferNetworkError",
    "TransferSettings",
    "TransferTimeoutError",
    "VerifyHost",
    "build_ssl_context",
    "client_kwargs",
]

__version__ = "0.1.0"
