"""Apply an options mapping to an ``httpx`` transfer."""

from __future__ import annotations

import logging
import ssl
import sys
from typing import Any, BinaryIO, Mapping

import certifi
import httpx

from .exceptions import (
    InvalidOptionsError,
    MissingCertificateError,
    TransferError,
    TransferNetworkError,
    TransferTimeoutError,
)
from .models import TransferSettings
from .request_options import RequestOptions, SslVersion, VerifyHost
from .security import sanitize_headers, validate_url


logger = logging.getLogger(__name__)

_MINIMUM_TLS_VERSIONS = {
    SslVersion.TLSv1: ssl.TLSVersion.TLSv1,
    SslVersion.TLSv1_0: ssl.TLSVersion.TLSv1,
    SslVersion.TLSv1_1: ssl.TLSVersion.TLSv1_1,
    SslVersion.TLSv1_2: ssl.TLSVersion.TLSv1_2,
    SslVersion.TLSv1_3: ssl.TLSVersion.TLSv1_3,
}


def _resolve_settings(options: RequestOptions | TransferSettings | Mapping[str, Any]) -> TransferSettings:
    if isinstance(options, TransferSettings):
        return options
    if isinstance(options, RequestOptions):
        return options.to_settings()
    return TransferSettings.from_options(options)


def _minimum_tls_version(version: int) -> ssl.TLSVersion | None:
    try:
        ssl_version = SslVersion(version)
    except ValueError as exc:
        raise InvalidOptionsError(f"Unknown SSL version: {version}", option="sslVersion", cause=exc) from exc
    if ssl_version is SslVersion.DEFAULT:
        return None
    if ssl_version not in _MINIMUM_TLS_VERSIONS:
        raise InvalidOptionsError(f"{ssl_version.name} is not supported", option="sslVersion")
    return _MINIMUM_TLS_VERSIONS[ssl_version]


def _load_context(settings: TransferSettings) -> ssl.SSLContext:
    if settings.trust_source is None:
        return ssl.create_default_context(cafile=certifi.where())
    kind, path = settings.trust_source
    try:
        if kind == "file":
            return ssl.create_default_context(cafile=path)
        return ssl.create_default_context(capath=path)
    except ssl.SSLError as exc:
        raise InvalidOptionsError(f'Cannot load certificates from "{path}"', cause=exc) from exc
    except OSError as exc:
        raise MissingCertificateError(
            f'Certificate "{path}" is not readable.',
            path=path,
            option="caInfo" if kind == "file" else "caPath",
            cause=exc,
        ) from exc


def build_ssl_context(settings: TransferSettings) -> ssl.SSLContext | bool:
    """Translate the TLS options into an ``ssl.SSLContext``.

    Returns ``True`` when no TLS option was set so httpx applies its own
    default verification.
    """
    if not settings.has_tls_options:
        return True

    context = _load_context(settings)

    if settings.ssl_verify_peer is False:
        logger.warning("Peer certificate verification is disabled")
        context.check_hostname = False
        context.verify_mode = ssl.CERT_NONE
    elif settings.ssl_verify_host is VerifyHost.NO:
        logger.warning("Certificate host name verification is disabled")
        context.check_hostname = False

    if settings.ssl_version is not None:
        minimum = _minimum_tls_version(settings.ssl_version)
        if minimum is not None:
            context.minimum_version = minimum

    if settings.ssl_cipher_list is not None:
        try:
            context.set_ciphers(settings.ssl_cipher_list)
        except ssl.SSLError as exc:
            raise InvalidOptionsError(
                f"Invalid cipher list: {settings.ssl_cipher_list}",
                option="ssl_cipher_list",
                cause=exc,
            ) from exc

    logger.debug(
        "Built SSL context (trust=%s, verify_mode=%s, check_hostname=%s)",
        settings.trust_source,
        context.verify_mode.name,
        context.check_hostname,
    )
    return context


def _request_headers(settings: TransferSettings) -> dict[str, str]:
    headers: dict[str, str] = {}
    if settings.user_agent is not None:
        headers["User-Agent"] = settings.user_agent
    if settings.referer is not None:
        headers["Referer"] = settings.referer
    return headers


def client_kwargs(options: RequestOptions | TransferSettings | Mapping[str, Any]) -> dict[str, Any]:
    """Return keyword arguments for ``httpx.Client`` honouring the options."""
    settings = _resolve_settings(options)
    return {
        "timeout": settings.transfer_timeout,
        "follow_redirects": settings.follow_location,
        "max_redirects": settings.redirect_limit,
        "verify": build_ssl_context(settings),
        "headers": _request_headers(settings),
        "trust_env": False,
    }


class HttpxTransport:
    """Issue requests configured by a :class:`RequestOptions` builder.

    ``max_redirects`` and the SSL context only apply when the transport creates
    its own ``httpx.Client``; timeout, redirects and headers are also sent per
    request so a caller-supplied client honours them.
    """

    def __init__(
        self,
        options: RequestOptions | TransferSettings | Mapping[str, Any],
        *,
        httpx_client: httpx.Client | None = None,
        output: BinaryIO | None = None,
    ) -> None:
        self.settings = _resolve_settings(options)
        self._output = output
        self._owns_client = httpx_client is None
        self._httpx = httpx_client or httpx.Client(**client_kwargs(self.settings))

    def __enter__(self) -> "HttpxTransport":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def close(self) -> None:
        if self._owns_client:
            self._httpx.close()

    def request(
        self,
        method: str,
        url: str,
        *,
        headers: Mapping[str, str] | None = None,
        content: bytes | str | None = None,
    ) -> bytes | None:
        """Send one request.

        Returns the body when ``returnTransfer`` is set, otherwise writes it to
        the output stream and returns ``None``.
        """
        validate_url(url)
        method = method.upper()
        merged = _request_headers(self.settings)
        if headers:
            merged.update({str(key): str(value) for key, value in headers.items()})
        logger.debug("%s %s headers=%s", method, url, sanitize_headers(merged))

        try:
            with self._httpx.stream(
                method,
                url,
                headers=merged,
                content=content,
                timeout=self.settings.transfer_timeout,
                follow_redirects=self.settings.follow_location,
            ) as response:
                logger.debug("%s %s -> %s", method, url, response.status_code)
                if self.settings.return_transfer:
                    return response.read()
                output = self._output or sys.stdout.buffer
                for chunk in response.iter_bytes():
                    output.write(chunk)
                return None
        except httpx.TimeoutException as exc:
            raise TransferTimeoutError("Request timed out", option="timeout", cause=exc) from exc
        except httpx.NetworkError as exc:
            raise TransferNetworkError("Network error", cause=exc) from exc
        except httpx.HTTPError as exc:
            raise TransferError(str(exc) or "Transfer failed", cause=exc) from exc
