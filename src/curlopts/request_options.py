"""Fluent builder for the options of a single HTTP(S) transfer."""

from __future__ import annotations

import copy as _copy
import logging
import os
from enum import IntEnum
from typing import TYPE_CHECKING, Any, Union

from .exceptions import InvalidArgumentError, MissingCertificateError

if TYPE_CHECKING:
    from .models import TransferSettings


logger = logging.getLogger(__name__)

PathLike = Union[str, "os.PathLike[str]"]


class VerifyHost(IntEnum):
    """How strictly the certificate name is checked against the host."""

    NO = 0
    COMMON = 1
    MATCH = 2


class SslVersion(IntEnum):
    DEFAULT = 0
    TLSv1 = 1
    SSLv2 = 2
    SSLv3 = 3
    TLSv1_0 = 4
    TLSv1_1 = 5
    TLSv1_2 = 6
    TLSv1_3 = 7


def _coerce_verify_host(verify_host: Any) -> VerifyHost:
    try:
        return VerifyHost(verify_host)
    except (ValueError, TypeError) as exc:
        raise InvalidArgumentError(
            "Verify host must be 0, 1 or 2",
            option="ssl_verifyHost",
            cause=exc,
        ) from exc


def _certificate_path(value: Any, option: str) -> str:
    try:
        return os.fspath(value)
    except TypeError as exc:
        raise MissingCertificateError(
            f"Certificate path {value!r} is not readable.",
            path=str(value),
            option=option,
            cause=exc,
        ) from exc


def _is_readable_file(path: str) -> bool:
    return os.path.isfile(path) and os.access(path, os.R_OK)


def _is_readable_dir(path: str) -> bool:
    return os.path.isdir(path) and os.access(path, os.R_OK)


class RequestOptions:
    """Accumulates the options mapping handed to the transport.

    Every setter returns the builder itself so calls can be chained::

        opts = RequestOptions().set_timeout(5).set_user_agent("bot/1.0")
    """

    VERIFYHOST_NO = VerifyHost.NO
    VERIFYHOST_COMMON = VerifyHost.COMMON
    VERIFYHOST_MATCH = VerifyHost.MATCH

    default_timeout = 15
    default_max_redirects = 10

    def __init__(self) -> None:
        self.options: dict[str, Any] = {
            "timeout": self.default_timeout,
            # redirects are opt-in, cookies are not carried between hops
            "followLocation": False,
            "maxRedirs": self.default_max_redirects,
            "returnTransfer": True,
        }

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.options!r})"

    def set_timeout(self, timeout: int) -> RequestOptions:
        self.options["timeout"] = timeout
        return self

    def set_referer(self, referer: object) -> RequestOptions:
        self.options["referer"] = str(referer)
        return self

    def set_user_agent(self, user_agent: str) -> RequestOptions:
        self.options["userAgent"] = user_agent
        return self

    def set_follow_redirects(self, enabled: bool = True) -> RequestOptions:
        self.options["followLocation"] = bool(enabled)
        return self

    def set_maximum_redirects(self, count: int) -> RequestOptions:
        self.options["maxRedirs"] = count
        return self

    def set_return_transfer(self, enabled: bool = True) -> RequestOptions:
        self.options["returnTransfer"] = bool(enabled)
        return self

    def set_ssl_version(self, version: int) -> RequestOptions:
        self.options["sslVersion"] = int(version)
        return self

    def set_ssl_cipher_list(self, cipher_list: object) -> RequestOptions:
        self.options["ssl_cipher_list"] = str(cipher_list)
        return self

    def set_certification_verify(self, enabled: bool = True) -> RequestOptions:
        """Toggle verification of the peer certificate."""
        self.options["ssl_verifyPeer"] = bool(enabled)
        return self

    def set_trusted_certificate(
        self,
        cert: PathLike,
        verify_host: int = VerifyHost.MATCH,
    ) -> RequestOptions:
        """Trust a single CA certificate file and drop any certificate directory.

        Replaces a previously trusted certificate. ``verify_host`` follows
        CURLOPT_SSL_VERIFYHOST:

        * 0: don't check the common name (CN) attribute
        * 1: check that the common name attribute at least exists
        * 2: check that the common name exists and matches the host name
        """
        host_check = _coerce_verify_host(verify_host)
        path = _certificate_path(cert, "caInfo")
        if not _is_readable_file(path):
            logger.debug("Rejected CA file %s", path)
            raise MissingCertificateError(
                f'Certificate "{path}" is not readable.',
                path=path,
                option="caInfo",
            )

        self.options.pop("caPath", None)
        self.set_certification_verify()
        self.options["ssl_verifyHost"] = int(host_check)
        self.options["caInfo"] = path
        logger.debug("Trusting CA file %s (verify host %d)", path, host_check)
        return self

    def set_trusted_certificates_directory(
        self,
        directory: PathLike,
        verify_host: int = VerifyHost.MATCH,
    ) -> RequestOptions:
        """Trust a directory of CA certificates and drop any single certificate file.

        ``verify_host`` has the same meaning as in :meth:`set_trusted_certificate`.
        """
        host_check = _coerce_verify_host(verify_host)
        path = _certificate_path(directory, "caPath")
        if not _is_readable_dir(path):
            logger.debug("Rejected CA directory %s", path)
            raise MissingCertificateError(
                f'Certificate directory "{path}" is not readable.',
                path=path,
                option="caPath",
            )

        self.options.pop("caInfo", None)
        self.set_certification_verify()
        self.options["ssl_verifyHost"] = int(host_check)
        self.options["caPath"] = path
        logger.debug("Trusting CA directory %s (verify host %d)", path, host_check)
        return self

    def copy(self) -> RequestOptions:
        clone = _copy.copy(self)
        clone.options = dict(self.options)
        return clone

    def to_settings(self) -> TransferSettings:
        """Validate the mapping into a typed :class:`TransferSettings`."""
        from .models import TransferSettings

        return TransferSettings.from_options(self.options)

    @property
    def timeout(self) -> Any:
        return self.options.get("timeout")

    @timeout.setter
    def timeout(self, value: int) -> None:
        self.set_timeout(value)

    @property
    def referer(self) -> str | None:
        return self.options.get("referer")

    @referer.setter
    def referer(self, value: object) -> None:
        self.set_referer(value)

    @property
    def user_agent(self) -> Any:
        return self.options.get("userAgent")

    @user_agent.setter
    def user_agent(self, value: str) -> None:
        self.set_user_agent(value)

    @property
    def follow_redirects(self) -> Any:
        return self.options.get("followLocation")

    @follow_redirects.setter
    def follow_redirects(self, value: bool) -> None:
        self.set_follow_redirects(value)

    @property
    def maximum_redirects(self) -> Any:
        return self.options.get("maxRedirs")

    @maximum_redirects.setter
    def maximum_redirects(self, value: int) -> None:
        self.set_maximum_redirects(value)

    @property
    def return_transfer(self) -> Any:
        return self.options.get("returnTransfer")

    @return_transfer.setter
    def return_transfer(self, value: bool) -> None:
        self.set_return_transfer(value)
