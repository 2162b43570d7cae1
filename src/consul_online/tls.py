# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""
TLS material resolution.

`resolve_tls_material` turns the user-facing CA / client certificate / client
key options into an immutable `TlsMaterial` value, reading files exactly once.
`build_ssl_context` turns that value into the `ssl.SSLContext` handed to the
HTTP client. Both fail with `ConfigError` before any network activity.
"""

from __future__ import annotations

import logging
import os
import ssl
import tempfile
from dataclasses import dataclass
from pathlib import Path
from typing import Union

from .errors import ConfigError

logger = logging.getLogger(__name__)

PemSource = Union[str, "os.PathLike[str]", bytes]

_PEM_MARKER = b"-----BEGIN "


@dataclass(frozen=True)
class TlsMaterial:
    """PEM material plus verification flags for one run."""

    ca_cert: bytes | None = None
    client_cert: bytes | None = None
    client_key: bytes | None = None
    skip_verify: bool = False
    force_tls: bool = False

    def __post_init__(self) -> None:
        _check_client_pair(self.client_cert, self.client_key)

    @property
    def has_client_cert(self) -> bool:
        return self.client_cert is not None and self.client_key is not None


def _check_client_pair(client_cert: object, client_key: object) -> None:
    if client_cert is not None and client_key is None:
        raise ConfigError("client cert provided without client key", field="client_key")
    if client_key is not None and client_cert is None:
        raise ConfigError("client key provided without client cert", field="client_cert")


def _read_pem(source: PemSource, *, label: str, field: str, key: bool = False) -> bytes:
    if isinstance(source, bytes):
        data = source
    else:
        path = Path(source)
        logger.info("read %s from: %s", label, path)
        try:
            data = path.read_bytes()
        except OSError as exc:
            raise ConfigError(f"could not read the {label}: {exc}", field=field) from exc

    if _PEM_MARKER not in data or (key and b"PRIVATE KEY" not in data):
        raise ConfigError(f"could not parse the provided {label}", field=field)
    return data


def resolve_tls_material(
    ca_cert: PemSource | None = None,
    client_cert: PemSource | None = None,
    client_key: PemSource | None = None,
    *,
    skip_verify: bool = False,
    force_tls: bool = False,
) -> TlsMaterial:
    """
    Assemble TlsMaterial from paths or raw PEM bytes.

    The cert/key pair invariant is checked before touching the filesystem, so a
    half-specified pair always yields the same error regardless of file state.
    """
    _check_client_pair(client_cert, client_key)

    ca_bytes = _read_pem(ca_cert, label="ca certificate", field="ca_cert") if ca_cert is not None else None
    cert_bytes = key_bytes = None
    if client_cert is not None and client_key is not None:
        cert_bytes = _read_pem(client_cert, label="client certificate", field="client_cert")
        key_bytes = _read_pem(client_key, label="client key", field="client_key", key=True)

    return TlsMaterial(
        ca_cert=ca_bytes,
        client_cert=cert_bytes,
        client_key=key_bytes,
        skip_verify=skip_verify,
        force_tls=force_tls,
    )


def _load_client_cert(context: ssl.SSLContext, material: TlsMaterial) -> None:
    # ssl only loads certificate chains from files.
    with tempfile.TemporaryDirectory(prefix="consul-online-") as tmp:
        cert_path = os.path.join(tmp, "client.pem")
        key_path = os.path.join(tmp, "client.key")
        with open(cert_path, "wb") as fh:
            fh.write(material.client_cert or b"")
        fd = os.open(key_path, os.O_WRONLY | os.O_CREAT | os.O_EXCL, 0o600)
        with os.fdopen(fd, "wb") as fh:
            fh.write(material.client_key or b"")
        try:
            context.load_cert_chain(cert_path, key_path)
        except ssl.SSLError as exc:
            raise ConfigError(f"invalid client certificate: {exc}", field="client_cert") from exc


def build_ssl_context(material: TlsMaterial) -> ssl.SSLContext:
    """Build a TLS client context from resolved material."""
    if material.skip_verify:
        logger.warning("skipping server certificate verification (unsafe!)")
        context = ssl.SSLContext(ssl.PROTOCOL_TLS_CLIENT)
        context.check_hostname = False
        context.verify_mode = ssl.CERT_NONE
    else:
        context = ssl.create_default_context()
        if material.ca_cert is not None:
            try:
                context.load_verify_locations(cadata=material.ca_cert.decode("ascii"))
            except (ssl.SSLError, ValueError) as exc:
                raise ConfigError(f"invalid ca certificate: {exc}", field="ca_cert") from exc

    if material.has_client_cert:
        _load_client_cert(context, material)
    return context


__all__ = ["PemSource", "TlsMaterial", "build_ssl_context", "resolve_tls_material"]
