# -------------------------------------------------------------------------
# Copyright (c) Microsoft Corporation. All rights reserved.
# Licensed under the MIT License. See License.txt in the project root for
# license information.
# --------------------------------------------------------------------------
"""This module loads the X509 certificates and credentials used to provision devices.

A certificate pair consists of the public certificate, whose thumbprint is registered with
IoT Hub, and a private-key-bearing credential (PFX, or PEM containing the key) used only on
the device side to authenticate the connection.
"""

import logging
import os
from importlib import resources
from typing import Optional, Tuple
from cryptography import x509
from cryptography.hazmat.primitives import hashes, serialization
from cryptography.hazmat.primitives.serialization import pkcs12
from azure.iot.device import X509
from . import constant
from .exceptions import CertificateError

logger = logging.getLogger(__name__)

PEM_MARKER = b"-----BEGIN"


def load_embedded_file(filename: str) -> bytes:
    """Read a certificate file bundled with this package"""
    logger.info("Loading embedded file {}".format(filename))
    return resources.files(constant.EMBEDDED_RESOURCE_PACKAGE).joinpath(filename).read_bytes()


def load_local_file(filename: str) -> bytes:
    """Read a file from the local filesystem"""
    logger.info("Loading local file {}".format(filename))
    with open(filename, "rb") as f:
        return f.read()


def _encode_pass_phrase(pass_phrase: Optional[str]) -> Optional[bytes]:
    if pass_phrase:
        return pass_phrase.encode("utf-8")
    return None


def compute_thumbprint(certificate: x509.Certificate) -> str:
    """Return the SHA-1 thumbprint of a certificate as upper case hex, as IoT Hub expects it"""
    return certificate.fingerprint(hashes.SHA1()).hex().upper()


def load_certificate(data: bytes) -> x509.Certificate:
    """Parse a PEM or DER encoded X509 certificate.

    :raises: :class:`simple_iot_certs.exceptions.CertificateError` if the data is not a certificate
    """
    try:
        if data.lstrip().startswith(PEM_MARKER):
            return x509.load_pem_x509_certificate(data)
        return x509.load_der_x509_certificate(data)
    except ValueError as e:
        raise CertificateError("Could not parse X509 certificate") from e


class Credential(object):
    """A private key, optionally accompanied by its certificate"""

    def __init__(self, private_key, certificate: Optional[x509.Certificate] = None) -> None:
        self.private_key = private_key
        self.certificate = certificate

    def private_key_pem(self) -> bytes:
        return self.private_key.private_bytes(
            encoding=serialization.Encoding.PEM,
            format=serialization.PrivateFormat.PKCS8,
            encryption_algorithm=serialization.NoEncryption(),
        )


def load_credential(data: bytes, pass_phrase: Optional[str] = None) -> Credential:
    """Parse a private-key-bearing credential.

    PKCS#12 (PFX) data is expected unless the data is PEM, in which case it must contain a
    private key and may contain the matching certificate.

    :raises: :class:`simple_iot_certs.exceptions.CertificateError` if the credential cannot be
        parsed or holds no private key
    """
    password = _encode_pass_phrase(pass_phrase)
    try:
        if data.lstrip().startswith(PEM_MARKER):
            private_key = serialization.load_pem_private_key(data, password=password)
            certificate = None
            if b"CERTIFICATE-----" in data:
                certificate = x509.load_pem_x509_certificate(data)
        else:
            private_key, certificate, _ = pkcs12.load_key_and_certificates(data, password)
    except (ValueError, TypeError) as e:
        raise CertificateError("Could not parse private key credential") from e

    if private_key is None:
        raise CertificateError("Credential does not contain a private key")
    return Credential(private_key, certificate)


class CertificatePair(object):
    """A public certificate and the credential holding its private key.

    :param certificate: The public certificate registered with IoT Hub.
    :param credential: The credential used to authenticate the device connection.
    """

    def __init__(self, certificate: x509.Certificate, credential: Credential) -> None:
        self.certificate = certificate
        self.credential = credential

    @property
    def thumbprint(self) -> str:
        return compute_thumbprint(self.certificate)

    def write_pem_files(self, directory: str, name: str) -> X509:
        """Write the credential as PEM certificate and key files usable by the device client.

        :param str directory: Directory to write to. The caller is responsible for removing it.
        :param str name: Base name of the written files.
        :returns: An X509 object referring to the written files.
        """
        certificate = self.credential.certificate or self.certificate
        cert_file = os.path.join(directory, name + "_cert.pem")
        key_file = os.path.join(directory, name + "_key.pem")
        with open(cert_file, "wb") as f:
            f.write(certificate.public_bytes(serialization.Encoding.PEM))
        with open(key_file, "wb") as f:
            f.write(self.credential.private_key_pem())
        return X509(cert_file=cert_file, key_file=key_file)


def load_embedded_certificate_pairs(
    pass_phrase: Optional[str] = None,
) -> Tuple[CertificatePair, CertificatePair]:
    """Load the primary and secondary certificate pairs bundled with this package"""
    primary = CertificatePair(
        load_certificate(load_embedded_file(constant.PRIMARY_EMBEDDED_CRT)),
        load_credential(load_embedded_file(constant.PRIMARY_EMBEDDED_PFX), pass_phrase),
    )
    secondary = CertificatePair(
        load_certificate(load_embedded_file(constant.SECONDARY_EMBEDDED_CRT)),
        load_credential(load_embedded_file(constant.SECONDARY_EMBEDDED_PFX), pass_phrase),
    )
    return primary, secondary


def load_local_certificate_pair(
    crt_file: str, pfx_file: str, pass_phrase: Optional[str] = None
) -> CertificatePair:
    """Load a certificate pair from a certificate file and a credential file"""
    return CertificatePair(
        load_certificate(load_local_file(crt_file)),
        load_credential(load_local_file(pfx_file), pass_phrase),
    )
