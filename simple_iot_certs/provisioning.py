# -------------------------------------------------------------------------
# Copyright (c) Microsoft Corporation. All rights reserved.
# Licensed under the MIT License. See License.txt in the project root for
# license information.
# --------------------------------------------------------------------------
"""This module contains the device provisioning workflow.

A device is registered with either registry-generated symmetric keys or a pair of X509
thumbprints. If the device ID is already taken, the existing record is read back and its
stored authentication kind reported; nothing is changed and no message is sent. Otherwise
the new credential is proven by connecting as the device and sending one telemetry message.
"""

import logging
import tempfile
from .registry import (
    DeviceConflict,
    AUTH_KIND_SAS,
    AUTH_KIND_X509,
    get_authentication_kind,
)
from .telemetry import send_telemetry_message

logger = logging.getLogger(__name__)


class ProvisioningResult(object):
    """The outcome of provisioning a device.

    :ivar str device_id: The requested device ID.
    :ivar device: The created or existing device record.
    :ivar bool created: True if the device was created, False if it already existed.
    :ivar str authentication_kind: The authentication kind stored in the registry
        (AUTH_KIND_SAS or AUTH_KIND_X509).
    :ivar telemetry_error: The exception that prevented the telemetry message from being sent,
        if any.
    """

    def __init__(self, device_id, device, created, authentication_kind, telemetry_error=None):
        self.device_id = device_id
        self.device = device
        self.created = created
        self.authentication_kind = authentication_kind
        self.telemetry_error = telemetry_error

    @property
    def telemetry_sent(self):
        return self.created and self.telemetry_error is None

    @property
    def generation_id(self):
        return self.device.generation_id


def _report_existing_device(registry, device_id, attempted_kind):
    device = registry.get_device(device_id)
    stored_kind = get_authentication_kind(device, attempted_kind)
    if stored_kind != attempted_kind:
        logger.info(
            "Device {} is registered with {} authentication, not {}".format(
                device_id, stored_kind, attempted_kind
            )
        )
    return ProvisioningResult(device_id, device, False, stored_kind)


def _send_confirmation(create_device_client, device_id):
    """Create a device client and send the confirmation message, returning any failure"""
    try:
        device_client = create_device_client()
    except Exception as e:
        logger.error("Could not create device client for {}: {}".format(device_id, e))
        return e
    return send_telemetry_message(device_client, device_id)


def provision_device_with_sas(session, device_id):
    """Register a device using symmetric keys generated by IoT Hub.

    :param session: The session to provision with.
    :type session: :class:`simple_iot_certs.session.Session`
    :param str device_id: The ID of the device to register.

    :rtype: :class:`ProvisioningResult`
    """
    registry = session.create_registry_client()
    result = registry.create_device_with_sas(device_id)
    if isinstance(result, DeviceConflict):
        return _report_existing_device(registry, device_id, AUTH_KIND_SAS)

    device = result.device
    symmetric_key = device.authentication.symmetric_key
    key = symmetric_key.secondary_key if session.use_secondary else symmetric_key.primary_key

    telemetry_error = _send_confirmation(
        lambda: session.create_device_client_with_symmetric_key(device.device_id, key),
        device.device_id,
    )
    return ProvisioningResult(device_id, device, True, AUTH_KIND_SAS, telemetry_error)


def provision_device_with_x509(session, device_id, primary, secondary):
    """Register a device using the thumbprints of two X509 certificates.

    Only the thumbprints are sent to IoT Hub. The private key of the chosen pair is written to a
    temporary directory for the duration of the confirmation connection.

    :param session: The session to provision with.
    :type session: :class:`simple_iot_certs.session.Session`
    :param str device_id: The ID of the device to register.
    :param primary: The primary certificate pair.
    :type primary: :class:`simple_iot_certs.certificates.CertificatePair`
    :param secondary: The secondary certificate pair. May be the primary pair.
    :type secondary: :class:`simple_iot_certs.certificates.CertificatePair`

    :rtype: :class:`ProvisioningResult`
    """
    registry = session.create_registry_client()
    result = registry.create_device_with_x509(device_id, primary.thumbprint, secondary.thumbprint)
    if isinstance(result, DeviceConflict):
        return _report_existing_device(registry, device_id, AUTH_KIND_X509)

    device = result.device
    pair = secondary if session.use_secondary else primary

    with tempfile.TemporaryDirectory() as directory:
        telemetry_error = _send_confirmation(
            lambda: session.create_device_client_with_x509(
                device.device_id, pair.write_pem_files(directory, "device")
            ),
            device.device_id,
        )
    return ProvisioningResult(device_id, device, True, AUTH_KIND_X509, telemetry_error)
