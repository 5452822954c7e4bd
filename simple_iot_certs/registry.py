# -------------------------------------------------------------------------
# Copyright (c) Microsoft Corporation. All rights reserved.
# Licensed under the MIT License. See License.txt in the project root for
# license information.
# --------------------------------------------------------------------------
"""This module wraps the IoTHub Registry Manager with the operations the demo relies on"""

import logging
from msrest.exceptions import HttpOperationError
from azure.iot.hub.models import ExportImportDevice
from . import constant

logger = logging.getLogger(__name__)

HTTP_CONFLICT = 409

AUTH_KIND_SAS = "sas"
AUTH_KIND_X509 = "x509"


class DeviceCreated(object):
    """The device identity was created.

    :param device: The created device record as returned by IoT Hub.
    :type device: :class:`azure.iot.hub.models.Device`
    """

    def __init__(self, device):
        self.device = device

    def __repr__(self):
        return "DeviceCreated(device_id={!r})".format(self.device.device_id)


class DeviceConflict(object):
    """A device identity with the requested ID is already registered.

    :param str device_id: The ID of the existing device.
    """

    def __init__(self, device_id):
        self.device_id = device_id

    def __repr__(self):
        return "DeviceConflict(device_id={!r})".format(self.device_id)


def _is_conflict(error):
    response = getattr(error, "response", None)
    return getattr(response, "status_code", None) == HTTP_CONFLICT


def get_primary_key(device):
    """Return the primary symmetric key of a device record, or None if it has none"""
    authentication = device.authentication
    if authentication is None or authentication.symmetric_key is None:
        return None
    return authentication.symmetric_key.primary_key


def get_primary_thumbprint(device):
    """Return the primary X509 thumbprint of a device record, or None if it has none"""
    authentication = device.authentication
    if authentication is None or authentication.x509_thumbprint is None:
        return None
    return authentication.x509_thumbprint.primary_thumbprint


def get_authentication_kind(device, attempted_kind):
    """Determine the authentication kind stored in a device record.

    Only the field belonging to the attempted kind is inspected: a record is of the attempted
    kind when its primary key (or primary thumbprint) is present, and of the other kind otherwise.

    :param device: The device record retrieved from IoT Hub.
    :param str attempted_kind: AUTH_KIND_SAS or AUTH_KIND_X509.
    :returns: AUTH_KIND_SAS or AUTH_KIND_X509.
    """
    if attempted_kind == AUTH_KIND_X509:
        if get_primary_thumbprint(device) is None:
            return AUTH_KIND_SAS
        return AUTH_KIND_X509
    else:
        if get_primary_key(device) is None:
            return AUTH_KIND_X509
        return AUTH_KIND_SAS


class RegistryClient(object):
    """Registry operations used by the provisioning and deletion workflows.

    Creation returns a :class:`DeviceCreated` or :class:`DeviceConflict` result instead of
    raising when the device ID is already taken. Every other service failure is raised as
    :class:`msrest.exceptions.HttpOperationError`.

    :param registry_manager: The registry manager to delegate to.
    :type registry_manager: :class:`azure.iot.hub.IoTHubRegistryManager`
    """

    def __init__(self, registry_manager):
        self.registry_manager = registry_manager

    def _create(self, device_id, create_fn, *args):
        try:
            device = create_fn(device_id, *args)
        except HttpOperationError as e:
            if _is_conflict(e):
                logger.info("Device {} already exists".format(device_id))
                return DeviceConflict(device_id)
            raise
        logger.info("Device {} created".format(device.device_id))
        return DeviceCreated(device)

    def create_device_with_sas(self, device_id):
        """Create a device identity whose symmetric keys are generated by IoT Hub.

        :param str device_id: The name (Id) of the device.
        :returns: :class:`DeviceCreated` or :class:`DeviceConflict`
        """
        return self._create(
            device_id,
            self.registry_manager.create_device_with_sas,
            None,
            None,
            constant.DEVICE_STATUS_ENABLED,
        )

    def create_device_with_x509(self, device_id, primary_thumbprint, secondary_thumbprint):
        """Create a device identity bound to a pair of self-signed certificate thumbprints.

        :param str device_id: The name (Id) of the device.
        :param str primary_thumbprint: Primary X509 thumbprint.
        :param str secondary_thumbprint: Secondary X509 thumbprint.
        :returns: :class:`DeviceCreated` or :class:`DeviceConflict`
        """
        return self._create(
            device_id,
            self.registry_manager.create_device_with_x509,
            primary_thumbprint,
            secondary_thumbprint,
            constant.DEVICE_STATUS_ENABLED,
        )

    def get_device(self, device_id):
        return self.registry_manager.get_device(device_id)

    def get_devices(self, max_number_of_devices):
        return self.registry_manager.get_devices(max_number_of_devices) or []

    def remove_devices(self, devices):
        """Remove the given devices with a bulk registry operation.

        :param list devices: The device records to remove. At most
            :data:`constant.BULK_OPERATION_BATCH_SIZE` per call.
        :returns: The bulk registry operation result.
        :rtype: :class:`azure.iot.hub.models.BulkRegistryOperationResult`
        """
        removals = [
            ExportImportDevice(id=device.device_id, import_mode="delete") for device in devices
        ]
        logger.info("Removing {} devices".format(len(removals)))
        return self.registry_manager.bulk_create_or_update_devices(removals)
