# -------------------------------------------------------------------------
# Copyright (c) Microsoft Corporation. All rights reserved.
# Licensed under the MIT License. See License.txt in the project root for
# license information.
# --------------------------------------------------------------------------
"""This module contains the bulk delete workflow"""

import logging
from . import constant

logger = logging.getLogger(__name__)


class DeletionResult(object):
    """The outcome of a bulk delete.

    :ivar list device_ids: IDs of the devices submitted for removal.
    :ivar bool succeeded: False if there was nothing to delete or the removal failed. The two
        cases are not distinguished.
    """

    def __init__(self, device_ids, succeeded):
        self.device_ids = device_ids
        self.succeeded = succeeded


def _batches(items, size):
    for i in range(0, len(items), size):
        yield items[i : i + size]


def delete_devices(session, max_number_of_devices=constant.MAX_DEVICES_PER_DELETE):
    """Delete the first devices found in the IoT Hub registry.

    At most max_number_of_devices are listed, so registries holding more devices need this to be
    run repeatedly. Failures to list devices are raised. Failures to remove them are logged and
    reported as an unsuccessful result.

    :param session: The session to delete with.
    :type session: :class:`simple_iot_certs.session.Session`
    :param int max_number_of_devices: The maximum number of devices to delete. Default value: 1000

    :rtype: :class:`DeletionResult`
    """
    registry = session.create_registry_client()
    devices = registry.get_devices(max_number_of_devices)
    device_ids = [device.device_id for device in devices]
    logger.info("Found {} devices to delete".format(len(device_ids)))

    if not devices:
        return DeletionResult(device_ids, False)

    for batch in _batches(devices, constant.BULK_OPERATION_BATCH_SIZE):
        try:
            result = registry.remove_devices(batch)
        except Exception as e:
            logger.error("Bulk device removal failed: {}".format(e))
            return DeletionResult(device_ids, False)
        if result is not None and result.is_successful is False:
            logger.error("Bulk device removal reported errors: {}".format(result.errors))
            return DeletionResult(device_ids, False)

    return DeletionResult(device_ids, True)
