# -------------------------------------------------------------------------
# Copyright (c) Microsoft Corporation. All rights reserved.
# Licensed under the MIT License. See License.txt in the project root for
# license information.
# --------------------------------------------------------------------------
"""This module sends the telemetry message confirming that a device credential is accepted"""

import json
import logging
from typing import Optional
from azure.iot.device import Message
from . import constant

logger = logging.getLogger(__name__)


def build_telemetry_message(device_id: str) -> Message:
    """Create the single telemetry message sent after provisioning a device"""
    telemetry_data_point = {"deviceId": device_id, "windSpeed": constant.TELEMETRY_WIND_SPEED}
    message = Message(json.dumps(telemetry_data_point))
    message.content_type = constant.TELEMETRY_CONTENT_TYPE
    message.content_encoding = constant.TELEMETRY_CONTENT_ENCODING
    return message


def send_telemetry_message(device_client, device_id: str) -> Optional[Exception]:
    """Connect a device client, send one telemetry message, then shut the client down.

    Failures to connect or send are logged and returned rather than raised, since they do not
    affect the device record that has already been created.

    :param device_client: A device client that has not been connected yet.
    :type device_client: :class:`azure.iot.device.IoTHubDeviceClient`
    :param str device_id: The ID of the device, included in the payload.

    :returns: None if the message was sent, otherwise the exception that prevented it.
    """
    message = build_telemetry_message(device_id)
    try:
        device_client.connect()
        logger.info("Sending telemetry message for {}".format(device_id))
        device_client.send_message(message)
        logger.info("Telemetry message sent for {}".format(device_id))
        return None
    except Exception as e:
        logger.error("Sending telemetry message for {} failed: {}".format(device_id, e))
        return e
    finally:
        try:
            device_client.shutdown()
        except Exception as e:
            logger.warning("Device client shutdown for {} failed: {}".format(device_id, e))
