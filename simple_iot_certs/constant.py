# -------------------------------------------------------------------------
# Copyright (c) Microsoft Corporation. All rights reserved.
# Licensed under the MIT License. See License.txt in the project root for
# license information.
# --------------------------------------------------------------------------
"""This module defines constants for use across the simple-iot-certs package
"""

VERSION = "1.0.0"

# Optionally, embed the connection string of your IoT Hub's "iothubowner" shared access policy
# here. It looks like this:
# HostName=your-iot-hub-name.azure-devices.net;SharedAccessKeyName=iothubowner;SharedAccessKey=...
DEFAULT_IOTHUB_CONNECTION_STRING = ""
IOTHUB_CONNECTION_STRING_ENV = "IOTHUB_CONNECTION_STRING"

DEVICE_STATUS_ENABLED = "enabled"

# get_devices returns at most 1000 records per call
MAX_DEVICES_PER_DELETE = 1000
# bulk registry operations accept at most 100 devices per request
BULK_OPERATION_BATCH_SIZE = 100

EMBEDDED_RESOURCE_PACKAGE = "simple_iot_certs.resources"
PRIMARY_EMBEDDED_CRT = "primary-embedded.crt"
PRIMARY_EMBEDDED_PFX = "primary-embedded.pfx"
SECONDARY_EMBEDDED_CRT = "secondary-embedded.crt"
SECONDARY_EMBEDDED_PFX = "secondary-embedded.pfx"

TELEMETRY_WIND_SPEED = "100"
TELEMETRY_CONTENT_TYPE = "application/json"
TELEMETRY_CONTENT_ENCODING = "utf-8"
