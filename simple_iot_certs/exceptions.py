# -------------------------------------------------------------------------
# Copyright (c) Microsoft Corporation. All rights reserved.
# Licensed under the MIT License. See License.txt in the project root for
# license information.
# --------------------------------------------------------------------------
"""Define user-facing exceptions to be shared across the simple-iot-certs package"""


class ConfigurationError(Exception):
    """Represents a failure to obtain the configuration needed to start a session"""

    pass


class CertificateError(Exception):
    """Represents a failure to read or parse a certificate or credential"""

    pass
