# -------------------------------------------------------------------------
# Copyright (c) Microsoft Corporation. All rights reserved.
# Licensed under the MIT License. See License.txt in the project root for
# license information.
# --------------------------------------------------------------------------
"""This module contains tools for working with IoT Hub Connection Strings"""

__all__ = ["ConnectionString"]

CS_DELIMITER = ";"
CS_VAL_SEPARATOR = "="


def _parse_host_name(connection_string):
    """Return the value following the first separator in the first segment of a connection string
    """
    first_segment = connection_string.split(CS_DELIMITER)[0]
    if CS_VAL_SEPARATOR not in first_segment:
        raise ValueError("Invalid Connection String - Unable to parse HostName")
    return first_segment.split(CS_VAL_SEPARATOR, 1)[1]


class ConnectionString(object):
    """An IoT Hub connection string and the hostname it names.

    Segments following the HostName are not validated here. A malformed connection string will
    be rejected later by the service client that consumes it.
    """

    def __init__(self, connection_string):
        """Initializer for ConnectionString

        :param str connection_string: String with connection details provided by Azure
        :raises: ValueError if the HostName cannot be found in the first segment
        """
        self._host_name = _parse_host_name(connection_string)
        self._strrep = connection_string

    @property
    def hostname(self):
        """The IoT Hub hostname, i.e. the value of the first segment (HostName=<host>)"""
        return self._host_name

    def __repr__(self):
        return self._strrep
