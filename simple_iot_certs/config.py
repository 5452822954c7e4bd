# -------------------------------------------------------------------------
# Copyright (c) Microsoft Corporation. All rights reserved.
# Licensed under the MIT License. See License.txt in the project root for
# license information.
# --------------------------------------------------------------------------
"""This module contains the configuration lookup used to bootstrap a session"""

import logging
import os
from . import constant
from .exceptions import ConfigurationError

logger = logging.getLogger(__name__)


def resolve_connection_string(argument=None, default=None, environ=None, prompt=None):
    """Obtain an IoT Hub connection string.

    Sources are consulted in order: the command line argument, the compiled-in default, the
    IOTHUB_CONNECTION_STRING environment variable and finally the interactive prompt. The first
    non-empty value wins.

    :param str argument: Connection string supplied on the command line. Default value: None
    :param str default: Compiled-in connection string.
        Default value: :data:`constant.DEFAULT_IOTHUB_CONNECTION_STRING`
    :param dict environ: Environment mapping. Default value: :data:`os.environ`
    :param prompt: Callable invoked with no arguments to ask the user for a connection string,
        or None if the user cannot be asked. Default value: None

    :raises: :class:`simple_iot_certs.exceptions.ConfigurationError` if no source provides a
        connection string.

    :returns: The stripped connection string.
    :rtype: str
    """
    if default is None:
        default = constant.DEFAULT_IOTHUB_CONNECTION_STRING
    if environ is None:
        environ = os.environ

    sources = [
        ("command line", lambda: argument),
        ("default", lambda: default),
        ("environment", lambda: environ.get(constant.IOTHUB_CONNECTION_STRING_ENV)),
    ]
    if prompt is not None:
        sources.append(("prompt", prompt))

    for source_name, source in sources:
        value = (source() or "").strip()
        if value:
            logger.debug("Using connection string from {}".format(source_name))
            return value

    raise ConfigurationError("No IoT Hub connection string was supplied")
