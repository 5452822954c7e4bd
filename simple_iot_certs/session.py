# -------------------------------------------------------------------------
# Copyright (c) Microsoft Corporation. All rights reserved.
# Licensed under the MIT License. See License.txt in the project root for
# license information.
# --------------------------------------------------------------------------
"""This module contains the Session, the context shared by every workflow of the demo"""

import logging
from azure.iot.hub import IoTHubRegistryManager
from azure.iot.device import IoTHubDeviceClient
from .connection_string import ConnectionString
from .registry import RegistryClient

logger = logging.getLogger(__name__)


class Session(object):
    """Holds the IoT Hub connection details resolved at bootstrap.

    A Session is created once and passed into each workflow. It does not cache service clients:
    every call to :meth:`create_registry_client` opens a new registry manager, and device clients
    are created per connection.
    """

    def __init__(
        self,
        connection_string,
        websockets=False,
        use_secondary=False,
        pfx_pass_phrase=None,
        registry_manager_factory=None,
        device_client_class=None,
    ):
        """Initializer for a Session

        :param str connection_string: The IoT Hub connection string (service policy).
        :param bool websockets: Use MQTT over websockets for device connections. Default value: False
        :param bool use_secondary: Authenticate device connections with the secondary key or
            credential instead of the primary one. Default value: False
        :param str pfx_pass_phrase: Pass phrase protecting PFX credentials. Default value: None
        :param registry_manager_factory: Callable taking a connection string and returning a
            registry manager. Default value: IoTHubRegistryManager.from_connection_string
        :param device_client_class: Class providing create_from_symmetric_key and
            create_from_x509_certificate. Default value: IoTHubDeviceClient

        :raises: ValueError if the HostName cannot be parsed from the connection string.
        """
        self.connection_string = ConnectionString(connection_string)
        self.websockets = websockets
        self.use_secondary = use_secondary
        self.pfx_pass_phrase = pfx_pass_phrase
        self._registry_manager_factory = (
            registry_manager_factory or IoTHubRegistryManager.from_connection_string
        )
        self._device_client_class = device_client_class or IoTHubDeviceClient

    @property
    def hostname(self):
        return self.connection_string.hostname

    def create_registry_client(self):
        """Open a new registry client for the IoT Hub of this session.

        :rtype: :class:`simple_iot_certs.registry.RegistryClient`
        """
        logger.debug("Opening registry manager for {}".format(self.hostname))
        registry_manager = self._registry_manager_factory(repr(self.connection_string))
        return RegistryClient(registry_manager)

    def create_device_client_with_symmetric_key(self, device_id, symmetric_key):
        """Create a device client authenticating with a symmetric key.

        :param str device_id: The ID of the device to connect as.
        :param str symmetric_key: The device's symmetric key.
        """
        logger.info("Creating symmetric key device client for {}".format(device_id))
        return self._device_client_class.create_from_symmetric_key(
            symmetric_key=symmetric_key,
            hostname=self.hostname,
            device_id=device_id,
            websockets=self.websockets,
        )

    def create_device_client_with_x509(self, device_id, x509):
        """Create a device client authenticating with an X509 certificate.

        :param str device_id: The ID of the device to connect as.
        :param x509: The certificate and key files to connect with.
        :type x509: :class:`azure.iot.device.X509`
        """
        logger.info("Creating X509 device client for {}".format(device_id))
        return self._device_client_class.create_from_x509_certificate(
            x509=x509, hostname=self.hostname, device_id=device_id, websockets=self.websockets
        )
