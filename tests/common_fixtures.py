# -------------------------------------------------------------------------
# Copyright (c) Microsoft Corporation. All rights reserved.
# Licensed under the MIT License. See License.txt in the project root for
# license information.
# --------------------------------------------------------------------------

import base64
import uuid
import pytest
from msrest.exceptions import HttpOperationError
from azure.iot.hub.models import (
    Device,
    AuthenticationMechanism,
    SymmetricKey,
    X509Thumbprint,
    BulkRegistryOperationResult,
)
from simple_iot_certs.session import Session

"""---Constants---"""

fake_hostname = "beauxbatons.academy-net"
fake_shared_access_key_name = "alohomora"
fake_shared_access_key = "Zm9vYmFy"
fake_connection_string = "HostName={hostname};SharedAccessKeyName={skn};SharedAccessKey={sk}".format(
    hostname=fake_hostname, skn=fake_shared_access_key_name, sk=fake_shared_access_key
)
fake_device_id = "MyPensieve"
fake_other_device_id = "MyTimeTurner"

# SHA-1 fingerprints of the embedded certificates, as reported by
# openssl x509 -in <name>-embedded.crt -noout -fingerprint -sha1
embedded_primary_thumbprint = "F20E3CF85FE63B3980D33A36C174204AA6F8E437"
embedded_secondary_thumbprint = "607CE96A8E74B40583C726BF38642490F88EE07B"


"""----Fakes----"""


class FakeResponse(object):
    def __init__(self, status_code, reason="", text=""):
        self.status_code = status_code
        self.reason = reason
        self.text = text

    def raise_for_status(self):
        pass


def make_http_operation_error(status_code):
    return HttpOperationError(None, FakeResponse(status_code))


class FakeRegistryManager(object):
    """In-memory stand-in for IoTHubRegistryManager.

    Every call is recorded in `calls` as a (method name, args) tuple.
    """

    def __init__(self):
        self.devices = {}
        self.calls = []
        self.bulk_result = None
        self.bulk_error = None

    def _store(self, device_id, status, authentication):
        if device_id in self.devices:
            raise make_http_operation_error(409)
        device = Device(device_id=device_id, status=status, authentication=authentication)
        device.generation_id = "6372" + str(len(self.devices))
        self.devices[device_id] = device
        return device

    def create_device_with_sas(self, device_id, primary_key, secondary_key, status):
        self.calls.append(("create_device_with_sas", (device_id, primary_key, secondary_key, status)))
        symmetric_key = SymmetricKey(
            primary_key=primary_key or base64.b64encode(uuid.uuid4().bytes).decode(),
            secondary_key=secondary_key or base64.b64encode(uuid.uuid4().bytes).decode(),
        )
        authentication = AuthenticationMechanism(
            type="sas",
            symmetric_key=symmetric_key,
            x509_thumbprint=X509Thumbprint(primary_thumbprint=None, secondary_thumbprint=None),
        )
        return self._store(device_id, status, authentication)

    def create_device_with_x509(self, device_id, primary_thumbprint, secondary_thumbprint, status):
        self.calls.append(
            (
                "create_device_with_x509",
                (device_id, primary_thumbprint, secondary_thumbprint, status),
            )
        )
        authentication = AuthenticationMechanism(
            type="selfSigned",
            symmetric_key=SymmetricKey(primary_key=None, secondary_key=None),
            x509_thumbprint=X509Thumbprint(
                primary_thumbprint=primary_thumbprint, secondary_thumbprint=secondary_thumbprint
            ),
        )
        return self._store(device_id, status, authentication)

    def get_device(self, device_id):
        self.calls.append(("get_device", (device_id,)))
        if device_id not in self.devices:
            raise make_http_operation_error(404)
        return self.devices[device_id]

    def get_devices(self, max_number_of_devices=None):
        self.calls.append(("get_devices", (max_number_of_devices,)))
        return list(self.devices.values())[:max_number_of_devices]

    def bulk_create_or_update_devices(self, devices):
        self.calls.append(("bulk_create_or_update_devices", (devices,)))
        if self.bulk_error is not None:
            raise self.bulk_error
        if not devices:
            raise make_http_operation_error(400)
        if self.bulk_result is not None:
            return self.bulk_result
        for device in devices:
            if device.import_mode == "delete":
                self.devices.pop(device.id, None)
        return BulkRegistryOperationResult(is_successful=True, errors=[], warnings=[])

    def add_sas_device(self, device_id):
        device = self.create_device_with_sas(device_id, None, None, "enabled")
        self.calls.pop()
        return device

    def add_x509_device(self, device_id, primary_thumbprint, secondary_thumbprint):
        device = self.create_device_with_x509(
            device_id, primary_thumbprint, secondary_thumbprint, "enabled"
        )
        self.calls.pop()
        return device


class ScriptedInput(object):
    """Callable replacement for input() answering prompts from a list"""

    def __init__(self, answers):
        self.answers = list(answers)
        self.prompts = []

    def __call__(self, prompt=""):
        self.prompts.append(prompt)
        if not self.answers:
            raise EOFError()
        return self.answers.pop(0)


"""----Shared fixtures----"""


@pytest.fixture(scope="function")
def fake_registry_manager():
    return FakeRegistryManager()


@pytest.fixture(scope="function")
def mock_device_client_class(mocker):
    return mocker.MagicMock()


@pytest.fixture(scope="function")
def session(fake_registry_manager, mock_device_client_class):
    return Session(
        fake_connection_string,
        registry_manager_factory=lambda connection_string: fake_registry_manager,
        device_client_class=mock_device_client_class,
    )


@pytest.fixture(scope="function")
def output_lines():
    return []
