# -------------------------------------------------------------------------
# Copyright (c) Microsoft Corporation. All rights reserved.
# Licensed under the MIT License. See License.txt in the project root for
# license information.
# --------------------------------------------------------------------------

import json
import pytest
from azure.iot.device import Message
from simple_iot_certs.telemetry import build_telemetry_message, send_telemetry_message
from .common_fixtures import fake_device_id


@pytest.fixture
def mock_device_client(mocker):
    return mocker.MagicMock()


@pytest.mark.describe("build_telemetry_message()")
class TestBuildTelemetryMessage(object):
    @pytest.mark.it("Creates a JSON message with the device id and a fixed wind speed")
    def test_payload(self):
        message = build_telemetry_message(fake_device_id)
        assert isinstance(message, Message)
        assert json.loads(message.data) == {"deviceId": fake_device_id, "windSpeed": "100"}
        assert message.content_type == "application/json"
        assert message.content_encoding == "utf-8"


@pytest.mark.describe("send_telemetry_message()")
class TestSendTelemetryMessage(object):
    @pytest.mark.it("Connects, sends one message and shuts the client down, in that order")
    def test_sends(self, mocker, mock_device_client):
        result = send_telemetry_message(mock_device_client, fake_device_id)

        assert result is None
        method_names = [c[0] for c in mock_device_client.method_calls]
        assert method_names == ["connect", "send_message", "shutdown"]
        message = mock_device_client.send_message.call_args[0][0]
        assert json.loads(message.data)["deviceId"] == fake_device_id

    @pytest.mark.it("Returns the failure, without raising, if connecting fails")
    def test_connect_failure(self, mock_device_client, unexpected_exception):
        mock_device_client.connect.side_effect = unexpected_exception
        result = send_telemetry_message(mock_device_client, fake_device_id)
        assert result is unexpected_exception
        assert mock_device_client.send_message.call_count == 0
        assert mock_device_client.shutdown.call_count == 1

    @pytest.mark.it("Returns the failure, without raising, if sending fails")
    def test_send_failure(self, mock_device_client, unexpected_exception):
        mock_device_client.send_message.side_effect = unexpected_exception
        result = send_telemetry_message(mock_device_client, fake_device_id)
        assert result is unexpected_exception
        assert mock_device_client.shutdown.call_count == 1

    @pytest.mark.it("Does not raise if shutting the client down fails")
    def test_shutdown_failure(self, mock_device_client, unexpected_exception):
        mock_device_client.shutdown.side_effect = unexpected_exception
        assert send_telemetry_message(mock_device_client, fake_device_id) is None
