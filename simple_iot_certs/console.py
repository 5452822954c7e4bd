# -------------------------------------------------------------------------
# Copyright (c) Microsoft Corporation. All rights reserved.
# Licensed under the MIT License. See License.txt in the project root for
# license information.
# --------------------------------------------------------------------------
"""This module contains the interactive console that drives the provisioning and deletion
workflows. It only reads answers and prints results; all registry and device work happens in
the workflow modules.
"""

import logging
from . import certificates
from .deletion import delete_devices
from .provisioning import provision_device_with_sas, provision_device_with_x509
from .registry import AUTH_KIND_X509

logger = logging.getLogger(__name__)

COMMAND_ADD = "add"
COMMAND_DELETE = "delete"
COMMAND_EXIT = "exit"

COMMAND_PROMPT = "Enter command (add | delete (all) | exit ) > "


def _is_yes(answer):
    return answer.strip().lower().startswith("y")


def _is_no(answer):
    return answer.strip().lower().startswith("n")


def print_banner(output_func=print):
    output_func("")
    output_func("**************************************************")
    output_func("*             Simple Azure IoT Certs             *")
    output_func("**************************************************")
    output_func("")
    output_func("This app demonstrates how to add a device to your Azure IoT Hub's Registry.")
    output_func(
        "Optionally, you can associate X509 certificates with your device's registry entry,"
    )
    output_func("which you can then use for subsequent operations requiring authentication")


def prompt_connection_string(input_func=input, output_func=print):
    """Ask the user for an IoT Hub connection string"""
    output_func("")
    output_func("You need to supply a connection string to your Azure IoT Hub instance!")
    output_func("You can do this in constant.py in DEFAULT_IOTHUB_CONNECTION_STRING,")
    output_func("in the IOTHUB_CONNECTION_STRING environment variable,")
    output_func("supply it as a command line parameter (i.e. simple-iot-certs <connection string>),")
    try:
        return input_func("or enter it here: ")
    except EOFError:
        return ""


def print_missing_connection_string(output_func=print):
    output_func("You can get your Azure IoT Hub connection string from the Azure Portal")
    output_func("at https://portal.azure.com/ and then run this app again")


class ConsoleApp(object):
    """Interactive command loop.

    :param session: The session every command runs with.
    :type session: :class:`simple_iot_certs.session.Session`
    :param input_func: Callable taking a prompt and returning the line entered. Default: input
    :param output_func: Callable printing one line. Default: print
    """

    def __init__(self, session, input_func=input, output_func=print):
        self.session = session
        self._input = input_func
        self._output = output_func
        self.running = False

    def print_hostname(self):
        self._output("********************************************************")
        self._output(" IoT Hub Hostname is " + self.session.hostname)
        self._output("********************************************************")

    def run(self):
        """Read and dispatch commands until the exit command (or end of input) is received"""
        self.running = True
        while self.running:
            try:
                command = self._input(COMMAND_PROMPT)
            except EOFError:
                command = COMMAND_EXIT
            try:
                self.dispatch(command)
            except EOFError:
                logger.info("Input closed while running a command")
                self.dispatch(COMMAND_EXIT)
            except Exception as ex:
                logger.debug("Command failed", exc_info=True)
                self._output("Unexpected error {0}".format(ex))

    def dispatch(self, command):
        """Run a single command

        :param str command: The command as entered. Matched case-insensitively.
        """
        command = command.strip().lower()
        if command == COMMAND_ADD:
            self.add_device()
        elif command == COMMAND_DELETE:
            self.delete_devices()
        elif command == COMMAND_EXIT:
            self._output("Bye!")
            self.running = False
        else:
            self._output("Invalid command.")

    def delete_devices(self):
        self._output("This will delete the first 1000 devices found in the IoT Hub registry.")
        self._output(
            "You will have to run this operation multiple times if you have more than 1000"
        )
        self._output("devices in your IoT Hub registry!")
        confirmation = self._input("Enter y to confirm, anything else to abort> ")
        if not _is_yes(confirmation):
            self._output("Aborting delete")
            return

        result = delete_devices(self.session)
        if result.succeeded:
            self._output("Deletion completed")
        else:
            self._output("No devices to delete")

    def add_device(self):
        self._output("Add a new device")
        device_id = self._input(
            "Enter your new device id or an existing device id to see its device key: "
        ).strip()
        use_cert = self._input(
            "Would you like to associate X509 certificates with your device (y|n)? "
        )

        if not _is_yes(use_cert):
            result = provision_device_with_sas(self.session, device_id)
        else:
            primary, secondary = self._load_certificate_pairs()
            self._output("Locally read Primary X509 Thumbprint " + primary.thumbprint)
            self._output("Locally read Secondary X509 Thumbprint " + secondary.thumbprint)
            result = provision_device_with_x509(self.session, device_id, primary, secondary)

        self._report_provisioning(result)

    def _load_certificate_pairs(self):
        pass_phrase = self.session.pfx_pass_phrase
        self._output(
            "We've embedded primary and secondary certificate files (crt and pfx) into this app"
        )
        self._output("to make this demo easy.  But you can specify your own crt and pfx files.")
        if _is_yes(self._input("Use the embedded certificates (y|n)? ")):
            return certificates.load_embedded_certificate_pairs(pass_phrase)

        primary_crt_file = self._input("Primary certificate CRT filename (i.e. primary.crt): ")
        primary_pfx_file = self._input("Primary certificate PFX filename (i.e. primary.pfx): ")
        primary = certificates.load_local_certificate_pair(
            primary_crt_file.strip(), primary_pfx_file.strip(), pass_phrase
        )

        if _is_no(self._input("Want to provide a secondary certificate (y|n)? ")):
            self._output("OK.  We'll just make your secondary certificate the same as your primary")
            return primary, primary

        secondary_crt_file = self._input(
            "Secondary certificate CRT filename (i.e. secondary.crt): "
        )
        secondary_pfx_file = self._input(
            "Secondary certificate PFX filename (i.e. secondary.pfx): "
        )
        secondary = certificates.load_local_certificate_pair(
            secondary_crt_file.strip(), secondary_pfx_file.strip(), pass_phrase
        )
        return primary, secondary

    def _show_x509_thumbprints(self, device):
        primary = secondary = None
        authentication = device.authentication
        if authentication is not None and authentication.x509_thumbprint is not None:
            primary = authentication.x509_thumbprint.primary_thumbprint
            secondary = authentication.x509_thumbprint.secondary_thumbprint
        self._output(
            "Your certificate thumbprints as retrieved from Azure are: {} {}".format(
                primary, secondary
            )
        )

    def _show_symmetric_keys(self, device):
        primary = secondary = None
        authentication = device.authentication
        if authentication is not None and authentication.symmetric_key is not None:
            primary = authentication.symmetric_key.primary_key
            secondary = authentication.symmetric_key.secondary_key
        self._output(
            "Your symmetric keys as retrieved from Azure are: {} {}".format(primary, secondary)
        )

    def _show_credentials(self, result):
        if result.authentication_kind == AUTH_KIND_X509:
            self._show_x509_thumbprints(result.device)
        else:
            self._show_symmetric_keys(result.device)

    def _report_provisioning(self, result):
        if not result.created:
            self._output("Device with this ID already exists " + result.device_id)
            if result.authentication_kind == AUTH_KIND_X509:
                self._output("Device was registered using X509 certificates")
            else:
                self._output("Device was registered using symmetric keys")
            self._show_credentials(result)
            return

        self._output("Device added " + result.device.device_id)
        self._show_credentials(result)
        self._output("You've added a new device.  We tried to send a telemetry message")
        if result.telemetry_sent:
            self._output("Telemetry message sent!")
        else:
            self._output("Exception upon sending message is {}".format(result.telemetry_error))
        self._output(
            "Azure IoT Hub has associated this unique value (Generation ID) with your device: "
            + str(result.generation_id)
        )
