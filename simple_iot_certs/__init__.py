"""Simple Azure IoT Certs

This package provides an interactive demo that adds devices to an Azure IoT Hub registry using
symmetric keys or X509 certificate thumbprints, and proves each new credential by sending a
telemetry message as the device.
"""

from .session import Session
from .provisioning import ProvisioningResult, provision_device_with_sas, provision_device_with_x509
from .deletion import DeletionResult, delete_devices
from .constant import VERSION

__all__ = [
    "Session",
    "ProvisioningResult",
    "provision_device_with_sas",
    "provision_device_with_x509",
    "DeletionResult",
    "delete_devices",
    "VERSION",
]
