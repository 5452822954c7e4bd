# -------------------------------------------------------------------------
# Copyright (c) Microsoft Corporation. All rights reserved.
# Licensed under the MIT License. See License.txt in the project root for
# license information.
# --------------------------------------------------------------------------

from setuptools import setup, find_packages
import re

# azure v0.x is not compatible with the azure-iot-* packages this demo depends on
# azure v0.x used to have a __version__ attribute (newer versions don't)
try:
    import azure

    try:
        ver = azure.__version__
        raise Exception(
            "This package is incompatible with azure=={}. ".format(ver)
            + 'Uninstall it with "pip uninstall azure".'
        )
    except AttributeError:
        pass
except ImportError:
    pass


with open("README.md", "r") as fh:
    _long_description = fh.read()


filename = "simple_iot_certs/constant.py"
version = None

with open(filename, "r") as fh:
    if not re.search("\n+VERSION", fh.read()):
        raise ValueError("VERSION  is not defined in constants.")

with open(filename, "r") as fh:
    for line in fh:
        if re.search("^VERSION", line):
            constant, value = line.strip().split("=")
            if not value:
                raise ValueError("Value for VERSION not defined in constants.")
            else:
                # Strip whitespace and quotation marks
                version = str(value.strip(' "'))
            break

setup(
    name="simple-iot-certs",
    version=version,
    description="Interactive demo adding devices to an Azure IoT Hub registry with keys or X509 certificates",
    license="MIT License",
    long_description=_long_description,
    long_description_content_type="text/markdown",
    classifiers=[
        "Development Status :: 4 - Beta",
        "Intended Audience :: Developers",
        "License :: OSI Approved :: MIT License",
        "Programming Language :: Python",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.9",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.11",
    ],
    install_requires=[
        "azure-iot-hub>=2.6.1,<3.0.0",
        "azure-iot-device>=2.12.0,<3.0.0",
        "msrest>=0.6.21",
        "cryptography>=3.4",
    ],
    extras_require={"test": ["pytest", "pytest-mock", "pytest-testdox"]},
    python_requires=">=3.9, <4",
    packages=find_packages(exclude=["tests", "tests.*"]),
    package_data={"simple_iot_certs.resources": ["*.crt", "*.pfx"]},
    entry_points={"console_scripts": ["simple-iot-certs=simple_iot_certs.__main__:run"]},
    zip_safe=False,
)
