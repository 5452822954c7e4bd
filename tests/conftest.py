# -------------------------------------------------------------------------
# Copyright (c) Microsoft Corporation. All rights reserved.
# Licensed under the MIT License. See License.txt in the project root for
# license information.
# --------------------------------------------------------------------------

import pytest


# These fixtures are shared
from .common_fixtures import (
    fake_registry_manager,
    mock_device_client_class,
    session,
    output_lines,
)


@pytest.fixture
def unexpected_exception():
    class UnexpectedException(Exception):
        pass

    e = UnexpectedException()
    return e
