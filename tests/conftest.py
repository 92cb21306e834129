"""
Shared test fixtures for the conftree test suite.
"""

import pytest

from conftree import parse

POLICY_MAP = """\
policy-map mypolicy_in
 class myservice_service
  police 300000000 1000000 exceed-action policed-dscp-transmit
   set dscp cs1
 class other_service
  police 600000000 1000000 exceed-action policed-dscp-transmit
   set dscp cs2
   command_with_no_args
"""

CERTIFICATE_CHAIN = """\
crypto pki certificate chain TP-self-signed-0123456789
 certificate self-signed 01
  FFFFFFFF FFFFFFFF FFFFFFFF FFFFFFFF FFFFFFFF FFFFFFFF FFFFFFFF FFFFFFFF
  EEEEEEEE EEEEEEEE EEEEEEEE EEEEEEEE EEEEEEEE EEEEEEEE EEEEEEEE EEEEEEEE
  DDDDDDDD DDDDDDDD DDDDDDDD DDDDDDDD DDDDDDDD DDDDDDDD DDDDDDDD DDDDDDDD AAAA
        quit
!
"""

CERTIFICATE_PAYLOAD = " ".join(
    ["FFFFFFFF"] * 8 + ["EEEEEEEE"] * 8 + ["DDDDDDDD"] * 8 + ["AAAA"]
)


@pytest.fixture
def policy_map_text():
    """Nested policy-map configuration in canonical one-space indentation."""
    return POLICY_MAP


@pytest.fixture
def policy_map(policy_map_text):
    """Parsed policy-map document.

    Usage:
        def test_something(policy_map):
            assert policy_map.find("set").line() == "set dscp cs1"
    """
    return parse(policy_map_text)


@pytest.fixture
def certificate_chain_text():
    """Certificate chain with a raw payload closed by an indented quit line."""
    return CERTIFICATE_CHAIN


@pytest.fixture
def certificate_payload():
    """Whitespace-collapsed payload of ``certificate_chain_text``."""
    return CERTIFICATE_PAYLOAD
