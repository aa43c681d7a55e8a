"""
Shared test fixtures for the adfs-cert-extract test suite.

Certificates are generated on the fly with cryptography (self-signed EC keys),
and federation metadata documents are assembled around them in the layout
AD FS publishes: one signing KeyDescriptor per certificate.
"""

from __future__ import annotations

import base64
import datetime
from typing import Callable

import pytest
import structlog
from cryptography import x509
from cryptography.hazmat.primitives import hashes
from cryptography.hazmat.primitives.asymmetric import ec
from cryptography.hazmat.primitives.serialization import Encoding
from cryptography.x509.oid import NameOID

XMLDSIG_FRAGMENT_NS = "http://www.w3.org/2000/09/xmldsig#"


@pytest.fixture(autouse=True)
def _reset_structlog():
    """main.configure_structlog binds the current stderr; undo it after every test."""
    yield
    structlog.reset_defaults()


_METADATA_TEMPLATE = """<?xml version="1.0" encoding="utf-8"?>
<EntityDescriptor ID="_6b2b1c3e" entityID="http://adfs.example.com/adfs/services/trust"
    xmlns="urn:oasis:names:tc:SAML:2.0:metadata">
  <RoleDescriptor xsi:type="fed:SecurityTokenServiceType"
      xmlns:xsi="http://www.w3.org/2001/XMLSchema-instance"
      xmlns:fed="http://docs.oasis-open.org/wsfed/federation/200706"
      protocolSupportEnumeration="http://docs.oasis-open.org/wsfed/federation/200706">
{key_descriptors}
  </RoleDescriptor>
  <IDPSSODescriptor protocolSupportEnumeration="urn:oasis:names:tc:SAML:2.0:protocol">
    <SingleSignOnService Binding="urn:oasis:names:tc:SAML:2.0:bindings:HTTP-Redirect"
        Location="https://adfs.example.com/adfs/ls/"/>
  </IDPSSODescriptor>
</EntityDescriptor>
"""

_KEY_DESCRIPTOR_TEMPLATE = """    <KeyDescriptor use="signing">
      <KeyInfo xmlns="{namespace}">
        <X509Data>
          <X509Certificate>{certificate}</X509Certificate>
        </X509Data>
      </KeyInfo>
    </KeyDescriptor>"""


def _self_signed(common_name: str) -> x509.Certificate:
    key = ec.generate_private_key(ec.SECP256R1())
    name = x509.Name([x509.NameAttribute(NameOID.COMMON_NAME, common_name)])
    now = datetime.datetime.now(datetime.UTC)
    return (
        x509.CertificateBuilder()
        .subject_name(name)
        .issuer_name(name)
        .public_key(key.public_key())
        .serial_number(x509.random_serial_number())
        .not_valid_before(now - datetime.timedelta(days=1))
        .not_valid_after(now + datetime.timedelta(days=365))
        .sign(key, hashes.SHA256())
    )


def _der_base64(certificate: x509.Certificate) -> str:
    return base64.b64encode(certificate.public_bytes(Encoding.DER)).decode("ascii")


@pytest.fixture(scope="session")
def signing_certificate() -> x509.Certificate:
    """Self-signed certificate standing in for the AD FS token-signing cert."""
    return _self_signed("ADFS Signing - adfs.example.com")


@pytest.fixture(scope="session")
def rollover_certificate() -> x509.Certificate:
    """A second, distinct certificate (AD FS publishes two during rollover)."""
    return _self_signed("ADFS Signing Rollover - adfs.example.com")


@pytest.fixture(scope="session")
def signing_certificate_b64(signing_certificate: x509.Certificate) -> str:
    return _der_base64(signing_certificate)


@pytest.fixture(scope="session")
def rollover_certificate_b64(rollover_certificate: x509.Certificate) -> str:
    return _der_base64(rollover_certificate)


@pytest.fixture()
def build_metadata() -> Callable[..., str]:
    """
    Return a builder: build_metadata(*certificate_texts, namespace=...) -> XML text.

    Each text becomes one signing KeyDescriptor, in the given order.
    """

    def build(*certificate_texts: str, namespace: str = XMLDSIG_FRAGMENT_NS) -> str:
        key_descriptors = "\n".join(
            _KEY_DESCRIPTOR_TEMPLATE.format(namespace=namespace, certificate=text)
            for text in certificate_texts
        )
        return _METADATA_TEMPLATE.format(key_descriptors=key_descriptors)

    return build
