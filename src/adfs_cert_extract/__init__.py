"""
adfs_cert_extract — AD FS signing certificate extractor.

Downloads the federation metadata of an identity provider, finds the
XML-DSig X509Certificate nodes it embeds, and writes the signing
certificate to {output}/{host}-signing.cer as base64 DER text.

Built on the Railway-Oriented Programming (ROP) helpers in `railway`
for explicit, composable error handling.
"""

__version__ = "0.1.0"
