"""
pki_urls — issuance URL configuration for a PKI backend.

Stores the issuing-certificate, CRL distribution point, and OCSP server
URLs that a certificate issuer embeds into every certificate it signs.
A single record lives under one key of an external key-value store.

Built on the Railway-Oriented Programming (ROP) framework for
explicit, composable, functional error handling.
"""

__version__ = "0.1.0"
