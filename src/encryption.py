#!/usr/bin/env python3
"""
Client IP encryption and request header generation.

The client IP is sent to Context7 encrypted with AES-256-GCM. If the key is
unusable or encryption fails the plain IP is sent instead; a bad key never
fails the request.
"""

import os
import string
from typing import Dict, Optional

from cryptography.hazmat.primitives.ciphers.aead import AESGCM

from .config import ENCRYPTION_KEY_ENV
from .errors import EncryptionError
from .logger import get_logger

DEFAULT_ENCRYPTION_KEY = "000102030405060708090a0b0c0d0e0f101112131415161718191a1b1c1d1e1f"
CLIENT_IP_HEADER = "mcp-client-ip"
NONCE_SIZE = 12
TAG_SIZE = 16

logger = get_logger()


def validate_encryption_key(key: str) -> bool:
    """Return True when the key is exactly 64 hex characters (32 bytes)."""
    return len(key) == 64 and all(c in string.hexdigits for c in key)


def _encrypt(plaintext: str, key: str) -> str:
    try:
        aesgcm = AESGCM(bytes.fromhex(key))
        nonce = os.urandom(NONCE_SIZE)
        sealed = aesgcm.encrypt(nonce, plaintext.encode("utf-8"), None)
    except (ValueError, TypeError) as e:
        raise EncryptionError(str(e)) from e

    # The wire format is nonce followed by ciphertext, without the GCM tag
    ciphertext = sealed[:-TAG_SIZE]
    return (nonce + ciphertext).hex()


def encrypt_client_ip(client_ip: str, encryption_key: Optional[str] = None) -> str:
    """
    Encrypt a client IP address.

    Args:
        client_ip: The client IP address to encrypt
        encryption_key: 64 hex character key. When None, CLIENT_IP_ENCRYPTION_KEY
            is read at call time, falling back to the default key.

    Returns:
        Hex encoded nonce and ciphertext, or the original IP if encryption is not possible
    """
    key = encryption_key
    if key is None:
        key = os.environ.get(ENCRYPTION_KEY_ENV, DEFAULT_ENCRYPTION_KEY)

    if not validate_encryption_key(key):
        logger.warning("Invalid encryption key format. Must be 64 hex characters.")
        return client_ip

    try:
        return _encrypt(client_ip, key)
    except EncryptionError as e:
        logger.warning("Falling back to plain client IP", extra={'extra_data': {'error': str(e)}})
        return client_ip


def generate_headers(
    client_ip: Optional[str] = None,
    api_key: Optional[str] = None,
    extra_headers: Optional[Dict[str, str]] = None,
    encryption_key: Optional[str] = None,
) -> Dict[str, str]:
    """
    Build the headers sent with every Context7 request.

    Args:
        client_ip: Optional client IP, sent encrypted
        api_key: Optional API key, sent as a bearer token
        extra_headers: Additional headers to include
        encryption_key: Key for client IP encryption, see encrypt_client_ip

    Returns:
        Dictionary of headers
    """
    headers = dict(extra_headers or {})

    if client_ip is not None:
        headers[CLIENT_IP_HEADER] = encrypt_client_ip(client_ip, encryption_key)

    if api_key is not None:
        headers["Authorization"] = f"Bearer {api_key}"

    return headers
