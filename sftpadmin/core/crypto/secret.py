"""
Encrypted secret values.

The server never returns secrets such as an S3 access secret in
plaintext. It stores them AES-GCM encrypted as::

    $aes$<hex key>$<hex nonce+ciphertext+tag>

Split on ``$`` this gives 4 parts: the embedded key can be removed,
leaving the 3 part form ``$aes$<payload>`` that the API answers with.

``encrypt_data`` and ``decrypt_data`` build and open such values, for
example to prepare users that already carry an encrypted secret.
"""
import binascii
from typing import List

from Crypto.Cipher import AES
from Crypto.Random import get_random_bytes

from ..exceptions import MismatchKind, UserMismatchError


class SecretFormat:
    """Constants of the encrypted secret format."""
    
    PREFIX = '$aes$'
    SEPARATOR = '$'
    # '', 'aes', key, payload
    PARTS_WITH_KEY = 4
    # '', 'aes', payload
    PARTS_WITHOUT_KEY = 3
    KEY_SIZE = 16
    NONCE_SIZE = 12
    TAG_SIZE = 16
    
    @classmethod
    def parts(cls, value: str) -> List[str]:
        """Splits a value on the separator."""
        return value.split(cls.SEPARATOR)


def is_encrypted(value: str) -> bool:
    """Checks if value looks like an encrypted secret, with or without key."""
    if not value.startswith(SecretFormat.PREFIX):
        return False
    return len(SecretFormat.parts(value)) in (
        SecretFormat.PARTS_WITH_KEY, SecretFormat.PARTS_WITHOUT_KEY
    )


def has_decryption_key(value: str) -> bool:
    """Checks if value is encrypted and still embeds its decryption key."""
    return (value.startswith(SecretFormat.PREFIX)
            and len(SecretFormat.parts(value)) == SecretFormat.PARTS_WITH_KEY)


def remove_decryption_key(value: str) -> str:
    """Drops the embedded key from a 4 part value, other values are returned as is."""
    parts = SecretFormat.parts(value)
    if len(parts) == SecretFormat.PARTS_WITH_KEY:
        return f"${parts[1]}${parts[3]}"
    return value


def encrypt_data(data: str) -> str:
    """
    Encrypts data with a fresh random key.
    
    Returns:
        A 4 part ``$aes$<key>$<payload>`` value
    """
    key = binascii.hexlify(get_random_bytes(SecretFormat.KEY_SIZE)).decode()
    nonce = get_random_bytes(SecretFormat.NONCE_SIZE)
    cipher = AES.new(key.encode(), AES.MODE_GCM, nonce=nonce)
    ciphertext, tag = cipher.encrypt_and_digest(data.encode('utf-8'))
    payload = binascii.hexlify(nonce + ciphertext + tag).decode()
    return f"{SecretFormat.PREFIX}{key}${payload}"


def decrypt_data(value: str) -> str:
    """
    Decrypts a value produced by ``encrypt_data``.
    
    Raises:
        ValueError: Value is not encrypted, has no key or fails authentication
    """
    if not has_decryption_key(value):
        raise ValueError("value is not an encrypted secret with decryption key")
    _, _, key, payload = SecretFormat.parts(value)
    try:
        raw = binascii.unhexlify(payload)
    except binascii.Error as e:
        raise ValueError(f"invalid encrypted payload: {e}") from e
    if len(raw) < SecretFormat.NONCE_SIZE + SecretFormat.TAG_SIZE:
        raise ValueError("encrypted payload too short")
    nonce = raw[:SecretFormat.NONCE_SIZE]
    ciphertext = raw[SecretFormat.NONCE_SIZE:-SecretFormat.TAG_SIZE]
    tag = raw[-SecretFormat.TAG_SIZE:]
    cipher = AES.new(key.encode(), AES.MODE_GCM, nonce=nonce)
    return cipher.decrypt_and_verify(ciphertext, tag).decode('utf-8')


def compare_secret(expected: str, actual: str, label: str = 'S3') -> None:
    """
    Checks that ``actual`` is a valid server representation of ``expected``.
    
    Plaintext is never compared to ciphertext:
    
    - expected with embedded key: actual must be expected without the key
    - otherwise actual must be encrypted without key; when expected has
      the same shape the two must be identical, else any well formed
      value is accepted since the server picks a new nonce
    
    Raises:
        UserMismatchError: with kind SECRET
    """
    if not expected:
        if expected != actual:
            raise UserMismatchError(MismatchKind.SECRET, f"{label} access secret mismatch")
        return
    
    expected_parts = SecretFormat.parts(expected)
    if has_decryption_key(expected):
        expected = remove_decryption_key(expected)
        if expected != actual:
            raise UserMismatchError(
                MismatchKind.SECRET,
                f"{label} access secret mismatch, expected: {expected}"
            )
        return
    
    if not is_encrypted(actual) or has_decryption_key(actual):
        raise UserMismatchError(MismatchKind.SECRET, f"invalid {label} access secret")
    if len(SecretFormat.parts(actual)) == len(expected_parts) and expected != actual:
        raise UserMismatchError(MismatchKind.SECRET, f"{label} encrypted access secret mismatch")
