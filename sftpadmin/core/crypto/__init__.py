"""Encrypted secret values."""
from .secret import (
    SecretFormat,
    is_encrypted,
    has_decryption_key,
    remove_decryption_key,
    encrypt_data,
    decrypt_data,
    compare_secret,
)

__all__ = [
    'SecretFormat',
    'is_encrypted',
    'has_decryption_key',
    'remove_decryption_key',
    'encrypt_data',
    'decrypt_data',
    'compare_secret',
]
