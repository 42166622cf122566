# --------------------------------------------------------------
# File: crypto_sym.py
# Description: Primitivas AES-256-CBC con relleno PKCS7 para cifrado simétrico.
# --------------------------------------------------------------
"""Rutinas de cifrado simétrico para proteger datos sensibles."""

from __future__ import annotations

import os
from typing import Optional, Tuple

from cryptography.hazmat.primitives import padding
from cryptography.hazmat.primitives.ciphers import Cipher, algorithms, modes

from crypte.errors import CipherInitError, DecryptionError

BLOCK_SIZE = 16
IV_SIZE = 16
AES_KEY_SIZE = 32


def padded_length(plaintext_length: int) -> int:
    """Longitud del ciphertext para un claro de ``plaintext_length`` bytes.

    PKCS7 siempre añade entre 1 y 16 bytes, incluso con bloques completos.
    """

    return BLOCK_SIZE * (plaintext_length // BLOCK_SIZE) + BLOCK_SIZE


def _build_cipher(key: bytes, iv: bytes) -> Cipher:
    if len(key) != AES_KEY_SIZE or len(iv) != IV_SIZE:
        raise CipherInitError(
            f"Tamaños inválidos para AES-256-CBC: clave={len(key)} iv={len(iv)}"
        )
    try:
        return Cipher(algorithms.AES(key), modes.CBC(iv))
    except ValueError as exc:
        raise CipherInitError(str(exc)) from exc


def aes_cbc_encrypt_with_key(
    key: bytes, plaintext: bytes, iv: Optional[bytes] = None
) -> Tuple[bytes, bytes]:
    """Cifra datos con AES-256-CBC utilizando una clave proporcionada.

    Args:
        key (bytes): Clave simétrica de 256 bits.
        plaintext (bytes): Datos a cifrar; pueden estar vacíos.
        iv (Optional[bytes]): IV de 16 bytes; si falta se genera uno aleatorio.

    Returns:
        Tuple[bytes, bytes]: Ciphertext con relleno PKCS7 e IV utilizado.

    Raises:
        CipherInitError: Si la clave o el IV no tienen el tamaño esperado.

    """

    if iv is None:
        iv = os.urandom(IV_SIZE)
    encryptor = _build_cipher(key, iv).encryptor()
    padder = padding.PKCS7(BLOCK_SIZE * 8).padder()
    padded = padder.update(plaintext) + padder.finalize()
    ciphertext = encryptor.update(padded) + encryptor.finalize()
    return ciphertext, iv


def aes_cbc_decrypt_with_key(key: bytes, iv: bytes, ciphertext: bytes) -> bytes:
    """Descifra datos con AES-256-CBC y retira el relleno PKCS7.

    Args:
        key (bytes): Clave simétrica que protege los datos.
        iv (bytes): Vector de inicialización de 128 bits.
        ciphertext (bytes): Datos cifrados con relleno.

    Returns:
        bytes: Mensaje original en claro.

    Raises:
        CipherInitError: Si la clave o el IV no tienen el tamaño esperado.
        DecryptionError: Si la longitud de bloque o el relleno no son válidos.

    """

    decryptor = _build_cipher(key, iv).decryptor()
    try:
        padded = decryptor.update(ciphertext) + decryptor.finalize()
        unpadder = padding.PKCS7(BLOCK_SIZE * 8).unpadder()
        return unpadder.update(padded) + unpadder.finalize()
    except ValueError as exc:
        raise DecryptionError("No se ha podido descifrar el mensaje.") from exc
