# --------------------------------------------------------------
# File: crypto_kdf.py
# Description: Derivación de claves simétricas a partir de passphrases mediante scrypt.
# --------------------------------------------------------------
"""Funciones de derivación de claves para proteger secretos del usuario."""

from __future__ import annotations

import os
from typing import Any, Dict, Union

from cryptography.exceptions import UnsupportedAlgorithm
from cryptography.hazmat.primitives.kdf.scrypt import Scrypt

from crypte.errors import KeyDerivationError, TextEncodeError

# Constantes de protocolo: cambiarlas rompe la compatibilidad de los payloads.
SCRYPT_N = 2**14
SCRYPT_R = 8
SCRYPT_P = 1
KEY_LENGTH = 32
SALT_SIZE = 16

KDF_PARAMS: Dict[str, Any] = {
    "alg": "scrypt",
    "version": 1,
    "n": SCRYPT_N,
    "r": SCRYPT_R,
    "p": SCRYPT_P,
    "outlen": KEY_LENGTH,
}


def passphrase_bytes(passphrase: Union[bytes, bytearray, str]) -> bytes:
    """Convierte la passphrase a bytes UTF-8 sin normalización Unicode."""

    if isinstance(passphrase, str):
        try:
            return passphrase.encode("utf-8")
        except UnicodeEncodeError as exc:
            raise TextEncodeError("La passphrase no es texto UTF-8 válido.") from exc
    return bytes(passphrase)


def generate_salt() -> bytes:
    """Genera una salt aleatoria de 16 bytes con el CSPRNG del sistema."""

    return os.urandom(SALT_SIZE)


def derive_key(
    passphrase: Union[bytes, bytearray, str],
    salt: bytes,
    *,
    n: int = SCRYPT_N,
    r: int = SCRYPT_R,
    p: int = SCRYPT_P,
    length: int = KEY_LENGTH,
) -> bytes:
    """Deriva una clave de cifrado usando scrypt.

    Args:
        passphrase (bytes | str): Passphrase de entrada del usuario.
        salt (bytes): Salt aleatoria asociada al payload.
        n (int): Coste de CPU/memoria, potencia de dos.
        r (int): Factor de tamaño de bloque.
        p (int): Factor de paralelismo.
        length (int): Longitud en bytes de la clave resultante.

    Returns:
        bytes: Clave simétrica derivada lista para cifrar secretos.

    Raises:
        KeyDerivationError: Si los parámetros son inválidos o el backend no
        soporta scrypt.
        TextEncodeError: Si la passphrase contiene surrogates sueltos.

    """

    secret = passphrase_bytes(passphrase)
    try:
        kdf = Scrypt(salt=salt, length=length, n=n, r=r, p=p)
        return kdf.derive(secret)
    except (ValueError, TypeError, MemoryError, UnsupportedAlgorithm) as exc:
        raise KeyDerivationError(f"No se ha podido derivar la clave: {exc}") from exc
