# --------------------------------------------------------------
# File: cipher.py
# Description: Cifrado de mensajes cortos con clave derivada de passphrase (scrypt + AES-256-CBC).
# --------------------------------------------------------------
"""Servicio sin estado que cifra y descifra secretos con una passphrase.

El formato serializado es ``hex(salt):hex(iv):hex(ciphertext)``. La salt y el IV
se generan de nuevo en cada cifrado; la clave se deriva con scrypt
(N=2^14, r=8, p=1, 32 bytes) y nunca se persiste.
"""

from __future__ import annotations

import logging
from typing import Union

from crypte.crypto_kdf import derive_key, generate_salt
from crypte.crypto_sym import aes_cbc_decrypt_with_key, aes_cbc_encrypt_with_key
from crypte.errors import TextDecodeError, TextEncodeError
from crypte.models import CipherPayload

logger = logging.getLogger(__name__)

Secret = Union[bytes, bytearray, str]


def _clear_bytes(data: bytearray) -> None:
    """Sobrescribe con ceros un buffer sensible."""

    for i in range(len(data)):
        data[i] = 0


def _as_bytes(message: Secret) -> bytes:
    if isinstance(message, str):
        try:
            return message.encode("utf-8")
        except UnicodeEncodeError as exc:
            raise TextEncodeError("El mensaje no es texto UTF-8 válido.") from exc
    return bytes(message)


class PasswordCipher:
    """Cifra y descifra mensajes con una clave derivada de la passphrase.

    No guarda estado entre llamadas, por lo que una misma instancia puede
    usarse desde varios hilos a la vez.
    """

    def encrypt(self, message: Secret, passphrase: Secret) -> str:
        """Cifra un mensaje y devuelve el payload serializado.

        Args:
            message (bytes | str): Texto en claro; puede estar vacío.
            passphrase (bytes | str): Passphrase del usuario.

        Returns:
            str: Payload ``salt:iv:ciphertext`` en hexadecimal.

        Raises:
            KeyDerivationError: Si scrypt rechaza los parámetros.
            CipherInitError: Si la clave o el IV tienen un tamaño incorrecto.
            TextEncodeError: Si el mensaje o la passphrase no son UTF-8 válido.

        """

        salt = generate_salt()
        key = bytearray(derive_key(passphrase, salt))
        try:
            ciphertext, iv = aes_cbc_encrypt_with_key(key, _as_bytes(message))
        finally:
            _clear_bytes(key)

        logger.debug(f"Mensaje cifrado ({len(ciphertext)} bytes de ciphertext)")
        return CipherPayload(salt=salt, iv=iv, ciphertext=ciphertext).to_wire()

    def decrypt_bytes(self, payload: str, passphrase: Secret) -> bytes:
        """Descifra un payload y devuelve los bytes en claro sin interpretar.

        Args:
            payload (str): Payload ``salt:iv:ciphertext``.
            passphrase (bytes | str): Passphrase usada al cifrar.

        Returns:
            bytes: Datos originales sin relleno.

        Raises:
            PayloadFormatError: Si el payload está mal formado.
            DecryptionError: Si la passphrase es incorrecta o los datos están
            corruptos.

        """

        parsed = CipherPayload.from_wire(payload)
        key = bytearray(derive_key(passphrase, parsed.salt))
        try:
            return aes_cbc_decrypt_with_key(key, parsed.iv, parsed.ciphertext)
        finally:
            _clear_bytes(key)

    def decrypt(self, payload: str, passphrase: Secret) -> str:
        """Descifra un payload y devuelve el texto original.

        Args:
            payload (str): Payload ``salt:iv:ciphertext``.
            passphrase (bytes | str): Passphrase usada al cifrar.

        Returns:
            str: Mensaje original decodificado como UTF-8.

        Raises:
            PayloadFormatError: Si el payload está mal formado.
            DecryptionError: Si falla el relleno o el texto no es UTF-8
            (``TextDecodeError``).

        """

        plaintext = self.decrypt_bytes(payload, passphrase)
        try:
            return plaintext.decode("utf-8")
        except UnicodeDecodeError as exc:
            raise TextDecodeError("El mensaje descifrado no es texto válido.") from exc


_DEFAULT_CIPHER = PasswordCipher()


def encrypt_message(message: Secret, passphrase: Secret) -> str:
    """Atajo de :meth:`PasswordCipher.encrypt` sobre la instancia por defecto."""

    return _DEFAULT_CIPHER.encrypt(message, passphrase)


def decrypt_message(payload: str, passphrase: Secret) -> str:
    """Atajo de :meth:`PasswordCipher.decrypt` sobre la instancia por defecto."""

    return _DEFAULT_CIPHER.decrypt(payload, passphrase)
