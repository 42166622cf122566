# --------------------------------------------------------------
# File: models.py
# Description: Modelos de datos comunes utilizados por la capa criptográfica y de persistencia.
# --------------------------------------------------------------
"""Modelos Pydantic que encapsulan estructuras de intercambio criptográfico."""

from __future__ import annotations

import binascii
import re

from pydantic import BaseModel, ConfigDict

from crypte.crypto_kdf import SALT_SIZE
from crypte.crypto_sym import IV_SIZE
from crypte.errors import EncodingError, InvalidLengthError, MalformedPayloadError

FIELD_SEPARATOR = ":"
_HEX_FIELD = re.compile(r"(?:[0-9a-fA-F]{2})*")


def _unhex(name: str, value: str) -> bytes:
    """Decodifica un campo hexadecimal estricto (sin espacios ni prefijos)."""

    if not _HEX_FIELD.fullmatch(value):
        raise EncodingError(f"El campo {name} no es hexadecimal válido.")
    return binascii.unhexlify(value)


class CipherPayload(BaseModel):
    """Representa el resultado serializable de un cifrado con passphrase.

    Attributes:
        salt (bytes): Salt de 16 bytes usada en la derivación scrypt.
        iv (bytes): Vector de inicialización de 16 bytes para AES-CBC.
        ciphertext (bytes): Datos cifrados con relleno PKCS7.

    """

    model_config = ConfigDict(frozen=True)

    salt: bytes
    iv: bytes
    ciphertext: bytes

    def to_wire(self) -> str:
        """Serializa el payload como ``salt:iv:ciphertext`` en hex minúscula."""

        return FIELD_SEPARATOR.join(
            [self.salt.hex(), self.iv.hex(), self.ciphertext.hex()]
        )

    @classmethod
    def from_wire(cls, payload: str) -> "CipherPayload":
        """Analiza la representación ``salt:iv:ciphertext``.

        Args:
            payload (str): Cadena serializada producida por :meth:`to_wire`.

        Returns:
            CipherPayload: Payload con los tres campos decodificados.

        Raises:
            MalformedPayloadError: Si no hay exactamente tres campos.
            EncodingError: Si algún campo no es hexadecimal.
            InvalidLengthError: Si la salt o el IV no miden 16 bytes.

        """

        fields = payload.split(FIELD_SEPARATOR)
        if len(fields) != 3:
            raise MalformedPayloadError(
                f"Formato inválido: se esperaban 3 campos salt:iv:ciphertext y hay {len(fields)}."
            )

        salt = _unhex("salt", fields[0])
        iv = _unhex("iv", fields[1])
        ciphertext = _unhex("ciphertext", fields[2])

        if len(salt) != SALT_SIZE:
            raise InvalidLengthError(f"Longitud de salt inválida: {len(salt)} bytes.")
        if len(iv) != IV_SIZE:
            raise InvalidLengthError(f"Longitud de IV inválida: {len(iv)} bytes.")
        return cls(salt=salt, iv=iv, ciphertext=ciphertext)


class AppSettings(BaseModel):
    """Ajustes persistidos de la aplicación.

    Attributes:
        storage_path (str): Directorio donde vive el fichero de cuentas.

    """

    storage_path: str


class Account(BaseModel):
    """Una fila del fichero de cuentas.

    Attributes:
        name (str): Nombre visible de la cuenta.
        encrypted_password (str): Payload serializado o cadena vacía si la
            cuenta no tiene contraseña.

    """

    name: str
    encrypted_password: str = ""
