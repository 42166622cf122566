# --------------------------------------------------------------
# File: errors.py
# Description: Jerarquía de excepciones del cifrado basado en contraseña.
# --------------------------------------------------------------
"""Excepciones locales y no reintentables de la capa criptográfica."""


class CipherError(Exception):
    """Base común de todos los errores de cifrado y descifrado."""


class KeyDerivationError(CipherError):
    """Parámetros de scrypt inválidos o backend sin soporte de scrypt."""


class CipherInitError(CipherError):
    """La clave o el IV no tienen el tamaño que exige AES-256-CBC."""


class PayloadFormatError(CipherError, ValueError):
    """Base de los errores de formato del payload serializado."""


class MalformedPayloadError(PayloadFormatError):
    """El payload no contiene exactamente tres campos separados por ``:``."""


class EncodingError(PayloadFormatError):
    """Algún campo del payload no es hexadecimal válido."""


class InvalidLengthError(PayloadFormatError):
    """La salt o el IV no decodifican a exactamente 16 bytes."""


class DecryptionError(CipherError):
    """Fallo al validar el relleno: passphrase incorrecta o datos corruptos."""


class TextDecodeError(DecryptionError):
    """El relleno era válido pero el resultado no es texto UTF-8."""


class TextEncodeError(CipherError):
    """El mensaje o la passphrase no pueden codificarse como UTF-8."""
