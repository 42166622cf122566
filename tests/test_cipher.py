# --------------------------------------------------------------
# File: test_cipher.py
# Description: Pruebas del cifrado con contraseña y del formato salt:iv:ciphertext.
# --------------------------------------------------------------

import re
from concurrent.futures import ThreadPoolExecutor

import pytest

from crypte.cipher import PasswordCipher, decrypt_message, encrypt_message
from crypte.crypto_kdf import derive_key
from crypte.crypto_sym import aes_cbc_encrypt_with_key
from crypte.errors import DecryptionError, TextDecodeError, TextEncodeError
from crypte.models import CipherPayload

KNOWN_PAYLOAD = (
    "82818c21062c68b2c97d56de73d9661c"
    ":94dbb90b35f6a2f2866f3a41e72080e2"
    ":d67c1498bd07be24b68eaf15589d9525"
)


def test_encrypt_decrypt_scenario():
    """Cifra un mensaje de ejemplo y valida su formato y su descifrado.

    Returns:
        None: Las aserciones revisan campos, longitudes y el texto recuperado.
    """
    message = "Hello World! This is a secret message."
    password = "super_secure_password"

    encrypted = encrypt_message(message, password)
    parts = encrypted.split(":")
    assert len(parts) == 3
    assert all(re.fullmatch(r"[0-9a-f]+", part) for part in parts)
    salt, iv, ct = (bytes.fromhex(part) for part in parts)
    assert len(salt) == 16
    assert len(iv) == 16
    assert len(ct) % 16 == 0
    assert len(ct) == 16 * (len(message) // 16) + 16

    assert decrypt_message(encrypted, password) == message


def test_known_vector():
    """Garantiza que el vector de regresión fijo siga descifrando igual.

    Returns:
        None: La aserción compara con el claro conocido.
    """
    assert decrypt_message(KNOWN_PAYLOAD, "123456") == "abcdefg"
    assert decrypt_message(KNOWN_PAYLOAD, b"123456") == "abcdefg"


def test_known_vector_uppercase_hex():
    """Acepta hexadecimal en mayúsculas al leer payloads."""
    assert decrypt_message(KNOWN_PAYLOAD.upper(), "123456") == "abcdefg"


@pytest.mark.parametrize(
    "message",
    [
        "",
        "a",
        "0123456789abcdef",  # bloque exacto
        "contraseña con eñes y acentos: áéíóú",
        "多字节文本 🔐",
        "x" * 1000,
    ],
)
def test_roundtrip(message):
    """Comprueba el ciclo cifrado/descifrado para distintos claros.

    Args:
        message (str): Texto en claro parametrizado.

    Returns:
        None: Las aserciones comparan el claro con el recuperado.
    """
    cipher = PasswordCipher()
    payload = cipher.encrypt(message, "pässwörd")
    assert cipher.decrypt(payload, "pässwörd") == message
    ct = CipherPayload.from_wire(payload).ciphertext
    assert len(ct) == 16 * (len(message.encode("utf-8")) // 16) + 16


def test_empty_message_gives_one_block():
    """Un mensaje vacío produce exactamente un bloque de relleno."""
    payload = encrypt_message("", "pw")
    assert len(CipherPayload.from_wire(payload).ciphertext) == 16
    assert decrypt_message(payload, "pw") == ""


def test_bytes_roundtrip():
    """Permite cifrar y recuperar bytes arbitrarios con decrypt_bytes."""
    cipher = PasswordCipher()
    data = bytes(range(256))
    payload = cipher.encrypt(data, b"\x00\xffbinary-pass")
    assert cipher.decrypt_bytes(payload, b"\x00\xffbinary-pass") == data


def test_encryption_is_not_deterministic():
    """Dos cifrados idénticos producen payloads distintos que descifran igual.

    Returns:
        None: Se comparan salt, IV y ciphertext de ambos payloads.
    """
    first = encrypt_message("Secret", "password123")
    second = encrypt_message("Secret", "password123")
    assert first != second
    p1, p2 = CipherPayload.from_wire(first), CipherPayload.from_wire(second)
    assert p1.salt != p2.salt
    assert p1.iv != p2.iv
    assert p1.salt != p1.iv
    assert decrypt_message(first, "password123") == "Secret"
    assert decrypt_message(second, "password123") == "Secret"


def test_wrong_password():
    """Verifica que una contraseña incorrecta no devuelva el claro.

    Returns:
        None: Se espera un fallo genérico de descifrado.
    """
    encrypted = encrypt_message("Secret", "password123")
    with pytest.raises(DecryptionError):
        decrypt_message(encrypted, "password456")


def test_tampered_ciphertext_fails_or_differs():
    """Un ciphertext alterado nunca devuelve el mensaje original."""
    payload = CipherPayload.from_wire(encrypt_message("Secret message", "pw"))
    flipped = bytes([payload.ciphertext[-1] ^ 0x01])
    tampered = CipherPayload(
        salt=payload.salt,
        iv=payload.iv,
        ciphertext=payload.ciphertext[:-1] + flipped,
    ).to_wire()
    try:
        recovered = decrypt_message(tampered, "pw")
    except DecryptionError:
        return
    assert recovered != "Secret message"


def test_valid_padding_invalid_text_raises_text_decode_error():
    """Relleno válido con bytes no UTF-8 se reporta como TextDecodeError.

    Returns:
        None: Se construye el payload a mano con la misma derivación.
    """
    salt = bytes(16)
    key = derive_key("pw", salt)
    ct, iv = aes_cbc_encrypt_with_key(key, b"\xff\xfe\xfd")
    payload = CipherPayload(salt=salt, iv=iv, ciphertext=ct).to_wire()
    with pytest.raises(TextDecodeError):
        decrypt_message(payload, "pw")
    # TextDecodeError es un DecryptionError genérico para quien llama.
    with pytest.raises(DecryptionError):
        decrypt_message(payload, "pw")
    assert PasswordCipher().decrypt_bytes(payload, "pw") == b"\xff\xfe\xfd"


def test_concurrent_use_of_one_instance():
    """Una instancia compartida puede usarse desde varios hilos."""
    cipher = PasswordCipher()

    def roundtrip(i):
        msg = f"mensaje {i}"
        return cipher.decrypt(cipher.encrypt(msg, f"pw{i}"), f"pw{i}") == msg

    with ThreadPoolExecutor(max_workers=4) as pool:
        assert all(pool.map(roundtrip, range(8)))


def test_lone_surrogates_raise_text_encode_error():
    """Mensajes o passphrases no codificables en UTF-8 usan la taxonomía propia."""
    with pytest.raises(TextEncodeError):
        encrypt_message("hola\udcff", "pw")
    with pytest.raises(TextEncodeError):
        encrypt_message("hola", "pw\udcff")
    with pytest.raises(TextEncodeError):
        decrypt_message(KNOWN_PAYLOAD, "pw\udcff")
