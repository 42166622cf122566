# --------------------------------------------------------------
# File: services.py
# Description: Servicios de cifrado y gestión de cuentas expuestos a cualquier transporte.
# --------------------------------------------------------------
"""Capa de servicios: recibe y devuelve cadenas para CLI, IPC o HTTP.

Las funciones devuelven tuplas ``(ok, resultado_o_mensaje)`` en lugar de lanzar
excepciones, de modo que el transporte sólo tiene que mostrar el mensaje.
"""

from __future__ import annotations

import logging
from typing import List, Optional, Tuple

from crypte.accounts import AccountsStore, validate_account_name
from crypte.cipher import PasswordCipher
from crypte.config import AppConfig, load_config
from crypte.errors import CipherError, DecryptionError, PayloadFormatError
from crypte.models import Account, AppSettings
from crypte.settings import SettingsStore

logger = logging.getLogger(__name__)

# Mensaje único para no distinguir passphrase incorrecta de datos corruptos.
GENERIC_DECRYPT_ERROR = "Contraseña incorrecta o datos corruptos."


class Services:
    """Agrupa el cifrador y los almacenes construidos a partir de la configuración."""

    def __init__(self, config: Optional[AppConfig] = None, cipher: Optional[PasswordCipher] = None):
        self.config = config or load_config()
        self.cipher = cipher or PasswordCipher()
        self.settings = SettingsStore(self.config)
        self.accounts = AccountsStore(self.settings)

    # --- Cifrado ---

    def encrypt_message(self, message: str, password: str) -> Tuple[bool, str]:
        """Cifra un mensaje con la contraseña maestra.

        Args:
            message (str): Texto en claro.
            password (str): Contraseña maestra.

        Returns:
            Tuple[bool, str]: Indicador de éxito y payload o mensaje de error.

        """

        try:
            return True, self.cipher.encrypt(message, password)
        except CipherError as exc:
            logger.warning(f"Fallo al cifrar: {exc}")
            return False, f"No se ha podido cifrar el mensaje: {exc}"

    def decrypt_message(self, encrypted_data: str, password: str) -> Tuple[bool, str]:
        """Descifra un payload con la contraseña maestra.

        Args:
            encrypted_data (str): Payload ``salt:iv:ciphertext``.
            password (str): Contraseña maestra.

        Returns:
            Tuple[bool, str]: Indicador de éxito y texto o mensaje de error.

        """

        try:
            return True, self.cipher.decrypt(encrypted_data, password)
        except PayloadFormatError as exc:
            logger.warning(f"Payload con formato inválido: {exc}")
            return False, str(exc)
        except DecryptionError:
            logger.warning("Fallo al descifrar el payload.")
            return False, GENERIC_DECRYPT_ERROR
        except CipherError as exc:
            logger.warning(f"Fallo al descifrar: {exc}")
            return False, f"No se ha podido descifrar el mensaje: {exc}"

    # --- Ajustes ---

    def get_settings(self) -> Tuple[bool, Optional[AppSettings], str]:
        """Lee los ajustes vigentes.

        Returns:
            Tuple[bool, Optional[AppSettings], str]: Indicador de éxito, ajustes y
            mensaje de error.

        """

        try:
            return True, self.settings.get_settings(), ""
        except OSError as exc:
            logger.warning(f"Fallo al leer los ajustes: {exc}")
            return False, None, f"No se han podido leer los ajustes: {exc}"

    def save_settings(self, storage_path: str) -> Tuple[bool, str]:
        """Cambia el directorio de almacenamiento del fichero de cuentas."""

        if not storage_path.strip():
            return False, "La ruta de almacenamiento es obligatoria."
        try:
            self.settings.save_settings(AppSettings(storage_path=storage_path.strip()))
        except OSError as exc:
            return False, f"No se han podido guardar los ajustes: {exc}"
        return True, "Ajustes guardados."

    # --- Cuentas ---

    def list_accounts(self) -> Tuple[bool, List[Account], str]:
        """Carga las cuentas del fichero.

        Returns:
            Tuple[bool, List[Account], str]: Indicador de éxito, cuentas y mensaje.

        """

        try:
            return True, self.accounts.load(), ""
        except (OSError, UnicodeDecodeError) as exc:
            logger.warning(f"Fallo al cargar las cuentas: {exc}")
            return False, [], f"No se han podido cargar las cuentas: {exc}"

    def add_account(self, name: str, password: str, master_password: str) -> Tuple[bool, str]:
        """Añade una cuenta cifrando su contraseña con la contraseña maestra.

        Args:
            name (str): Nombre de la cuenta.
            password (str): Contraseña de la cuenta; puede estar vacía.
            master_password (str): Obligatoria si ``password`` no está vacía.

        Returns:
            Tuple[bool, str]: Indicador de éxito y mensaje para la interfaz.

        """

        try:
            name = validate_account_name(name)
        except ValueError as exc:
            return False, str(exc)

        encrypted = ""
        if password:
            if not master_password:
                return False, "La contraseña maestra es obligatoria para cifrar la contraseña."
            ok, encrypted = self.encrypt_message(password, master_password)
            if not ok:
                return False, encrypted

        ok, accounts, msg = self.list_accounts()
        if not ok:
            return False, msg
        accounts.append(Account(name=name, encrypted_password=encrypted))
        try:
            self.accounts.save(accounts)
        except OSError as exc:
            return False, f"No se han podido guardar las cuentas: {exc}"
        return True, f"Cuenta '{name}' añadida."

    def delete_account(self, name: str) -> Tuple[bool, str]:
        """Elimina todas las cuentas con el nombre indicado."""

        name = name.strip()
        ok, accounts, msg = self.list_accounts()
        if not ok:
            return False, msg
        remaining = [acc for acc in accounts if acc.name != name]
        if len(remaining) == len(accounts):
            return False, f"No existe la cuenta '{name}'."
        try:
            self.accounts.save(remaining)
        except OSError as exc:
            return False, f"No se han podido guardar las cuentas: {exc}"
        return True, f"Cuenta '{name}' eliminada."

    def reveal_account(self, name: str, master_password: str) -> Tuple[bool, str]:
        """Descifra la contraseña de la primera cuenta con ese nombre."""

        name = name.strip()
        ok, accounts, msg = self.list_accounts()
        if not ok:
            return False, msg
        account = next((acc for acc in accounts if acc.name == name), None)
        if account is None:
            return False, f"No existe la cuenta '{name}'."
        if not account.encrypted_password:
            return False, "La cuenta no tiene contraseña."
        if not master_password:
            return False, "La contraseña maestra es obligatoria."
        return self.decrypt_message(account.encrypted_password, master_password)
