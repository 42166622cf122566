# --------------------------------------------------------------
# File: accounts.py
# Description: Persistencia del fichero plano de cuentas (accounts.csv).
# --------------------------------------------------------------
"""Lectura, escritura y análisis de las filas ``nombre,payload``."""

from __future__ import annotations

import logging
import os
from typing import Iterable, List

from crypte.config import ACCOUNTS_FILE
from crypte.models import Account
from crypte.settings import SettingsStore
from crypte.storage import read_text, write_text

logger = logging.getLogger(__name__)


def validate_account_name(name: str) -> str:
    """Comprueba que el nombre pueda guardarse en una fila del fichero.

    Args:
        name (str): Nombre propuesto para la cuenta.

    Returns:
        str: Nombre sin espacios en los extremos.

    Raises:
        ValueError: Si está vacío o contiene comas o saltos de línea.

    """

    cleaned = name.strip()
    if not cleaned:
        raise ValueError("El nombre de la cuenta es obligatorio.")
    if any(char in cleaned for char in ",\r\n"):
        raise ValueError("El nombre de la cuenta no puede contener comas ni saltos de línea.")
    return cleaned


def parse_accounts(content: str) -> List[Account]:
    """Convierte el contenido del fichero en una lista de cuentas.

    Las líneas con menos de dos campos se ignoran; todo lo que sigue a la
    primera coma pertenece al payload.
    """

    accounts: List[Account] = []
    if not content.strip():
        return accounts
    for line in content.splitlines():
        name, sep, payload = line.partition(",")
        if not sep:
            continue
        accounts.append(Account(name=name.strip(), encrypted_password=payload.strip()))
    return accounts


def format_accounts(accounts: Iterable[Account]) -> str:
    """Serializa las cuentas como filas ``nombre,payload`` separadas por ``\\n``."""

    return "\n".join(f"{acc.name},{acc.encrypted_password}" for acc in accounts)


class AccountsStore:
    """Acceso al fichero de cuentas situado en el directorio de almacenamiento."""

    def __init__(self, settings: SettingsStore):
        self.settings = settings

    @property
    def accounts_path(self) -> str:
        return os.path.join(self.settings.storage_path(), ACCOUNTS_FILE)

    def read_accounts_file(self) -> str:
        return read_text(self.accounts_path)

    def write_accounts_file(self, content: str) -> None:
        write_text(content, self.accounts_path)

    def load(self) -> List[Account]:
        return parse_accounts(self.read_accounts_file())

    def save(self, accounts: Iterable[Account]) -> None:
        accounts = list(accounts)
        self.write_accounts_file(format_accounts(accounts))
        logger.info(f"{len(accounts)} cuentas guardadas en {self.accounts_path}")
