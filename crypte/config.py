# --------------------------------------------------------------
# File: config.py
# Description: Configuración de rutas de la aplicación a partir del entorno (.env).
# --------------------------------------------------------------
"""Construye la configuración explícita que se inyecta en los almacenes."""

from __future__ import annotations

import os
from typing import Mapping, Optional

from dotenv import load_dotenv
from pydantic import BaseModel

SETTINGS_FILE = "settings.json"
ACCOUNTS_FILE = "accounts.csv"

DEFAULT_CONFIG_DIR = "~/.config/crypte"
DEFAULT_STORAGE_PATH = "~/.link1987/password"


class AppConfig(BaseModel):
    """Rutas base de la aplicación.

    Attributes:
        config_dir (str): Directorio donde se guarda ``settings.json``.
        default_storage_path (str): Directorio de cuentas si no hay ajustes.

    """

    config_dir: str
    default_storage_path: str


def load_config(env: Optional[Mapping[str, str]] = None) -> AppConfig:
    """Lee la configuración de las variables de entorno.

    Args:
        env (Optional[Mapping[str, str]]): Entorno alternativo; si se omite se
            carga ``.env`` y se usa ``os.environ``.

    Returns:
        AppConfig: Configuración con las rutas ya expandidas.

    """

    if env is None:
        load_dotenv()
        env = os.environ

    config_dir = env.get("CRYPTE_CONFIG_DIR") or DEFAULT_CONFIG_DIR
    storage_path = env.get("CRYPTE_STORAGE_PATH") or DEFAULT_STORAGE_PATH
    return AppConfig(
        config_dir=os.path.expanduser(config_dir),
        default_storage_path=os.path.expanduser(storage_path),
    )
