# --------------------------------------------------------------
# File: settings.py
# Description: Lectura y escritura de los ajustes de la aplicación (settings.json).
# --------------------------------------------------------------
"""Almacén de ajustes con valores por defecto inyectados desde la configuración."""

from __future__ import annotations

import logging
import os

from pydantic import ValidationError

from crypte.config import SETTINGS_FILE, AppConfig
from crypte.models import AppSettings
from crypte.storage import load_json, save_json

logger = logging.getLogger(__name__)


class SettingsStore:
    """Gestiona ``settings.json`` dentro del directorio de configuración."""

    def __init__(self, config: AppConfig):
        self.config = config

    @property
    def settings_path(self) -> str:
        return os.path.join(self.config.config_dir, SETTINGS_FILE)

    def default_settings(self) -> AppSettings:
        return AppSettings(storage_path=self.config.default_storage_path)

    def get_settings(self) -> AppSettings:
        """Devuelve los ajustes guardados o los valores por defecto.

        Returns:
            AppSettings: Ajustes persistidos; si el fichero falta, está
            corrupto o no valida, se devuelven los ajustes por defecto.

        """

        data = load_json(self.settings_path, None)
        if data is None:
            return self.default_settings()
        try:
            return AppSettings.model_validate(data)
        except ValidationError:
            logger.warning(f"Ajustes inválidos en {self.settings_path}; se usan los valores por defecto.")
            return self.default_settings()

    def save_settings(self, settings: AppSettings) -> None:
        """Persiste los ajustes de forma atómica."""

        save_json(settings.model_dump(), self.settings_path)
        logger.info(f"Ajustes guardados en {self.settings_path}")

    def storage_path(self) -> str:
        """Directorio efectivo del fichero de cuentas."""

        return self.get_settings().storage_path
