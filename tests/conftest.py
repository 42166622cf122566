# --------------------------------------------------------------
# File: conftest.py
# Description: Fixtures compartidas para aislar configuración y almacenamiento.
# --------------------------------------------------------------

from typing import Iterator

import pytest

from crypte.config import AppConfig
from crypte.services import Services


@pytest.fixture(autouse=True)
def _isolate_storage(tmp_path, monkeypatch) -> Iterator[None]:
    """Aísla CRYPTE_CONFIG_DIR y CRYPTE_STORAGE_PATH para cada prueba.

    Args:
        tmp_path (Path): Carpeta temporal proporcionada por pytest.
        monkeypatch (pytest.MonkeyPatch): Fixture para ajustar variables de entorno.

    Returns:
        Iterator[None]: Control del fixture autouse durante la ejecución de cada test.
    """
    monkeypatch.setenv("CRYPTE_CONFIG_DIR", str(tmp_path / "_config"))
    monkeypatch.setenv("CRYPTE_STORAGE_PATH", str(tmp_path / "_data"))
    yield
    # tmp_path se limpia automáticamente por pytest


@pytest.fixture
def app_config(tmp_path) -> AppConfig:
    """Configuración explícita apuntando a directorios temporales."""
    return AppConfig(
        config_dir=str(tmp_path / "config"),
        default_storage_path=str(tmp_path / "storage"),
    )


@pytest.fixture
def services(app_config) -> Services:
    """Servicios construidos sobre la configuración temporal."""
    return Services(app_config)
