# --------------------------------------------------------------
# File: test_config.py
# Description: Pruebas de la construcción de la configuración desde el entorno.
# --------------------------------------------------------------

import os

from crypte.config import DEFAULT_CONFIG_DIR, DEFAULT_STORAGE_PATH, load_config


def test_load_config_from_explicit_env():
    """Comprueba que un entorno explícito determine las rutas."""
    config = load_config({"CRYPTE_CONFIG_DIR": "/etc/crypte", "CRYPTE_STORAGE_PATH": "/srv/pw"})
    assert config.config_dir == "/etc/crypte"
    assert config.default_storage_path == "/srv/pw"


def test_load_config_defaults_expand_home():
    """Verifica los valores por defecto con el directorio personal expandido."""
    config = load_config({})
    assert config.config_dir == os.path.expanduser(DEFAULT_CONFIG_DIR)
    assert config.default_storage_path == os.path.expanduser(DEFAULT_STORAGE_PATH)
    assert config.default_storage_path.endswith(os.path.join(".link1987", "password"))


def test_load_config_reads_process_env(tmp_path):
    """Sin entorno explícito se usan las variables del proceso (fijadas en conftest)."""
    config = load_config()
    assert config.config_dir == str(tmp_path / "_config")
    assert config.default_storage_path == str(tmp_path / "_data")
