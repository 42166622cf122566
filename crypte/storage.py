# --------------------------------------------------------------
# File: storage.py
# Description: Utilidades de persistencia atómica para ficheros JSON y de texto.
# --------------------------------------------------------------
"""Funciones auxiliares de entrada/salida para el almacenamiento local."""

from __future__ import annotations

import copy
import json
import os
from typing import Any

__all__ = ["load_json", "save_json", "read_text", "write_text"]


def _ensure_parent_dir(path: str) -> None:
    """Garantiza que exista el directorio padre del archivo de destino."""

    parent = os.path.dirname(path) or "."
    os.makedirs(parent, exist_ok=True)


def _atomic_write(content: str, path: str) -> None:
    _ensure_parent_dir(path)
    tmp_path = f"{path}.tmp"
    with open(tmp_path, "w", encoding="utf-8", newline="") as handler:
        handler.write(content)
    os.replace(tmp_path, path)


def load_json(path: str, default: Any) -> Any:
    """Carga un archivo JSON y devuelve una estructura segura para uso interno.

    Args:
        path (str): Ruta del archivo JSON.
        default (Any): Valor que se devuelve (copiado) si no es accesible.

    Returns:
        Any: Estructura cargada o una copia de ``default``.

    """

    try:
        with open(path, "r", encoding="utf-8") as handler:
            return json.load(handler)
    except (FileNotFoundError, UnicodeDecodeError, json.JSONDecodeError):
        return copy.deepcopy(default)


def save_json(data: Any, path: str) -> None:
    """Guarda un documento JSON legible aplicando escritura atómica."""

    _atomic_write(json.dumps(data, indent=2, ensure_ascii=False), path)


def read_text(path: str) -> str:
    """Lee un archivo de texto; devuelve cadena vacía si no existe.

    Raises:
        OSError: Si el archivo existe pero no puede leerse.
        UnicodeDecodeError: Si el contenido no es UTF-8.

    """

    try:
        with open(path, "r", encoding="utf-8", newline="") as handler:
            return handler.read()
    except FileNotFoundError:
        return ""


def write_text(content: str, path: str) -> None:
    """Escribe un archivo de texto de forma atómica creando sus directorios."""

    _atomic_write(content, path)
