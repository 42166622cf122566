# --------------------------------------------------------------
# File: __init__.py
# Description: Exposición pública del cifrado con contraseña del paquete crypte.
# --------------------------------------------------------------
"""Inicializa el paquete `crypte` y documenta sus módulos principales."""

__version__ = "0.1.0"

__all__ = [
    "accounts",
    "cipher",
    "cli",
    "config",
    "crypto_kdf",
    "crypto_sym",
    "errors",
    "models",
    "services",
    "settings",
    "storage",
]
