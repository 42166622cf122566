# --------------------------------------------------------------
# File: cli.py
# Description: Interfaz de línea de comandos sobre la capa de servicios.
# --------------------------------------------------------------
"""Punto de entrada ``crypte``: cifrado, descifrado, ajustes y cuentas."""

from __future__ import annotations

import argparse
import getpass
import logging
import sys
from typing import List, Optional

from crypte import __version__
from crypte.services import Services


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="crypte",
        description="Cifrado de secretos con contraseña (scrypt + AES-256-CBC).",
    )
    parser.add_argument("--verbose", "-v", action="store_true", help="Activa el registro DEBUG")
    parser.add_argument("--version", action="version", version=f"crypte {__version__}")
    commands = parser.add_subparsers(dest="command", required=True)

    enc = commands.add_parser("encrypt", help="Cifra un mensaje")
    enc.add_argument("message", nargs="?", help="Mensaje; si se omite se lee de stdin")
    enc.add_argument("--password", "-p", help="Contraseña maestra")

    dec = commands.add_parser("decrypt", help="Descifra un payload salt:iv:ciphertext")
    dec.add_argument("payload", nargs="?", help="Payload; si se omite se lee de stdin")
    dec.add_argument("--password", "-p", help="Contraseña maestra")

    settings = commands.add_parser("settings", help="Consulta o cambia los ajustes")
    settings_cmds = settings.add_subparsers(dest="action", required=True)
    settings_cmds.add_parser("show", help="Muestra el directorio de almacenamiento")
    set_storage = settings_cmds.add_parser("set-storage", help="Cambia el directorio de almacenamiento")
    set_storage.add_argument("path")

    accounts = commands.add_parser("accounts", help="Gestiona el fichero de cuentas")
    account_cmds = accounts.add_subparsers(dest="action", required=True)
    account_cmds.add_parser("list", help="Lista las cuentas")
    add = account_cmds.add_parser("add", help="Añade una cuenta")
    add.add_argument("name")
    add.add_argument("--account-password", "-a", default=None, help="Contraseña de la cuenta")
    add.add_argument("--password", "-p", help="Contraseña maestra")
    show = account_cmds.add_parser("show", help="Descifra la contraseña de una cuenta")
    show.add_argument("name")
    show.add_argument("--password", "-p", help="Contraseña maestra")
    delete = account_cmds.add_parser("delete", help="Elimina una cuenta")
    delete.add_argument("name")
    return parser


def _master_password(args: argparse.Namespace) -> str:
    if args.password is not None:
        return args.password
    return getpass.getpass("Contraseña maestra: ")


def _read_input(value: Optional[str]) -> str:
    if value is not None:
        return value
    return sys.stdin.read().rstrip("\n")


def _report(ok: bool, message: str) -> int:
    if ok:
        print(message)
        return 0
    print(message, file=sys.stderr)
    return 1


def _run_accounts(args: argparse.Namespace, services: Services) -> int:
    if args.action == "list":
        ok, accounts, msg = services.list_accounts()
        if not ok:
            return _report(False, msg)
        for acc in accounts:
            marker = "*" if acc.encrypted_password else "-"
            print(f"{marker} {acc.name}")
        return 0
    if args.action == "add":
        account_password = args.account_password
        if account_password is None:
            account_password = getpass.getpass("Contraseña de la cuenta (vacía para ninguna): ")
        master = _master_password(args) if account_password else ""
        return _report(*services.add_account(args.name, account_password, master))
    if args.action == "show":
        return _report(*services.reveal_account(args.name, _master_password(args)))
    return _report(*services.delete_account(args.name))


def main(argv: Optional[List[str]] = None, services: Optional[Services] = None) -> int:
    """Ejecuta la CLI y devuelve el código de salida.

    Args:
        argv (Optional[List[str]]): Argumentos; por defecto ``sys.argv[1:]``.
        services (Optional[Services]): Servicios ya configurados (útil en tests).

    Returns:
        int: 0 si la operación tuvo éxito, 1 en caso contrario.

    """

    args = _build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    services = services or Services()

    if args.command == "encrypt":
        message = _read_input(args.message)
        return _report(*services.encrypt_message(message, _master_password(args)))
    if args.command == "decrypt":
        payload = _read_input(args.payload).strip()
        return _report(*services.decrypt_message(payload, _master_password(args)))
    if args.command == "settings":
        if args.action == "show":
            ok, settings, msg = services.get_settings()
            return _report(ok, settings.storage_path if ok else msg)
        return _report(*services.save_settings(args.path))
    return _run_accounts(args, services)


if __name__ == "__main__":
    sys.exit(main())
