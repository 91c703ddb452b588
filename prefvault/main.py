"""``prefvault`` command line: read and write settings from a shell."""

from __future__ import annotations

import argparse
import sys
from typing import List, Optional

from prefvault.accessor import Accessor, coerce
from prefvault.constants import APP_NAME, APP_VERSION, DEFAULT_NAMESPACE
from prefvault.errors import PersistenceError
from prefvault.managers.logger import get_logger
from prefvault.managers.store import BACKEND_FACTORIES, StoreHandle
from prefvault.models import AppPreferences

log = get_logger(__name__)

_TYPES: dict[str, type] = {"bool": bool, "int": int, "float": float, "str": str}


def _build_parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(
        prog="prefvault", description="Read and write application settings."
    )
    ap.add_argument("--version", action="version", version=f"{APP_NAME} {APP_VERSION}")
    ap.add_argument("--backend", choices=sorted(BACKEND_FACTORIES), default="json")
    ap.add_argument("--namespace", default=DEFAULT_NAMESPACE,
                    help=f"settings namespace (default: {DEFAULT_NAMESPACE})")
    ap.add_argument("--data-dir", default=None,
                    help="directory holding the settings files (default: ~/.prefvault)")
    sub = ap.add_subparsers(dest="command", required=True)

    p_get = sub.add_parser("get", help="print a setting")
    p_get.add_argument("key")
    p_get.add_argument("--type", choices=list(_TYPES), default="str")
    p_get.add_argument("--default", default=None,
                       help="value printed when the setting is missing or malformed")

    p_set = sub.add_parser("set", help="store a setting")
    p_set.add_argument("key")
    p_set.add_argument("value")
    p_set.add_argument("--type", choices=list(_TYPES), default="str")

    sub.add_parser("show", help="print the application preferences")
    return ap


def _parse_value(ap: argparse.ArgumentParser, text: str, value_type: type):
    try:
        return coerce(text, value_type)
    except ValueError:
        ap.error(f"invalid {value_type.__name__} value: {text!r}")


def main(argv: Optional[List[str]] = None) -> int:
    ap = _build_parser()
    args = ap.parse_args(argv)
    factory = BACKEND_FACTORIES[args.backend](args.namespace, args.data_dir)
    store = StoreHandle(factory)

    if args.command == "show":
        for name, value in AppPreferences(store).as_dict().items():
            print(f"{name:<28}{value}")
        return 0

    value_type = _TYPES[args.type]
    if args.command == "get":
        default = (
            value_type()
            if args.default is None
            else _parse_value(ap, args.default, value_type)
        )
        print(Accessor(default, store=store).get(args.key))
        return 0

    value = _parse_value(ap, args.value, value_type)
    try:
        Accessor(value_type(), store=store).set(args.key, value)
    except PersistenceError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 1
    log.info("%s = %r", args.key, value)
    return 0


if __name__ == "__main__":
    sys.exit(main())
