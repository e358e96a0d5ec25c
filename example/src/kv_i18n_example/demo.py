"""
Runnable demo for the key-value translation backend.

The demo stores a small translation tree for two locales and shows:

* leaf lookups with JSON type preservation
* subtree lookups (one-level flat mapping)
* custom separators and scopes
* locale enumeration
* rejection of lazy values

Run after installing this example package:

    kv-i18n-example --backend redis --address localhost:6379/0/demo
"""

from __future__ import annotations

import argparse
import json
import sys
import uuid
from typing import Any

from kv_i18n import MISSING, UnsupportedValueKindError, create_i18n_backend
from kv_i18n.exceptions import BackendNotAvailableError

_TRANSLATIONS = {
    "en": {
        "messages": {"greeting": "Hello", "farewell": "Bye"},
        "cart": {"items": {"one": "1 item", "other": "%{count} items"}, "limit": 42},
        "date": {"day_names": ["Sunday", "Monday"]},
        "flags": {"beta": True},
    },
    "fr": {
        "messages": {"greeting": "Bonjour", "farewell": "Au revoir"},
    },
}


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="kv-i18n example")
    parser.add_argument("--backend", choices=("memory", "redis"), default="memory")
    parser.add_argument(
        "--address",
        action="append",
        default=[],
        help="Redis address host[:port][/db][/namespace]; repeat for a cluster.",
    )
    parser.add_argument("--namespace", default=f"kv-i18n-demo:{uuid.uuid4().hex[:8]}")
    return parser


def _backend_options(args: argparse.Namespace) -> dict[str, Any]:
    if args.backend == "redis":
        return {"addresses": args.address or ["localhost:6379/0"], "namespace": args.namespace}
    return {}


def _print_step(title: str, payload: Any) -> None:
    print(f"\n=== {title} ===")
    print(json.dumps(payload, indent=2, sort_keys=True, default=repr))


def run_demo(args: argparse.Namespace) -> int:
    i18n = create_i18n_backend(args.backend, **_backend_options(args))
    for locale, tree in _TRANSLATIONS.items():
        i18n.store_translations(locale, tree)

    _print_step(
        "Leaf Lookups",
        {
            "en.messages.greeting": i18n.lookup("en", "messages.greeting"),
            "en.cart.limit": i18n.lookup("en", "limit", scope=["cart"]),
            "en.flags.beta": i18n.lookup("en", "flags.beta"),
            "en.date.day_names": i18n.lookup("en", "date.day_names"),
        },
    )
    _print_step(
        "Subtree Lookups",
        {
            "fr.messages": i18n.lookup("fr", "messages"),
            "en.cart": i18n.lookup("en", "cart"),
            "en|cart|items (separator='|')": i18n.lookup("en", "cart|items", separator="|"),
        },
    )
    _print_step(
        "Missing Translation",
        {"fr.cart.limit is MISSING": i18n.lookup("fr", "cart.limit") is MISSING},
    )
    _print_step("Available Locales", sorted(i18n.available_locales()))

    try:
        i18n.store_translations("en", {"lazy": {"now": lambda: "later"}})
    except UnsupportedValueKindError as exc:
        _print_step("Lazy Value Rejected", str(exc))
    return 0


def main() -> int:
    parser = _build_parser()
    args = parser.parse_args()
    try:
        return run_demo(args)
    except BackendNotAvailableError as exc:
        print(f"Redis backend not available: {exc}", file=sys.stderr)
        print("Install the Redis client library first: pip install redis", file=sys.stderr)
        return 2


if __name__ == "__main__":
    raise SystemExit(main())
