"""
FastAPI application serving translations from a key-value store.

Run several instances against the same Redis namespace, then upload
translations to one instance and read them from another.
"""

from __future__ import annotations

import argparse
import logging
import os
from typing import Any

import uvicorn
from fastapi import FastAPI, HTTPException
from kv_i18n import (
    MISSING,
    KeyValueI18nBackend,
    UnsupportedValueKindError,
    create_i18n_backend,
)

app = FastAPI(title="kv-i18n FastAPI example", version="0.1.0")
_LOGGER = logging.getLogger(__name__)

_i18n: KeyValueI18nBackend | None = None


def _get_env(name: str, default: str) -> str:
    value = os.getenv(name, "").strip()
    return value if value else default


def _get_env_optional(name: str) -> str | None:
    value = os.getenv(name, "").strip()
    return value if value else None


def _parse_int(name: str, default: int) -> int:
    raw = _get_env(name, str(default))
    try:
        return int(raw)
    except ValueError as exc:
        raise RuntimeError(f"Environment variable {name} must be an integer.") from exc


def _parse_addresses(raw_addresses: str) -> list[str]:
    return [entry.strip() for entry in raw_addresses.split(",") if entry.strip()]


def _build_i18n_backend() -> KeyValueI18nBackend:
    backend = _get_env("KV_I18N_BACKEND", "memory").lower()
    if backend == "redis":
        addresses = _parse_addresses(_get_env("KV_I18N_REDIS_ADDRESSES", "localhost:6379/0"))
        namespace = _get_env_optional("KV_I18N_NAMESPACE")
        _LOGGER.info("Using Redis translation store addresses=%s namespace=%s", addresses, namespace)
        return create_i18n_backend("redis", addresses=addresses, namespace=namespace)
    if backend != "memory":
        raise RuntimeError("KV_I18N_BACKEND must be memory or redis.")
    return create_i18n_backend("memory")


def _require_i18n() -> KeyValueI18nBackend:
    if _i18n is None:
        raise HTTPException(status_code=503, detail="Translation backend not started.")
    return _i18n


@app.on_event("startup")
def on_startup() -> None:
    global _i18n
    if _i18n is not None:
        return
    _i18n = _build_i18n_backend()


@app.on_event("shutdown")
def on_shutdown() -> None:
    global _i18n
    i18n = _i18n
    if i18n is None:
        return
    try:
        close = getattr(i18n.store, "close", None)
        if close is not None:
            close()
    finally:
        _i18n = None


@app.get("/locales")
def locales() -> dict[str, Any]:
    return {"locales": sorted(_require_i18n().available_locales())}


@app.put("/translations/{locale}")
def store_translations(locale: str, payload: dict[str, Any]) -> dict[str, Any]:
    data = payload.get("translations")
    if not isinstance(data, dict):
        raise HTTPException(status_code=400, detail="Payload must include object field 'translations'.")
    escape = bool(payload.get("escape", True))
    try:
        _require_i18n().store_translations(locale, data, escape=escape)
    except UnsupportedValueKindError as exc:
        raise HTTPException(status_code=422, detail=str(exc)) from exc
    return {"status": "stored", "locale": locale}


@app.get("/translations/{locale}")
def translations(locale: str) -> dict[str, Any]:
    return {"locale": locale, "translations": _require_i18n().translations(locale)}


@app.get("/translations/{locale}/{key:path}")
def lookup(locale: str, key: str, separator: str | None = None) -> dict[str, Any]:
    value = _require_i18n().lookup(locale, key, separator=separator)
    if value is MISSING:
        raise HTTPException(status_code=404, detail=f"No translation for {locale}.{key}.")
    return {"locale": locale, "key": key, "value": value}


def main(port: int) -> int:
    logging.basicConfig(level=_get_env("KV_I18N_LOG_LEVEL", "INFO").upper())
    host = _get_env("KV_I18N_API_HOST", "0.0.0.0")
    port = _parse_int("KV_I18N_API_PORT", port)
    uvicorn.run("kv_i18n_example.fastapi_app:app", host=host, port=port, reload=False)
    return 0


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="Serve translations over HTTP.")
    parser.add_argument("--port", type=int, default=8000, help="The port number to use")
    args = parser.parse_args()
    raise SystemExit(main(args.port))
