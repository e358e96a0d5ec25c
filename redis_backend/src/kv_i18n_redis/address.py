"""
Redis address specifications.

Two spellings are accepted::

    example.com:23682/1/theplaylist     host[:port][/db][/namespace]
    redis://:secret@example.com:23682/1 standard redis URL, optional /namespace

Omitted parts default to ``localhost``, ``6379``, database ``0`` and no
namespace.
"""

from __future__ import annotations

from dataclasses import dataclass
from urllib.parse import quote, unquote, urlsplit

from kv_i18n.exceptions import InvalidAddressError

DEFAULT_HOST = "localhost"
DEFAULT_PORT = 6379
_URL_SCHEMES = ("redis", "rediss")


def _parse_port(raw: str, spec: str) -> int:
    if not raw:
        return DEFAULT_PORT
    try:
        port = int(raw)
    except ValueError as exc:
        raise InvalidAddressError(f"Port must be an integer in {spec!r}.") from exc
    return port


def _parse_path(path: str, spec: str) -> tuple[int, str | None]:
    """Split ``/db/namespace`` into its parts."""
    raw_db, _, raw_namespace = path.strip("/").partition("/")
    db = 0
    if raw_db:
        try:
            db = int(raw_db)
        except ValueError as exc:
            raise InvalidAddressError(f"Database must be an integer in {spec!r}.") from exc
    return db, (raw_namespace or None)


@dataclass(frozen=True, slots=True)
class RedisAddress:
    """
    One Redis endpoint plus the key namespace used on it.

    Parameters
    ----------
    host:
        DNS name or IP address of the Redis server.
    port:
        TCP port of the Redis server.
    db:
        Logical database number. Redis clusters only support ``0``.
    namespace:
        Optional prefix prepended to every key as ``"{namespace}:"``.
    ssl:
        Connect with TLS (``rediss://`` URLs).
    username, password:
        Optional ACL credentials taken from URLs.
    """

    host: str = DEFAULT_HOST
    port: int = DEFAULT_PORT
    db: int = 0
    namespace: str | None = None
    ssl: bool = False
    username: str | None = None
    password: str | None = None

    def __post_init__(self) -> None:
        """Validate the endpoint at construction time."""
        if not self.host:
            raise InvalidAddressError("RedisAddress.host must be a non-empty string.")
        if not (1 <= int(self.port) <= 65535):
            raise InvalidAddressError("RedisAddress.port must be in range 1..65535.")
        if int(self.db) < 0:
            raise InvalidAddressError("RedisAddress.db must be >= 0.")

    @classmethod
    def parse(cls, spec: str) -> "RedisAddress":
        """
        Parse one address specification.

        Raises
        ------
        InvalidAddressError
            If the specification is empty or a component is malformed.
        """
        text = str(spec).strip()
        if not text:
            raise InvalidAddressError("Redis address specification must be non-empty.")

        if "://" in text:
            parsed = urlsplit(text)
            if parsed.scheme not in _URL_SCHEMES:
                raise InvalidAddressError(
                    f"Unsupported URL scheme {parsed.scheme!r} in {text!r}."
                )
            try:
                port = parsed.port or DEFAULT_PORT
            except ValueError as exc:
                raise InvalidAddressError(f"Invalid port in {text!r}.") from exc
            db, namespace = _parse_path(parsed.path, text)
            return cls(
                host=parsed.hostname or DEFAULT_HOST,
                port=port,
                db=db,
                namespace=namespace,
                ssl=parsed.scheme == "rediss",
                username=unquote(parsed.username) if parsed.username else None,
                password=unquote(parsed.password) if parsed.password else None,
            )

        location, _, path = text.partition("/")
        host, separator, raw_port = location.rpartition(":")
        if not separator:
            host, raw_port = location, ""
        db, namespace = _parse_path(path, text)
        return cls(host=host, port=_parse_port(raw_port, text), db=db, namespace=namespace)

    def to_url(self) -> str:
        """Return a ``redis://`` URL for this endpoint, without the namespace."""
        scheme = "rediss" if self.ssl else "redis"
        credentials = ""
        if self.username or self.password:
            user = quote(self.username or "", safe="")
            secret = quote(self.password or "", safe="")
            credentials = f"{user}:{secret}@" if self.password else f"{user}@"
        return f"{scheme}://{credentials}{self.host}:{self.port}/{self.db}"
