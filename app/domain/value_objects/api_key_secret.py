"""Value Object ApiKeySecret - credencial en texto plano y su hash."""

import hashlib
import secrets
from dataclasses import dataclass

DEFAULT_PREFIX = "jgr_"
VISIBLE_PREFIX_LENGTH = 12


def hash_secret(value: str) -> str:
    """Hash SHA-256 (hex) de un secreto; lo único que se persiste."""
    return hashlib.sha256(value.encode()).hexdigest()


@dataclass(frozen=True)
class ApiKeySecret:
    """
    Llave de API recién generada.

    `plaintext` se entrega una sola vez al emitirla y nunca se almacena;
    `hash` y `prefix` son los únicos valores persistidos.
    """

    plaintext: str

    @property
    def hash(self) -> str:
        return hash_secret(self.plaintext)

    @property
    def prefix(self) -> str:
        """Prefijo visible: "jgr_" + 8 caracteres."""
        return self.plaintext[:VISIBLE_PREFIX_LENGTH]

    def __repr__(self) -> str:
        return f"ApiKeySecret(prefix={self.prefix!r})"

    @classmethod
    def generate(cls, prefix: str = DEFAULT_PREFIX) -> "ApiKeySecret":
        return cls(plaintext=f"{prefix}{secrets.token_hex(32)}")
