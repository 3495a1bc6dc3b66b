import os
import re
from dataclasses import dataclass, replace
from typing import Mapping, Optional, Tuple

# Valores padrão (podem ser sobrescritos por variáveis de ambiente)
DEFAULT_APP_HOST = "0.0.0.0"
DEFAULT_APP_PORT = 7000
DEFAULT_DISCORD_WEBHOOK_BASE_URL = "https://discordapp.com/api/webhooks"
DEFAULT_PRETEXT_PARAM = "pretext"
DEFAULT_REQUEST_TIMEOUT_SECONDS = 60

# Cores do embed: vermelho para firing/desconhecido, verde para resolved
ALERT_COLOR = 0xFF0000
RESOLVED_COLOR = 0x00FF00

SERVICE_NAME = "alertmanager-discord-relay"

_BIND_RE = re.compile(r'^(?:\[(?P<ipv6>[^\]]+)\]|(?P<host>[^:]*)):(?P<port>\d+)$')


def _env_bool(environ: Mapping[str, str], name: str, default: str) -> bool:
    return environ.get(name, default).lower() == "true"


def parse_bind_address(value: str) -> Tuple[str, int]:
    """Converte "host:porta" (formato da flag --host) em (host, porta).

    Host vazio (":7000") significa todas as interfaces.
    """
    match = _BIND_RE.match((value or "").strip())
    if not match:
        raise ValueError(f"endereço de bind inválido: {value!r}")
    host = match.group('ipv6') or match.group('host') or DEFAULT_APP_HOST
    port = int(match.group('port'))
    if not 0 < port < 65536:
        raise ValueError(f"porta fora do intervalo: {port}")
    return host, port


@dataclass(frozen=True)
class RelayConfig:
    host: str = DEFAULT_APP_HOST
    port: int = DEFAULT_APP_PORT
    debug: bool = False
    discord_base_url: str = DEFAULT_DISCORD_WEBHOOK_BASE_URL
    pretext_param: str = DEFAULT_PRETEXT_PARAM
    alert_color: int = ALERT_COLOR
    resolved_color: int = RESOLVED_COLOR
    request_timeout_seconds: float = DEFAULT_REQUEST_TIMEOUT_SECONDS
    log_level: str = "INFO"

    def with_bind_address(self, value: str) -> "RelayConfig":
        host, port = parse_bind_address(value)
        return replace(self, host=host, port=port)


def load_config(environ: Optional[Mapping[str, str]] = None) -> RelayConfig:
    """Monta a configuração a partir do ambiente (os.environ por padrão)."""
    if environ is None:
        environ = os.environ

    debug = _env_bool(environ, "DEBUG_MODE", "False")
    log_level = environ.get("LOG_LEVEL", "DEBUG" if debug else "INFO").upper()

    return RelayConfig(
        host=environ.get("APP_HOST", DEFAULT_APP_HOST),
        port=int(environ.get("APP_PORT", str(DEFAULT_APP_PORT))),
        debug=debug,
        discord_base_url=environ.get("DISCORD_WEBHOOK_BASE_URL", DEFAULT_DISCORD_WEBHOOK_BASE_URL).rstrip('/'),
        pretext_param=environ.get("PRETEXT_PARAM", DEFAULT_PRETEXT_PARAM),
        alert_color=int(environ.get("ALERT_COLOR", str(ALERT_COLOR))),
        resolved_color=int(environ.get("RESOLVED_COLOR", str(RESOLVED_COLOR))),
        request_timeout_seconds=float(environ.get("REQUEST_TIMEOUT_SECONDS", str(DEFAULT_REQUEST_TIMEOUT_SECONDS))),
        log_level=log_level,
    )
