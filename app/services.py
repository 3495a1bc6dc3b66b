import logging
import time

import requests

from .constants import DEFAULT_DISCORD_WEBHOOK_BASE_URL
from .errors import DispatchError

logger = logging.getLogger(__name__)


class Deadline:
    """Prazo da requisição de entrada, repassado para a chamada ao Discord.

    Quando o prazo da requisição original expira, o envio é abortado em vez de
    continuar pendurado.

    Limitação: o tempo restante vira o ``timeout`` do requests, que vale por
    fase (conexão e cada leitura do socket), não para a chamada inteira. Um
    servidor que responda byte a byte pode passar do prazo; o envio só é
    recusado de antemão quando o prazo já expirou.
    """

    def __init__(self, expires_at: float, clock=time.monotonic):
        self.expires_at = expires_at
        self._clock = clock

    @classmethod
    def after(cls, seconds: float, clock=time.monotonic) -> "Deadline":
        return cls(clock() + seconds, clock=clock)

    def remaining(self) -> float:
        return max(0.0, self.expires_at - self._clock())

    @property
    def expired(self) -> bool:
        return self.remaining() <= 0


def build_webhook_url(webhook_id, token, base_url=DEFAULT_DISCORD_WEBHOOK_BASE_URL):
    # id/token repassados como chegaram no path, sem re-encoding
    return f"{base_url.rstrip('/')}/{webhook_id}/{token}"


def send_discord_payload(url, body, deadline=None, session=None):
    if deadline is not None and deadline.expired:
        raise DispatchError("prazo da requisição expirou antes do envio")

    timeout = deadline.remaining() if deadline is not None else None
    http = session or requests

    try:
        resp = http.post(
            url,
            data=body,
            headers={'Content-Type': 'application/json'},
            timeout=timeout,
        )
    except requests.RequestException as exc:
        raise DispatchError(f"falha ao enviar para o Discord: {type(exc).__name__}") from exc

    logger.debug(f"Discord response: {resp.status_code}")
    return resp
