import logging

LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"


def _is_meaningful(value):
    if value is None:
        return False
    v = str(value).strip()
    if v == "":
        return False
    return v.lower() not in {"n/a", "none", "null", "unknown", "-"}


def pick_first_nonempty(*candidates):
    for c in candidates:
        if _is_meaningful(c):
            return str(c).strip()
    return None


def extract_real_ip(headers, remote_addr=None):
    """IP real do cliente: True-Client-IP > X-Real-IP > 1º item do X-Forwarded-For."""
    forwarded = headers.get('X-Forwarded-For', '')
    first_forwarded = forwarded.split(',')[0] if forwarded else None
    return pick_first_nonempty(
        headers.get('True-Client-IP'),
        headers.get('X-Real-IP'),
        first_forwarded,
        remote_addr,
    )


def mask_token(path, token):
    # O token do webhook nunca deve aparecer em log
    if not token:
        return path
    return path.replace(token, '***')


def configure_logging(level="INFO"):
    logging.basicConfig(level=getattr(logging, str(level).upper(), logging.INFO), format=LOG_FORMAT)
    # werkzeug loga o path completo (com token) em cada requisição
    logging.getLogger('werkzeug').setLevel(logging.WARNING)
    # urllib3 loga a linha "POST /api/webhooks/<id>/<token>" em DEBUG
    logging.getLogger('urllib3').setLevel(logging.WARNING)
