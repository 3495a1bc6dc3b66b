import logging
import time
import uuid

import requests
from flask import Flask, g, request
from werkzeug.exceptions import HTTPException

from .constants import SERVICE_NAME, RelayConfig
from .detection import severity_label
from .errors import RelayError
from .formatters import build_discord_payload, parse_request_body, serialize_payload, validate_alert_batch
from .services import Deadline, build_webhook_url, send_discord_payload
from .utils import extract_real_ip, mask_token

logger = logging.getLogger(__name__)

REQUEST_ID_HEADER = 'X-Request-Id'


def create_app(config=None, session=None):
    config = config or RelayConfig()
    app = Flask(__name__)
    app.config['RELAY'] = config
    # Uma sessão por app: só o reuso de conexões padrão do requests
    app.extensions['discord_session'] = session or requests.Session()

    @app.before_request
    def start_request():
        g.request_id = request.headers.get(REQUEST_ID_HEADER) or uuid.uuid4().hex
        g.real_ip = extract_real_ip(request.headers, request.remote_addr)
        g.started_at = time.monotonic()
        g.deadline = Deadline.after(config.request_timeout_seconds)

    @app.after_request
    def log_request(response):
        response.headers[REQUEST_ID_HEADER] = g.get('request_id', '')
        token = (request.view_args or {}).get('token')
        elapsed_ms = (time.monotonic() - g.get('started_at', time.monotonic())) * 1000
        logger.info(
            f"[{g.get('request_id')}] {request.method} {mask_token(request.path, token)} "
            f"from {g.get('real_ip')} -> {response.status_code} in {elapsed_ms:.1f}ms"
        )
        return response

    @app.errorhandler(Exception)
    def recover(exc):
        if isinstance(exc, HTTPException):
            return exc
        logger.exception(f"[{g.get('request_id')}] Erro inesperado ao processar requisição")
        return '', 500

    @app.route('/health', methods=['GET'])
    def health():
        return {'status': 'ok', 'service': SERVICE_NAME}, 200

    @app.route('/<webhook_id>/<token>', methods=['POST'])
    def relay(webhook_id, token):
        try:
            return handle_webhook(config, app.extensions['discord_session'], webhook_id, token)
        except RelayError as exc:
            logger.warning(f"[{g.request_id}] {type(exc).__name__}: {exc.message} (webhook {webhook_id})")
            return '', exc.status_code

    return app


def handle_webhook(config, session, webhook_id, token):
    batch = parse_request_body(request.get_data())
    alertname = validate_alert_batch(batch)

    if config.debug:
        logger.debug(f"[{g.request_id}] Alert batch recebido: {batch}")

    payload = build_discord_payload(batch, request.args.get(config.pretext_param, ''), config)
    body = serialize_payload(payload)

    url = build_webhook_url(webhook_id, token, config.discord_base_url)
    resp = send_discord_payload(url, body, deadline=g.deadline, session=session)

    logger.info(
        f"[{g.request_id}] {severity_label(batch['status'])} '{alertname}' "
        f"({len(batch['alerts'])} alertas) -> webhook {webhook_id}: {resp.status_code}"
    )
    # Status do Discord repassado sem tradução; corpo da resposta é descartado
    return '', resp.status_code
