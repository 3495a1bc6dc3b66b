import json

from .detection import pick_color
from .errors import DecodeError, SerializeError, ValidationError

# Campos conhecidos do payload do Alertmanager; o resto é ignorado
_BATCH_STRING_FIELDS = ('version', 'groupKey', 'status', 'receiver', 'externalURL')
_BATCH_MAP_FIELDS = ('groupLabels', 'commonLabels', 'commonAnnotations')
_ALERT_STRING_FIELDS = ('startsAt', 'endsAt', 'generatorURL')
_ALERT_MAP_FIELDS = ('labels', 'annotations')


def _as_string(value, field):
    if value is None:
        return ''
    if not isinstance(value, str):
        raise DecodeError(f"campo '{field}' deveria ser string, veio {type(value).__name__}")
    return value


def _as_string_map(value, field):
    if value is None:
        return {}
    if not isinstance(value, dict):
        raise DecodeError(f"campo '{field}' deveria ser objeto, veio {type(value).__name__}")
    return {key: _as_string(item, f"{field}.{key}") for key, item in value.items()}


def _decode_alert(raw, index):
    if not isinstance(raw, dict):
        raise DecodeError(f"alerts[{index}] deveria ser objeto")
    alert = {}
    for field in _ALERT_STRING_FIELDS:
        alert[field] = _as_string(raw.get(field), f"alerts[{index}].{field}")
    for field in _ALERT_MAP_FIELDS:
        alert[field] = _as_string_map(raw.get(field), f"alerts[{index}].{field}")
    return alert


def decode_alert_batch(raw):
    """Normaliza o JSON recebido do Alertmanager.

    Decodificação tolerante: chaves desconhecidas são descartadas, mas tipos
    errados nas chaves conhecidas geram DecodeError. ``null`` vira vazio.
    """
    if raw is None:
        raw = {}
    if not isinstance(raw, dict):
        raise DecodeError(f"payload deveria ser objeto JSON, veio {type(raw).__name__}")

    batch = {}
    for field in _BATCH_STRING_FIELDS:
        batch[field] = _as_string(raw.get(field), field)
    for field in _BATCH_MAP_FIELDS:
        batch[field] = _as_string_map(raw.get(field), field)

    alerts = raw.get('alerts')
    if alerts is None:
        alerts = []
    if not isinstance(alerts, list):
        raise DecodeError(f"campo 'alerts' deveria ser lista, veio {type(alerts).__name__}")
    batch['alerts'] = [_decode_alert(a, i) for i, a in enumerate(alerts)]
    return batch


def parse_request_body(data):
    """Decodifica bytes do corpo da requisição em um alert batch."""
    try:
        raw = json.loads(data)
    except (ValueError, TypeError, RecursionError) as exc:
        raise DecodeError(f"corpo não é JSON válido: {type(exc).__name__}") from exc
    return decode_alert_batch(raw)


def validate_alert_batch(batch):
    # Só a ausência da chave é inválida; alertname vazio é aceito
    if 'alertname' not in batch.get('groupLabels', {}):
        raise ValidationError("groupLabels.alertname ausente")
    return batch['groupLabels']['alertname']


def render_title(batch):
    group_labels = batch.get('groupLabels', {})
    labels = [
        f"{key} = {group_labels[key]}"
        for key in sorted(k for k in group_labels if k != 'alertname')
    ]
    status = (batch.get('status') or '').upper()
    count = len(batch.get('alerts', []))
    alertname = group_labels.get('alertname', '')
    return f"[{status}:{count}] {alertname} ({', '.join(labels)})"


def render_description(batch):
    lines = []
    for alert in batch.get('alerts', []):
        annotations = alert.get('annotations', {})
        if 'summary' in annotations:
            lines.append(f"- {annotations['summary']}")
    return "\n".join(lines)


def build_embed(batch, config=None):
    return {
        'title': render_title(batch),
        'description': render_description(batch),
        'color': pick_color(batch.get('status'), config),
    }


def build_discord_payload(batch, content=None, config=None):
    # content nunca é omitido nem nulo no payload enviado
    return {
        'content': content or '',
        'embeds': [build_embed(batch, config)],
    }


def serialize_payload(payload):
    try:
        return json.dumps(payload, ensure_ascii=False, allow_nan=False).encode('utf-8')
    except (TypeError, ValueError) as exc:
        raise SerializeError(f"falha ao serializar payload do Discord: {exc}") from exc
