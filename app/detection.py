from .constants import ALERT_COLOR, RESOLVED_COLOR

STATUS_RESOLVED = 'resolved'
STATUS_FIRING = 'firing'


def is_resolved(status):
    # Comparação exata: "Resolved" continua sendo tratado como alerta
    return status == STATUS_RESOLVED


def pick_color(status, config=None):
    alert_color = config.alert_color if config is not None else ALERT_COLOR
    resolved_color = config.resolved_color if config is not None else RESOLVED_COLOR
    if is_resolved(status):
        return resolved_color
    return alert_color


def severity_label(status):
    if is_resolved(status):
        return 'RESOLVED'
    if (status or '').lower() == STATUS_FIRING:
        return 'FIRING'
    return 'UNKNOWN'
