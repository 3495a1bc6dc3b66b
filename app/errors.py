"""Erros do relay. Cada um já carrega o status HTTP devolvido ao chamador."""


class RelayError(Exception):
    """Base para falhas terminais de uma requisição (nunca há retry)."""

    status_code = 500

    def __init__(self, message: str | None = None) -> None:
        self.message = message or "relay failed"
        super().__init__(self.message)


class DecodeError(RelayError):
    """Corpo da requisição não é JSON válido ou não tem o formato esperado."""

    status_code = 400


class ValidationError(RelayError):
    """groupLabels sem a chave alertname."""

    status_code = 400


class SerializeError(RelayError):
    status_code = 500


class DispatchError(RelayError):
    """Falha de transporte ao falar com o webhook do Discord."""

    status_code = 500
