"""Relay de webhooks Alertmanager -> Discord.

Este pacote contém:
- constants: variáveis de ambiente e RelayConfig
- errors: erros terminais e seus status HTTP
- detection: escolha de cor pelo status do alerta
- formatters: decodificação, validação e montagem do embed
- services: envio para o webhook do Discord
- utils: helpers de log e de requisição
- controller: criação do Flask app e endpoints
"""
