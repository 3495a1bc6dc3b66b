import argparse

from app.constants import load_config
from app.controller import create_app
from app.utils import configure_logging


def parse_args(argv=None):
    parser = argparse.ArgumentParser(description="Relay de webhooks Alertmanager -> Discord")
    parser.add_argument('--host', default=None, help='endereço de bind, ex: ":7000" ou "127.0.0.1:7000"')
    return parser.parse_args(argv)


def build_app(argv=None):
    config = load_config()
    args = parse_args(argv)
    if args.host:
        config = config.with_bind_address(args.host)
    configure_logging(config.log_level)
    return create_app(config), config


if __name__ == '__main__':
    app, config = build_app()
    app.run(host=config.host, port=config.port, debug=config.debug, use_reloader=False, threaded=True)
