#!/usr/bin/env python3
"""
Start the tic-tac-toe server.

    python -m tictactoe_server --host 0.0.0.0 --port 8080
"""
import argparse
import signal
import sys

from .config import Config
from .server import GameServer


def parse_args(argv=None):
    ap = argparse.ArgumentParser(prog='tictactoe-server',
                                 description='Two-player tic-tac-toe over TCP.')
    ap.add_argument('--host', default=Config.HOST)
    ap.add_argument('--port', type=int, default=Config.PORT)
    ap.add_argument('--no-color', dest='color', action='store_false',
                    default=Config.USE_COLOR, help='send plain text without ANSI colours')
    return ap.parse_args(argv)


def main(argv=None):
    args = parse_args(argv)
    server = GameServer(host=args.host, port=args.port, color=args.color)

    def signal_handler(signum, frame):
        print("\n[Server] Received stop signal...", flush=True)
        server.stop()

    signal.signal(signal.SIGINT, signal_handler)
    signal.signal(signal.SIGTERM, signal_handler)

    try:
        server.bind()
    except OSError as e:
        print(f"[Server] Failed to start listener on {args.host}:{args.port}: {e}", flush=True)
        return 1
    server.serve_forever()
    return 0


if __name__ == '__main__':
    sys.exit(main())
