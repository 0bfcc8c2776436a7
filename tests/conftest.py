import os
import socket
import sys
import threading

import pytest

# Ensure the repo root (containing the `tictactoe_server` package) is on sys.path
CURRENT_DIR = os.path.dirname(__file__)
REPO_ROOT = os.path.abspath(os.path.join(CURRENT_DIR, '..'))
if REPO_ROOT not in sys.path:
    sys.path.insert(0, REPO_ROOT)

from tictactoe_server.config import Config
from tictactoe_server.game_state import GameState
from tictactoe_server.server import GameServer


class TestConfig(Config):
    HOST = '127.0.0.1'
    PORT = 0
    USE_COLOR = False
    ACCEPT_TIMEOUT_SEC = 0.1


class Client:
    """Blocking line client used to drive the server in tests."""

    def __init__(self, address, timeout=5.0):
        self.sock = socket.create_connection(address, timeout=timeout)
        self.file = self.sock.makefile('r', encoding='utf-8', newline='\n')

    def send(self, line):
        self.sock.sendall(f"{line}\n".encode('utf-8'))

    def read_line(self):
        return self.file.readline()

    def read_until(self, text):
        lines = []
        while True:
            line = self.file.readline()
            if not line:
                raise ConnectionError(f"closed before {text!r}; got {lines!r}")
            lines.append(line.rstrip('\n'))
            if text in line:
                return lines

    def close(self):
        try:
            self.sock.shutdown(socket.SHUT_RDWR)
        except OSError:
            pass
        self.file.close()
        self.sock.close()


@pytest.fixture()
def game():
    return GameState()


@pytest.fixture()
def full_game(game):
    game.join('alice')
    game.join('bob')
    return game


@pytest.fixture()
def server():
    srv = GameServer(config=TestConfig)
    srv.bind()
    thread = threading.Thread(target=srv.serve_forever, daemon=True)
    thread.start()
    yield srv
    srv.stop()
    thread.join(timeout=2.0)


@pytest.fixture()
def connect(server):
    clients = []

    def _connect():
        client = Client(server.address)
        clients.append(client)
        return client

    yield _connect
    for client in clients:
        client.close()
