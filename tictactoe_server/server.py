import socket
import threading
import uuid
from typing import Optional, Tuple

from .config import Config
from .errors import CellTaken, GameFull, NotYourTurn, PeerDisconnected, ProtocolError
from .game_state import Draw, GameState, Snapshot, Win
from .protocol import LineSocket, TextRenderer, decode_move


def format_address(addr) -> str:
    if not addr:
        return "unknown"
    return f"{addr[0]}:{addr[1]}"


class GameServer:
    """Accept loop plus one handler thread per seated connection."""

    def __init__(self, host: Optional[str] = None, port: Optional[int] = None,
                 config=Config, game: Optional[GameState] = None,
                 color: Optional[bool] = None):
        self.host = config.HOST if host is None else host
        self.port = config.PORT if port is None else port
        self.config = config
        self.game = game or GameState()
        self.renderer = TextRenderer(color=config.USE_COLOR if color is None else color)
        self.server_socket = None
        self.address: Optional[Tuple[str, int]] = None
        self.running = False

    def bind(self):
        self.server_socket = socket.socket(socket.AF_INET, socket.SOCK_STREAM)
        self.server_socket.setsockopt(socket.SOL_SOCKET, socket.SO_REUSEADDR, 1)
        try:
            self.server_socket.bind((self.host, self.port))
            self.server_socket.listen(self.config.LISTEN_BACKLOG)
        except OSError:
            self.server_socket.close()
            self.server_socket = None
            raise
        self.server_socket.settimeout(self.config.ACCEPT_TIMEOUT_SEC)
        self.address = self.server_socket.getsockname()[:2]
        self.running = True
        print(f"[Server] Listening on {format_address(self.address)}", flush=True)
        return self.address

    def serve_forever(self):
        if self.server_socket is None:
            self.bind()
        try:
            while self.running:
                try:
                    client_socket, addr = self.server_socket.accept()
                except socket.timeout:
                    continue
                except OSError as e:
                    if self.running:
                        print(f"[Server] Accept error: {e}", flush=True)
                    break
                self.accept_client(client_socket, addr)
        finally:
            if self.server_socket:
                self.server_socket.close()
                self.server_socket = None
            print("[Server] Shutting down...", flush=True)

    def stop(self):
        self.running = False
        if self.server_socket:
            try:
                self.server_socket.close()
            except OSError:
                pass
        for seat in self.game.snapshot().seats:
            if seat.conn is not None:
                seat.conn.close()

    def accept_client(self, client_socket, addr) -> Optional[threading.Thread]:
        conn = LineSocket(client_socket)
        session_id = uuid.uuid4().hex
        try:
            result = self.game.join(session_id, conn=conn, address=addr)
        except GameFull:
            self.reject(conn, addr)
            return None

        print(f"[Server] client connected from {format_address(addr)} "
              f"as {result.seat.symbol.value}", flush=True)
        if result.game_ready:
            print("[Game] Both players connected, game starting!", flush=True)
            self.broadcast_state(result.snapshot)
        else:
            self.send(conn, self.renderer.waiting())

        thread = threading.Thread(
            target=self.handle_client,
            args=(conn, session_id, addr),
            daemon=True
        )
        thread.start()
        return thread

    def reject(self, conn: LineSocket, addr):
        print(f"[Server] rejecting client connected from {format_address(addr)}", flush=True)
        self.send(conn, self.renderer.game_full())
        conn.close()

    def handle_client(self, conn: LineSocket, session_id: str, addr):
        try:
            while True:
                line = conn.recv_line()
                self.handle_move(conn, session_id, decode_move(line))
        except PeerDisconnected:
            pass
        except ProtocolError as e:
            print(f"[Game] Protocol error from {format_address(addr)}: {e}", flush=True)
        except (OSError, ValueError) as e:
            # ValueError: the file was closed under us by stop()
            if not conn.closed:
                print(f"[Game] Connection error from {format_address(addr)}: {e}", flush=True)
        finally:
            self.handle_quit(conn, session_id, addr)

    def handle_move(self, conn: LineSocket, session_id: str, pos: int):
        try:
            result = self.game.apply_move(session_id, pos)
        except NotYourTurn:
            self.send(conn, self.renderer.not_your_turn())
            return
        except CellTaken:
            self.send(conn, self.renderer.cell_taken())
            return

        outcome = result.outcome
        if isinstance(outcome, Win):
            self.send(outcome.winner.conn, self.renderer.you_win())
            self.send(outcome.loser.conn, self.renderer.you_lose())
            print(f"[Game] {outcome.winner.symbol.value} wins, "
                  f"score now {outcome.winner.score}", flush=True)
        elif isinstance(outcome, Draw):
            print("[Game] Draw, board reset", flush=True)
        self.broadcast_state(result.snapshot)

    def handle_quit(self, conn: LineSocket, session_id: str, addr):
        result = self.game.leave(session_id)
        conn.close()
        print(f"[Server] client {format_address(addr)} disconnected", flush=True)
        if result is not None and result.remaining is not None:
            self.send(result.remaining.conn, self.renderer.opponent_left())

    def broadcast_state(self, snapshot: Snapshot):
        board = self.renderer.board(snapshot)
        for seat in snapshot.seats:
            text = board + self.renderer.turn_notice(snapshot, seat.session_id)
            self.send(seat.conn, text, version=snapshot.version)

    def send(self, conn: LineSocket, text: str, version: Optional[int] = None) -> bool:
        try:
            if version is None:
                conn.send_text(text)
                return True
            return conn.send_frame(text, version)
        except OSError as e:
            print(f"[Game] Failed to send to client: {e}", flush=True)
            return False
