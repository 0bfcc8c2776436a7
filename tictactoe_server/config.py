import os


class Config:
    HOST = os.environ.get('TTT_HOST') or '0.0.0.0'
    PORT = int(os.environ.get('TTT_PORT', '8080'))
    # ANSI colours in client output; set TTT_COLOR=0 for plain text
    USE_COLOR = os.environ.get('TTT_COLOR', '1') != '0'
    # accept() poll interval so stop() is noticed (seconds)
    ACCEPT_TIMEOUT_SEC = float(os.environ.get('TTT_ACCEPT_TIMEOUT_SEC', '1.0'))
    LISTEN_BACKLOG = int(os.environ.get('TTT_LISTEN_BACKLOG', '5'))
