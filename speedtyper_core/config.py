import os


class Config:
    # Relay/text server; the text resource and the Socket.IO endpoint share a host
    SERVER_URL = os.environ.get('SPEEDTYPER_SERVER_URL') or 'http://localhost:3000'
    TEXT_PATH = os.environ.get('SPEEDTYPER_TEXT_PATH') or '/text'
    SOCKET_NAMESPACE = os.environ.get('SPEEDTYPER_SOCKET_NAMESPACE') or '/'
    # Text request timeout (seconds)
    HTTP_TIMEOUT_SEC = float(os.environ.get('SPEEDTYPER_HTTP_TIMEOUT_SEC', '5'))
    # Words per display line (current line / next line)
    LINE_LENGTH = int(os.environ.get('SPEEDTYPER_LINE_LENGTH', '5'))
