"""
Logging filters
"""

import logging
import re

# /invite/{token}[/...]; host-only /invite/guest/... paths carry no token
INVITE_TOKEN_PATH = re.compile(r"^/invite/(?!guest/)[^/?]+")

def redact_invite_path(path: str) -> str:
    """Replace the invite token in a request path"""
    return INVITE_TOKEN_PATH.sub("/invite/<token>", path)

class InviteTokenFilter(logging.Filter):
    """Redact invite tokens from uvicorn access log lines.

    uvicorn logs ``(client_addr, method, full_path, http_version, status_code)``
    as the record args.
    """

    def filter(self, record: logging.LogRecord) -> bool:
        if isinstance(record.args, tuple) and len(record.args) >= 3:
            args = list(record.args)
            args[2] = redact_invite_path(str(args[2]))
            record.args = tuple(args)
        return True
