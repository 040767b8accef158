"""
Secret Santa gift exchange backend.

All functionality lives in submodules under ``app``; the ASGI
application is ``secret_santa_api.app.main:app``.
"""

__all__ = []
