"""
Client-side session state.

The access token lives in a ClientSession, which delegates persistence to a
TokenStore. Swap the store to keep the token in memory, in a file, or
anywhere else that can get/set/clear a string.
"""
import json
import logging
from pathlib import Path
from typing import Optional, Protocol

logger = logging.getLogger("uvicorn.error")


class TokenStore(Protocol):
    def get_token(self) -> Optional[str]: ...

    def set_token(self, token: str) -> None: ...

    def clear_token(self) -> None: ...


class MemoryTokenStore:
    def __init__(self, token: Optional[str] = None):
        self._token = token

    def get_token(self) -> Optional[str]:
        return self._token

    def set_token(self, token: str) -> None:
        self._token = token

    def clear_token(self) -> None:
        self._token = None


class FileTokenStore:
    """Keeps the token in a small JSON file ({"access_token": "..."})."""

    def __init__(self, path: str | Path):
        self.path = Path(path).expanduser()

    def get_token(self) -> Optional[str]:
        if not self.path.exists():
            return None
        try:
            data = json.loads(self.path.read_text(encoding="utf-8"))
        except (OSError, ValueError) as exc:
            logger.warning("[client] unreadable token file %s: %s", self.path, exc)
            return None
        token = data.get("access_token") if isinstance(data, dict) else None
        return token or None

    def set_token(self, token: str) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.path.write_text(json.dumps({"access_token": token}), encoding="utf-8")

    def clear_token(self) -> None:
        self.path.unlink(missing_ok=True)


class ClientSession:
    """Current login state of one client."""

    def __init__(self, store: Optional[TokenStore] = None):
        self.store: TokenStore = store if store is not None else MemoryTokenStore()

    @property
    def token(self) -> Optional[str]:
        return self.store.get_token()

    @property
    def is_authenticated(self) -> bool:
        return bool(self.store.get_token())

    def start(self, token: str) -> None:
        self.store.set_token(token)

    def end(self) -> None:
        self.store.clear_token()

    def auth_headers(self) -> dict[str, str]:
        token = self.store.get_token()
        return {"Authorization": f"Bearer {token}"} if token else {}
