import json
import logging
from pathlib import Path
from typing import Optional

logger = logging.getLogger(__name__)


class AuthSession:
    """
    Logged-in state for an API client.

    Created once at startup (reading any persisted credential) and handed to
    whatever needs to make authenticated calls. ``logout`` is the teardown.
    """

    def __init__(self, store_path: Optional[Path] = None):
        self.store_path = Path(store_path) if store_path else None
        self.token: Optional[str] = None
        self.user: Optional[dict] = None
        if self.store_path:
            self.load()

    @property
    def is_authenticated(self) -> bool:
        return bool(self.token and self.user)

    def load(self) -> None:
        if not self.store_path or not self.store_path.exists():
            return
        try:
            data = json.loads(self.store_path.read_text(encoding="utf-8"))
        except (OSError, json.JSONDecodeError) as e:
            logger.warning(f"Ignoring unreadable session file {self.store_path}: {e}")
            return
        if data.get("token") and data.get("user"):
            self.token = data["token"]
            self.user = data["user"]

    def login(self, token: str, user: dict) -> None:
        self.token = token
        self.user = user
        if self.store_path:
            self.store_path.parent.mkdir(parents=True, exist_ok=True)
            self.store_path.write_text(
                json.dumps({"token": token, "user": user}), encoding="utf-8"
            )

    def logout(self) -> None:
        self.token = None
        self.user = None
        if self.store_path and self.store_path.exists():
            self.store_path.unlink()

    def auth_headers(self) -> dict:
        return {"Authorization": f"Bearer {self.token}"} if self.token else {}
