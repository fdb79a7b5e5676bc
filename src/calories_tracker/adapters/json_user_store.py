"""JSON file-backed user repository."""

import hashlib
import hmac
import json
import secrets
from dataclasses import dataclass
from datetime import UTC, datetime
from pathlib import Path
from uuid import uuid4

from calories_tracker.domain.models import User
from calories_tracker.services.users import UserRepository

_HASH_ITERATIONS = 200_000


@dataclass
class JsonFileUserRepository(UserRepository):
    """Stores users and the current session pointer in a local JSON file."""

    path: Path

    @classmethod
    def create(cls, path: str) -> "JsonFileUserRepository":
        """Create a repository for the given file path."""
        return cls(path=Path(path))

    def find_by_credentials(self, email: str, password: str) -> User | None:
        """Return the user matching the email and password, if present."""
        row = self._find_row(email)
        if row is None:
            return None
        expected = _hash_password(password, str(row["salt"]))
        if not hmac.compare_digest(expected, str(row["password_hash"])):
            return None
        return _to_user(row)

    def find_by_email(self, email: str) -> User | None:
        """Return the user registered with the email, if present."""
        row = self._find_row(email)
        return _to_user(row) if row is not None else None

    def create_user(self, name: str, email: str, password: str) -> User:
        """Append a user row and return it."""
        data = self._load()
        salt = secrets.token_hex(16)
        row: dict[str, object] = {
            "id": str(uuid4()),
            "name": name,
            "email": email.strip(),
            "salt": salt,
            "password_hash": _hash_password(password, salt),
            "created_at": datetime.now(tz=UTC).isoformat(),
        }
        data["users"].append(row)
        self._save(data)
        return _to_user(row)

    def count_users(self) -> int:
        """Return the number of stored users."""
        return len(self._load()["users"])

    def set_current_user(self, user: User | None) -> None:
        """Store or clear the current user pointer."""
        data = self._load()
        data["current_user_id"] = user.id if user is not None else None
        self._save(data)

    def get_current_user(self) -> User | None:
        """Return the current user, if the pointer is set and valid."""
        data = self._load()
        current_id = data.get("current_user_id")
        if current_id is None:
            return None
        for row in data["users"]:
            if row["id"] == current_id:
                return _to_user(row)
        return None

    def _find_row(self, email: str) -> dict[str, object] | None:
        needle = email.strip().lower()
        for row in self._load()["users"]:
            if str(row["email"]).strip().lower() == needle:
                return row
        return None

    def _load(self) -> dict:
        if not self.path.exists():
            return {"users": [], "current_user_id": None}
        data = json.loads(self.path.read_text(encoding="utf-8"))
        data.setdefault("users", [])
        data.setdefault("current_user_id", None)
        return data

    def _save(self, data: dict) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        tmp_path = self.path.with_suffix(self.path.suffix + ".tmp")
        tmp_path.write_text(json.dumps(data, indent=2), encoding="utf-8")
        tmp_path.replace(self.path)


def _hash_password(password: str, salt: str) -> str:
    digest = hashlib.pbkdf2_hmac(
        "sha256", password.encode("utf-8"), bytes.fromhex(salt), _HASH_ITERATIONS
    )
    return digest.hex()


def _to_user(row: dict[str, object]) -> User:
    return User(id=str(row["id"]), name=str(row["name"]), email=str(row["email"]))
