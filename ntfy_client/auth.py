from __future__ import annotations

import base64
from dataclasses import dataclass


@dataclass(frozen=True)
class Credentials:
    username: str | None = None
    password: str | None = None
    token: str | None = None

    @classmethod
    def basic(cls, username: str, password: str = "") -> Credentials:
        # Empty passwords are valid on ntfy servers.
        return cls(username=username, password=password)

    @classmethod
    def bearer(cls, token: str) -> Credentials:
        return cls(token=token)

    def authorization_header(self) -> str:
        if self.username is not None:
            raw = f"{self.username}:{self.password or ''}".encode("utf-8")
            return "Basic " + base64.b64encode(raw).decode("ascii")
        if self.token is not None:
            return f"Bearer {self.token}"
        raise ValueError("Credentials have no username or token")

    def __str__(self) -> str:
        return self.username or "token user"


def build_headers(user_agent: str, credentials: Credentials | None = None) -> dict[str, str]:
    headers = {"User-Agent": user_agent}
    if credentials is not None:
        headers["Authorization"] = credentials.authorization_header()
    return headers
