"""Book identity and the access grant attached to it."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional

from .credentials import AccessGrant


@dataclass
class Book:
    book_id: str
    grant: Optional[AccessGrant] = field(default=None)

    def attach_grant(self, grant: AccessGrant) -> None:
        if self.grant is not None:
            raise ValueError(f"Book {self.book_id} already has an access grant")
        self.grant = grant

    def cookie_header(self) -> str:
        """
        Render the grant as a Cookie header value.

        Built fresh for every request so concurrent page fetches never share
        a cookie store.
        """
        grant = self.grant or AccessGrant()
        return "; ".join(f"{name}={value}" for name, value in grant.as_cookies().items())
