"""Success/failure envelope returned by every client call."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any


@dataclass
class Result:
    """Outcome of a dashboard call.

    A successful result carries ``data``; a failed one carries ``message``.
    The site listing additionally keeps the raw dashboard markup in ``html``.
    """

    success: bool
    data: Any = None
    message: str | None = None
    html: str | None = None

    @classmethod
    def ok(cls, data: Any) -> "Result":
        return cls(success=True, data=data)

    @classmethod
    def fail(cls, message: str) -> "Result":
        return cls(success=False, message=message)

    def __bool__(self) -> bool:
        return self.success

    def to_dict(self) -> dict[str, Any]:
        """Return the wire shape ``{success, data|message[, html]}``."""
        if not self.success:
            return {"success": False, "message": self.message}
        payload: dict[str, Any] = {"success": True, "data": _plain(self.data)}
        if self.html is not None:
            payload["html"] = self.html
        return payload


def _plain(value: Any) -> Any:
    if isinstance(value, list):
        return [_plain(item) for item in value]
    to_dict = getattr(value, "to_dict", None)
    if callable(to_dict):
        return to_dict()
    return value
