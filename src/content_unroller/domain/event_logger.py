"""Logger adapter that carries the transaction and document identity of an unroll call."""

from __future__ import annotations

import logging
from typing import Any, MutableMapping


class EventLogger(logging.LoggerAdapter):
    """Attach ``transaction_id`` and ``uuid`` to every record logged for one event."""

    def __init__(self, logger: logging.Logger, transaction_id: str, uuid: str) -> None:
        super().__init__(logger, {"transaction_id": transaction_id, "uuid": uuid})
        self.transaction_id = transaction_id
        self.uuid = uuid

    def process(self, msg: Any, kwargs: MutableMapping[str, Any]) -> tuple[Any, MutableMapping[str, Any]]:
        extra = dict(kwargs.get("extra") or {})
        extra.update(self.extra)
        kwargs["extra"] = extra
        return f"[tid={self.transaction_id} uuid={self.uuid}] {msg}", kwargs
