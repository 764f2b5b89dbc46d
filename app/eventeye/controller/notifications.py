import logging
from dataclasses import dataclass, field, asdict
from typing import List

logger = logging.getLogger(__name__)


@dataclass
class Notice:
    level: str  # success, error
    message: str


@dataclass
class Notifier:
    """Fire-and-forget toast sink.

    Notices are logged and kept until the request handler drains them into
    its response.
    """
    pending: List[Notice] = field(default_factory=list)

    def success(self, message: str):
        logger.info(f"toast: {message}")
        self.pending.append(Notice("success", message))

    def error(self, message: str):
        logger.warning(f"toast: {message}")
        self.pending.append(Notice("error", message))

    def drain(self) -> List[dict]:
        notices, self.pending = self.pending, []
        return [asdict(notice) for notice in notices]
