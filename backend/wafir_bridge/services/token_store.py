"""In-memory store of user access tokens keyed by installation id.

Entries live for the lifetime of the process; a restart drops them all.
"""

from __future__ import annotations

import logging
from typing import Dict, Optional

logger = logging.getLogger(__name__)


class TokenStore:
    def __init__(self) -> None:
        self._tokens: Dict[int, str] = {}

    def set(self, installation_id: int, token: str) -> None:
        self._tokens[installation_id] = token
        logger.info("Stored user token installation_id=%s", installation_id)

    def get(self, installation_id: int) -> Optional[str]:
        return self._tokens.get(installation_id)

    def delete(self, installation_id: int) -> bool:
        existed = self._tokens.pop(installation_id, None) is not None
        if existed:
            logger.info("Deleted user token installation_id=%s", installation_id)
        return existed

    def has(self, installation_id: int) -> bool:
        return installation_id in self._tokens

    def __len__(self) -> int:
        return len(self._tokens)
