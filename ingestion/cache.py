"""
Per-run response cache keyed by the original (unwrapped) resource URL
"""

from typing import Any, Dict, Optional


class ResponseCache:
    """Decoded JSON bodies fetched during one run"""

    def __init__(self):
        self._entries: Dict[str, Any] = {}

    def get(self, url: str) -> Optional[Any]:
        return self._entries.get(url)

    def set(self, url: str, body: Any) -> None:
        self._entries[url] = body

    def __contains__(self, url: str) -> bool:
        return url in self._entries

    def __len__(self) -> int:
        return len(self._entries)

    def clear(self) -> None:
        self._entries.clear()
