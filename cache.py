# cache.py
import logging
from typing import Any, Callable, Dict, Hashable

logger = logging.getLogger(__name__)

MAX_ENTRIES_PER_PATH = 128


class ViewCache:
  """
  Rendered views keyed by path, then by whatever varies inside the path (query, page).

  Each path holds at most ``max_entries`` views; the oldest one is dropped
  when a new key arrives at a full path.
  """

  def __init__(self, max_entries: int = MAX_ENTRIES_PER_PATH):
    self.max_entries = max_entries
    self._views: Dict[str, Dict[Hashable, Any]] = {}

  def get_or_render(self, path: str, key: Hashable, render: Callable[[], Any]) -> Any:
    bucket = self._views.setdefault(path, {})
    if key in bucket:
      return bucket[key]
    view = render()
    while bucket and len(bucket) >= self.max_entries:
      bucket.pop(next(iter(bucket)))
    bucket[key] = view
    return view

  def is_cached(self, path: str, key: Hashable = None) -> bool:
    bucket = self._views.get(path)
    if not bucket:
      return False
    return key is None or key in bucket

  def revalidate_path(self, path: str) -> None:
    dropped = self._views.pop(path, None)
    logger.debug("Revalidated %s (%d entries)", path, len(dropped or {}))
