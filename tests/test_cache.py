from cache import ViewCache

PATH = "/dashboard/invoices"


def test_renders_once_per_key():
  cache = ViewCache()
  calls = []

  def render():
    calls.append(1)
    return {"n": len(calls)}

  assert cache.get_or_render(PATH, ("", 1), render) == {"n": 1}
  assert cache.get_or_render(PATH, ("", 1), render) == {"n": 1}
  assert len(calls) == 1


def test_oldest_entry_is_dropped_when_path_is_full():
  cache = ViewCache(max_entries=3)

  for query in ["a", "b", "c", "d"]:
    cache.get_or_render(PATH, (query, 1), lambda: query)

  assert not cache.is_cached(PATH, ("a", 1))
  assert all(cache.is_cached(PATH, (q, 1)) for q in ["b", "c", "d"])


def test_revalidate_drops_the_whole_path():
  cache = ViewCache()
  cache.get_or_render(PATH, ("", 1), lambda: "x")
  cache.get_or_render("/other", ("", 1), lambda: "y")

  cache.revalidate_path(PATH)

  assert not cache.is_cached(PATH)
  assert cache.is_cached("/other")
