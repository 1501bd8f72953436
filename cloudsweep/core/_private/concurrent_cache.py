import threading


class ConcurrentObjectCache:
    """An object cache which is thread safe.
    """
    def __init__(self):
        self._lock = threading.RLock()
        self._cache = {}

    def get(self, key, load_function, **load_args):
        with self._lock:
            if key in self._cache:
                return self._cache[key]
            value = load_function(**load_args)
            self._cache[key] = value
            return value

    def clear(self):
        with self._lock:
            self._cache = {}


class ConcurrentMapCache:
    """A key value map which is thread safe.

    Entries are only ever removed by key or by a key predicate, the
    map is never handed out for iteration.
    """
    def __init__(self):
        self._lock = threading.RLock()
        self._cache = {}

    def put(self, key, value):
        with self._lock:
            self._cache[key] = value

    def get(self, key, default=None):
        with self._lock:
            return self._cache.get(key, default)

    def remove(self, key):
        with self._lock:
            return self._cache.pop(key, None)

    def remove_if(self, predicate):
        """Remove every entry whose key satisfies the predicate.

        Returns the number of entries removed.
        """
        with self._lock:
            matched = [key for key in self._cache if predicate(key)]
            for key in matched:
                del self._cache[key]
            return len(matched)

    def __contains__(self, key):
        with self._lock:
            return key in self._cache

    def __len__(self):
        with self._lock:
            return len(self._cache)

    def clear(self):
        with self._lock:
            self._cache = {}
