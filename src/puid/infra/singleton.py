import functools
import threading


def singleton(func):
    """
    Decorator for a factory function.
    Caches the first return value in func._instance
    and always returns that thereafter.

    The first call is guarded by a lock, so concurrent first callers
    share one instance. ``wrapper.cache_clear()`` drops the cached value.
    """
    lock = threading.Lock()

    @functools.wraps(func)
    def wrapper(*args, **kwargs):
        if not hasattr(func, "_instance"):
            with lock:
                if not hasattr(func, "_instance"):
                    # First call: create & stash
                    func._instance = func(*args, **kwargs)
        return func._instance

    def cache_clear():
        with lock:
            if hasattr(func, "_instance"):
                del func._instance

    wrapper.cache_clear = cache_clear
    return wrapper
