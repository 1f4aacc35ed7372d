from limits import RateLimitItemPerSecond
from limits.storage import Storage, storage_from_string
from limits.strategies import FixedWindowRateLimiter


class RateLimiter:
    """
    Fixed-window counter on top of a ``limits`` storage backend.

    The call that pushes the count past ``max_attempts`` is itself limited,
    so with the defaults the 6th attempt inside a 15 minute window is rejected.
    Windows are not sliding: a burst straddling a rollover can admit up to
    twice ``max_attempts``. Expired windows are evicted by the storage.
    """

    def __init__(self, storage: Storage, max_attempts: int = 5, window_seconds: int = 15 * 60):
        self.storage = storage
        self.max_attempts = max_attempts
        self.window_seconds = window_seconds
        self.item = RateLimitItemPerSecond(max_attempts, window_seconds)
        self._strategy = FixedWindowRateLimiter(storage)

    def is_rate_limited(self, identifier: str) -> bool:
        return not self._strategy.hit(self.item, identifier)

    def reset(self, identifier: str) -> None:
        self._strategy.clear(self.item, identifier)


def init_rate_limiter(app, storage: Storage | None = None) -> RateLimiter:
    """
    ``storage`` wins over RATE_LIMIT_STORAGE_URI; memory:// suits a single
    process, redis:// (or any limits backend) a multi-instance deployment.
    """
    limiter = RateLimiter(
        storage=storage if storage is not None else storage_from_string(app.config["RATE_LIMIT_STORAGE_URI"]),
        max_attempts=app.config["RATE_LIMIT_MAX_ATTEMPTS"],
        window_seconds=app.config["RATE_LIMIT_WINDOW_SECONDS"],
    )
    app.extensions["rate_limiter"] = limiter
    return limiter
