import asyncio
import hashlib
import logging
import multiprocessing
import os
from multiprocessing.pool import Pool
import pathlib
from typing import Awaitable

from .profiling import profile_worker

logger = logging.getLogger(__name__)

FINGERPRINT_ALGORITHM = 'sha1'


@profile_worker
def compute_fingerprint(path: str | os.PathLike) -> tuple[int, str]:
    """Compute the byte length and content hash of a file.

    The content is streamed through SHA-1; the digest is only used to recognize identical content.

    Returns:
        A 2-tuple of (size, lowercase hex digest)

    Raises:
        OSError: If the file cannot be opened or read
    """
    with open(path, "rb") as f:
        size = os.fstat(f.fileno()).st_size
        # noinspection PyTypeChecker
        digest = hashlib.file_digest(f, FINGERPRINT_ALGORITHM)
    return size, digest.hexdigest()


def _settle(future: asyncio.Future, value=None, exception: BaseException | None = None):
    # The awaiting task may have been cancelled while the job was running
    if future.done():
        return
    if exception is not None:
        future.set_exception(exception)
    else:
        future.set_result(value)


class Processor:
    """Process pool running the CPU and I/O heavy per-file work off the event loop.

    Use as a context manager; results are exposed as awaitables bound to the running event loop.
    """

    def __init__(self, concurrency: int | None = None):
        if concurrency is None:
            concurrency = multiprocessing.cpu_count()
        if concurrency < 1:
            raise ValueError(f"Concurrency must be positive: {concurrency}")

        self._concurrency = concurrency
        self._pool: Pool = Pool(self._concurrency)

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()

    def close(self):
        self._pool.close()
        self._pool.join()

    @property
    def concurrency(self):
        return self._concurrency

    def fingerprint(self, path: pathlib.Path) -> Awaitable[tuple[int, str]]:
        logger.info(f"Starting fingerprint computation for: {path}")

        async def log_and_compute():
            result = await self._evaluate(compute_fingerprint, path)
            logger.info(f"Completed fingerprint computation for: {path}")
            return result

        return log_and_compute()

    def _evaluate(self, func, *args):
        loop = asyncio.get_running_loop()
        future = loop.create_future()

        def deliver(value=None, exception=None):
            try:
                loop.call_soon_threadsafe(_settle, future, value, exception)
            except RuntimeError:
                # The loop is already closed: the build was aborted and nobody awaits this job anymore.
                logger.debug(f"Dropped result of {func.__name__}{args}: event loop closed")

        self._pool.apply_async(func, args=args,
                               callback=lambda v: deliver(value=v),
                               error_callback=lambda e: deliver(exception=e))

        return future
