"""Profiling support using cProfile.

When the TREESNAP_PROFILE environment variable is set to a directory path, the main entry point and the
fingerprint workers dump cProfile statistics under {TREESNAP_PROFILE}/{timestamp_ms}_{main_pid}/, one file
per profiled call named {prefix}_{pid}_{seq}.prof.
"""
import cProfile
import functools
import itertools
import os
import time
from pathlib import Path
from typing import Callable, TypeVar, ParamSpec

P = ParamSpec('P')
T = TypeVar('T')

PROFILE_ENV = 'TREESNAP_PROFILE'
# Shared with worker processes so that all dumps of one run land in the same directory
SESSION_ENV = '_TREESNAP_PROFILE_SESSION_DIR'

_profile_counter = itertools.count()


def get_profile_dir() -> Path | None:
    """Directory receiving profile dumps of the current session, or None if profiling is disabled."""
    profile_path = os.environ.get(PROFILE_ENV)
    if not profile_path:
        return None
    return Path(profile_path) / _get_session_dir_name()


def _get_session_dir_name() -> str:
    session_dir = os.environ.get(SESSION_ENV)
    if session_dir:
        return session_dir
    return f"{int(time.time() * 1000)}_{os.getpid()}"


def generate_profile_filename(prefix: str = "profile") -> str:
    return f"{prefix}_{os.getpid()}_{next(_profile_counter)}.prof"


def profile_function(func: Callable[P, T], prefix: str = "profile") -> Callable[P, T]:
    """Wrap func so that each call is profiled when TREESNAP_PROFILE is set."""
    @functools.wraps(func)
    def wrapper(*args: P.args, **kwargs: P.kwargs) -> T:
        profile_dir = get_profile_dir()
        if profile_dir is None:
            return func(*args, **kwargs)

        profile_dir.mkdir(parents=True, exist_ok=True)
        profile_file = profile_dir / generate_profile_filename(prefix)

        profiler = cProfile.Profile()
        try:
            profiler.enable()
            return func(*args, **kwargs)
        finally:
            profiler.disable()
            profiler.dump_stats(str(profile_file))

    return wrapper


def profile_main(func: Callable[P, T]) -> Callable[P, T]:
    """Profile the main entry point and publish the session directory to worker processes."""
    @functools.wraps(func)
    def wrapper(*args: P.args, **kwargs: P.kwargs) -> T:
        if os.environ.get(PROFILE_ENV):
            os.environ[SESSION_ENV] = _get_session_dir_name()
        return profile_function(func, prefix="main")(*args, **kwargs)

    return wrapper


def profile_worker(func: Callable[P, T]) -> Callable[P, T]:
    return profile_function(func, prefix="worker")
