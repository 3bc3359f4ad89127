"""Process-wide request lock guarding access to the users table."""

from __future__ import annotations

import threading
from contextlib import contextmanager
from typing import ContextManager, Iterator, Protocol


class RequestLock(Protocol):
    def read(self) -> ContextManager[None]:
        ...

    def write(self) -> ContextManager[None]:
        ...


class ReadWriteLock:
    """Readers-writer lock: many concurrent readers, or one writer.

    Waiting writers block new readers so a steady stream of fetches cannot
    starve an update.
    """

    def __init__(self) -> None:
        self._cond = threading.Condition(threading.Lock())
        self._readers = 0
        self._writer = False
        self._waiting_writers = 0

    @property
    def readers(self) -> int:
        with self._cond:
            return self._readers

    @property
    def writer_active(self) -> bool:
        with self._cond:
            return self._writer

    @contextmanager
    def read(self) -> Iterator[None]:
        with self._cond:
            while self._writer or self._waiting_writers:
                self._cond.wait()
            self._readers += 1
        try:
            yield
        finally:
            with self._cond:
                self._readers -= 1
                if self._readers == 0:
                    self._cond.notify_all()

    @contextmanager
    def write(self) -> Iterator[None]:
        with self._cond:
            self._waiting_writers += 1
            try:
                while self._writer or self._readers:
                    self._cond.wait()
            finally:
                self._waiting_writers -= 1
            self._writer = True
        try:
            yield
        finally:
            with self._cond:
                self._writer = False
                self._cond.notify_all()


class PassThroughLock:
    """Same interface as :class:`ReadWriteLock` without any synchronization."""

    @contextmanager
    def read(self) -> Iterator[None]:
        yield

    @contextmanager
    def write(self) -> Iterator[None]:
        yield


def build_request_lock(serialize: bool) -> RequestLock:
    if serialize:
        return ReadWriteLock()
    return PassThroughLock()


__all__ = ["PassThroughLock", "ReadWriteLock", "RequestLock", "build_request_lock"]
