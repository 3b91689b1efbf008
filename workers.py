# workers.py

import logging
from typing import Callable

import requests
from requests.exceptions import RequestException
from PyQt5.QtCore import QObject, QRunnable, QThreadPool, pyqtSignal

logger = logging.getLogger(__name__)


class TaskSignals(QObject):
    finished = pyqtSignal(object)
    failed = pyqtSignal(str)


class Task(QRunnable):
    """Runs ``fn`` on the thread pool and reports back through signals."""

    def __init__(self, fn: Callable, *args, **kwargs):
        super().__init__()
        self.fn = fn
        self.args = args
        self.kwargs = kwargs
        self.signals = TaskSignals()

    def run(self) -> None:
        try:
            result = self.fn(*self.args, **self.kwargs)
        except Exception as e:  # noqa: BLE001  a worker thread must not die silently
            logger.exception("Background task %s failed", getattr(self.fn, "__name__", self.fn))
            self.signals.failed.emit(str(e))
            return
        self.signals.finished.emit(result)


def run_in_background(task: Task) -> Task:
    """Starts an already wired task; connect its signals before calling this."""
    QThreadPool.globalInstance().start(task)
    return task


def fetch_poster(url: str, timeout: float) -> bytes:
    """Downloads poster bytes; empty bytes when it cannot be fetched."""
    if not url.startswith(("http://", "https://")):
        return b""
    try:
        resp = requests.get(url, timeout=timeout)
        resp.raise_for_status()
    except RequestException as e:
        logger.warning("Poster %s could not be fetched: %s", url, e)
        return b""
    return resp.content
