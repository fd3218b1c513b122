from __future__ import annotations
import logging
from typing import Callable, Optional, TypeVar

from client.api import ApiError
from client.upload import UploadError

log = logging.getLogger(__name__)

T = TypeVar("T")


class ScreenState:
    """Общий цикл экрана: loading -> loaded -> (editing | submitting) -> loaded.

    ``error`` ортогонален основному состоянию: выставляется при любой неудачной
    операции и сбрасывается при следующей попытке. Автоповторов нет.
    """

    def __init__(self) -> None:
        self.loading = False
        self.loaded = False
        self.submitting = False
        self.error = ""

    @property
    def editing(self) -> bool:
        return False

    @property
    def mode(self) -> str:
        if self.loading:
            return "loading"
        if self.submitting:
            return "submitting"
        if self.editing:
            return "editing"
        return "loaded" if self.loaded else "idle"

    def _run(self, flag: str, action: Callable[[], T]) -> Optional[T]:
        setattr(self, flag, True)
        self.error = ""
        try:
            return action()
        except (ApiError, UploadError) as exc:
            log.warning("%s failed: %s", type(self).__name__, exc)
            self.error = str(exc) or type(exc).__name__
            return None
        finally:
            setattr(self, flag, False)
