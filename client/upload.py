"""Загрузка картинок к ДЗ во внешний /api/upload.

Контракт сервиса: ответ ``{"url": "..."}``. Старые варианты ответа
(``blob.url``, ``data.url``, ``result.url``) понимает только
:func:`extract_upload_url`, дальше по коду ходит уже строка.
"""
from __future__ import annotations
import logging
import mimetypes
import os
from dataclasses import dataclass
from typing import Any, Iterable, List, Tuple

import requests
from requests import RequestException

from client.settings import settings

log = logging.getLogger(__name__)

ALLOWED_MIME = frozenset({"image/jpeg", "image/png", "image/webp"})
_LEGACY_KEYS = ("blob", "data", "result")


class UploadError(Exception):
    def __init__(self, message: str, uploaded: Iterable[str] = ()) -> None:
        super().__init__(message)
        # ссылки, успевшие загрузиться до ошибки
        self.uploaded = list(uploaded)


@dataclass(frozen=True)
class LocalFile:
    name: str
    content: bytes
    mime: str
    mtime: float = 0.0

    @property
    def size(self) -> int:
        return len(self.content)

    @property
    def key(self) -> Tuple[str, int, float]:
        return self.name, self.size, self.mtime

    @classmethod
    def from_path(cls, path: str) -> "LocalFile":
        mime = mimetypes.guess_type(path)[0] or "application/octet-stream"
        with open(path, "rb") as fh:
            content = fh.read()
        return cls(name=os.path.basename(path), content=content, mime=mime, mtime=os.path.getmtime(path))


def validate_files(files: Iterable[LocalFile], max_mb: float) -> None:
    max_bytes = max_mb * 1024 * 1024
    for f in files:
        if f.mime not in ALLOWED_MIME:
            raise UploadError("Зөвхөн JPG / PNG / WEBP зураг зөвшөөрнө.")
        if f.size > max_bytes:
            raise UploadError(f'"{f.name}" зураг {max_mb:g}MB-аас их байна.')


def extract_upload_url(payload: Any) -> str:
    if isinstance(payload, dict):
        url = payload.get("url")
        if not url:
            for key in _LEGACY_KEYS:
                nested = payload.get(key)
                if isinstance(nested, dict) and nested.get("url"):
                    url = nested["url"]
                    break
        if url:
            return str(url)
    raise UploadError("Upload response missing url")


class Uploader:
    def __init__(self, url: str, *, session=None, timeout: float = 30) -> None:
        if not url:
            raise UploadError("Missing CLASSBOARD_UPLOAD_URL in environment")
        self.url = url
        self.session = session or requests.Session()
        self.timeout = timeout

    @classmethod
    def from_settings(cls, session=None) -> "Uploader":
        return cls(settings.upload_url, session=session, timeout=settings.timeout)

    def upload(self, f: LocalFile) -> str:
        try:
            res = self.session.request(
                "POST", self.url, files={"file": (f.name, f.content, f.mime)}, timeout=self.timeout)
        except RequestException as exc:
            raise UploadError("UPLOAD_SERVICE_UNAVAILABLE") from exc
        if res.status_code >= 400:
            raise UploadError(res.text or f"Upload failed: {res.status_code}")
        try:
            payload = res.json()
        except ValueError:
            raise UploadError("Upload response missing url")
        return extract_upload_url(payload)

    def upload_all(self, files: Iterable[LocalFile]) -> List[str]:
        """По одному файлу подряд; при ошибке загруженные ссылки в UploadError.uploaded."""
        urls: List[str] = []
        for f in files:
            try:
                urls.append(self.upload(f))
            except UploadError as exc:
                log.warning("upload failed after %d file(s): %s", len(urls), exc)
                raise UploadError(str(exc), uploaded=urls) from exc
        return urls
