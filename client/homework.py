from __future__ import annotations
from datetime import date
from typing import Callable, Iterable, List, Optional, Sequence, Tuple

from client.api import ClassboardApi
from client.settings import settings
from client.state import ScreenState
from client.upload import LocalFile, Uploader, UploadError, validate_files
from models import merge_image_urls
from schedule_utils import group_by_day, parse_day

DEFAULT_SUBJECTS = (
    "Монгол хэл", "Математик", "Биологи", "Англи хэл", "Түүх", "Хими", "Физик",
    "Газар зүй", "Эрүүл мэнд", "Иргэний ёс зүй", "Мэдээлэл зүй", "Дизайн технологи", "Тамир",
)


def item_day(item: dict) -> date:
    return parse_day(item["date"])


def item_images(item: dict) -> List[str]:
    return merge_image_urls(item.get("images") or [], item.get("image"))


class FilePicker:
    """Выбранные, но ещё не загруженные картинки."""

    def __init__(self, max_file_mb: float) -> None:
        self.max_file_mb = max_file_mb
        self.files: List[LocalFile] = []

    def pick_files(self, picked: Sequence[LocalFile], mode: str = "replace") -> bool:
        self.error = ""
        if not picked:
            if mode == "replace":
                self.clear_files()
            return True
        try:
            validate_files(picked, self.max_file_mb)
        except UploadError as exc:
            self.error = str(exc)
            return False
        if mode == "replace":
            self.files = list(picked)
        else:
            merged = {f.key: f for f in self.files}
            for f in picked:
                merged[f.key] = f
            self.files = list(merged.values())
        return True

    def remove_file(self, idx: int) -> None:
        self.files = [f for i, f in enumerate(self.files) if i != idx]

    def clear_files(self) -> None:
        self.files = []


class HomeworkBoard(ScreenState):
    """Список ДЗ, сгруппированный по дням (страницы админа и учеников)."""

    def __init__(self, api: ClassboardApi) -> None:
        super().__init__()
        self.api = api
        self.items: List[dict] = []
        self.busy_id: Optional[int] = None

    def load(self, subject: Optional[str] = None, day: Optional[date] = None) -> bool:
        items = self._run("loading", lambda: self.api.list_homework(subject=subject, day=day))
        if items is None:
            return False
        self.items = items
        self.loaded = True
        return True

    def groups(self) -> List[Tuple[date, List[dict]]]:
        return group_by_day(self.items, key=item_day, tiebreak=lambda it: (it.get("createdAt") or "", it["id"]))

    def for_day(self, day: date) -> List[dict]:
        for d, items in self.groups():
            if d == day:
                return items
        return []

    def replace(self, updated: dict) -> None:
        self.items = [updated if it["id"] == updated["id"] else it for it in self.items]

    def update(self, hw_id: int, **fields) -> Optional[dict]:
        updated = self._run("submitting", lambda: self.api.patch_homework(hw_id, **fields))
        if updated is None:
            return None
        self.replace(updated)
        return updated

    def delete(self, hw_id: int) -> bool:
        self.busy_id = hw_id
        try:
            if self._run("submitting", lambda: self.api.delete_homework(hw_id)) is None:
                return False
        finally:
            self.busy_id = None
        self.items = [it for it in self.items if it["id"] != hw_id]
        return True


class HomeworkForm(FilePicker, ScreenState):
    """Форма добавления: сначала загрузка картинок, потом одно создание."""

    def __init__(self, api: ClassboardApi, uploader: Uploader, *,
                 subjects: Iterable[str] = DEFAULT_SUBJECTS, max_file_mb: Optional[float] = None,
                 today: Optional[date] = None, on_created: Optional[Callable[[dict], None]] = None) -> None:
        ScreenState.__init__(self)
        FilePicker.__init__(self, max_file_mb or settings.max_file_mb)
        self.api = api
        self.uploader = uploader
        self.subjects = list(subjects)
        self.subject = self.subjects[0] if self.subjects else ""
        self.title = ""
        self.day = today or date.today()
        self.on_created = on_created
        # загружены, но ДЗ не сохранилось (компенсации нет)
        self.orphaned_urls: List[str] = []

    @property
    def can_submit(self) -> bool:
        return bool(self.subject.strip() and self.title.strip() and self.day)

    def submit(self) -> Optional[dict]:
        if not self.can_submit:
            self.error = "Мэдээллээ бүрэн бөглөөрэй"
            return None
        uploaded: List[str] = []

        def _save():
            try:
                uploaded.extend(self.uploader.upload_all(self.files))
            except UploadError as exc:
                uploaded.extend(exc.uploaded)
                raise
            return self.api.create_homework(
                subject=self.subject.strip(), title=self.title.strip(), day=self.day, images=uploaded)

        created = self._run("submitting", _save)
        if created is None:
            self.orphaned_urls = uploaded
            return None
        self.orphaned_urls = []
        self.title = ""
        self.clear_files()
        if self.on_created:
            self.on_created(created)
        return created


class HomeworkEditor(FilePicker, ScreenState):
    """Правка одного ДЗ: ссылки из БД + догружаемые файлы, затем PATCH."""

    def __init__(self, api: ClassboardApi, uploader: Uploader, board: Optional[HomeworkBoard] = None,
                 max_file_mb: Optional[float] = None) -> None:
        ScreenState.__init__(self)
        FilePicker.__init__(self, max_file_mb or settings.max_file_mb)
        self.api = api
        self.uploader = uploader
        self.board = board
        self.item: Optional[dict] = None
        self.subject = ""
        self.title = ""
        self.day: Optional[date] = None
        self.image_urls: List[str] = []

    @property
    def editing(self) -> bool:
        return self.item is not None

    def open(self, item: dict) -> None:
        self.error = ""
        self.item = item
        self.subject = item.get("subject") or ""
        self.title = item.get("title") or ""
        self.day = item_day(item)
        self.image_urls = item_images(item)
        self.clear_files()

    def close(self) -> None:
        self.item = None
        self.clear_files()

    def remove_url(self, idx: int) -> None:
        self.image_urls = [u for i, u in enumerate(self.image_urls) if i != idx]

    @property
    def can_save(self) -> bool:
        return bool(self.item and self.subject.strip() and self.title.strip() and self.day
                    and not self.submitting)

    def upload_picked(self) -> bool:
        if not self.files:
            return True
        urls = self._run("submitting", lambda: self.uploader.upload_all(self.files))
        if urls is None:
            return False
        self.image_urls = merge_image_urls([*self.image_urls, *urls])
        self.clear_files()
        return True

    def save(self) -> Optional[dict]:
        if not self.can_save:
            self.error = "Мэдээллээ бүрэн бөглөөрэй"
            return None
        if not self.upload_picked():
            return None
        hw_id = self.item["id"]
        updated = self._run("submitting", lambda: self.api.patch_homework(
            hw_id, subject=self.subject.strip(), title=self.title.strip(),
            date=self.day, images=self.image_urls))
        if updated is None:
            return None
        if self.board is not None:
            self.board.replace(updated)
        self.close()
        return updated
