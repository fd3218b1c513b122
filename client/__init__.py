"""Клиентская часть: HTTP-клиент к API, загрузка картинок и состояния экранов."""
from client.api import ApiError, ClassboardApi
from client.duty import DutyBoard
from client.homework import HomeworkBoard, HomeworkEditor, HomeworkForm
from client.timetable import TimetableBoard
from client.upload import LocalFile, Uploader, UploadError

__all__ = [
    "ApiError", "ClassboardApi", "DutyBoard", "HomeworkBoard", "HomeworkEditor",
    "HomeworkForm", "LocalFile", "TimetableBoard", "Uploader", "UploadError",
]
