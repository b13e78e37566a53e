"""
Fotos y amenities por habitación, leídos de carpetas rooms/<id>/ del storage.

rooms/<id>/index.json      -> ["a.webp", "b.jpg", ...] orden preferido
rooms/<id>/amenities.json  -> ["WiFi", "Vista a la ciudad", ...]
"""
import json
import logging
import os

from django.core.files.base import ContentFile
from django.core.files.storage import default_storage

logger = logging.getLogger(__name__)

IMAGE_EXTS = {"jpg", "jpeg", "png", "webp", "gif", "bmp", "heic", "heif"}
THUMB_EXTS = {"webp", "jpg", "jpeg", "png"}

DEFAULT_AMENITIES = [
    "WiFi de alta velocidad",
    "Vista a la ciudad",
    "Aire acondicionado",
    'TV 50"',
    "Caja de seguridad",
    "Mini bar",
]


def room_folder(room_id) -> str:
    return f"rooms/{room_id}"


def _ext(name: str) -> str:
    return os.path.splitext(name)[1].lstrip(".").lower()


def _list_files(storage, folder):
    try:
        _, files = storage.listdir(folder)
    except (FileNotFoundError, NotADirectoryError):
        return []
    return sorted(f for f in files if not f.startswith("."))


def _read_json_list(storage, path):
    if not storage.exists(path):
        return None
    try:
        with storage.open(path, "rb") as fh:
            data = json.loads(fh.read().decode("utf-8"))
    except (OSError, ValueError) as e:
        logger.warning("No se pudo leer %s: %s", path, e)
        return None
    if not isinstance(data, list):
        return None
    return [str(x) for x in data if isinstance(x, str) and x.strip()]


def room_photo_names(room_id, storage=None) -> list[str]:
    storage = storage or default_storage
    folder = room_folder(room_id)
    files = [f for f in _list_files(storage, folder) if _ext(f) in IMAGE_EXTS]

    order = _read_json_list(storage, f"{folder}/index.json") or []
    present = set(files)
    head = []
    for name in order:
        if name in present and name not in head:
            head.append(name)
    tail = [f for f in files if f not in head]
    return head + tail


def room_photos(room_id, storage=None) -> list[str]:
    storage = storage or default_storage
    folder = room_folder(room_id)
    return [storage.url(f"{folder}/{name}") for name in room_photo_names(room_id, storage)]


def room_thumbnail(room_id, storage=None) -> str:
    storage = storage or default_storage
    folder = room_folder(room_id)

    order = _read_json_list(storage, f"{folder}/index.json") or []
    for name in order:
        if _ext(name) in THUMB_EXTS:
            return storage.url(f"{folder}/{name}")

    for name in _list_files(storage, folder):
        if _ext(name) in THUMB_EXTS:
            return storage.url(f"{folder}/{name}")
    return ""


def room_amenities(room_id, storage=None) -> list[str]:
    storage = storage or default_storage
    items = _read_json_list(storage, f"{room_folder(room_id)}/amenities.json")
    if not items:
        return list(DEFAULT_AMENITIES)
    return items


def ensure_room_folder(room_id, storage=None) -> str:
    """Marcador .keep para que la carpeta de fotos exista desde el alta."""
    storage = storage or default_storage
    path = f"{room_folder(room_id)}/.keep"
    if not storage.exists(path):
        storage.save(path, ContentFile(b""))
    return path


def hero_image(storage=None) -> str:
    """
    Imagen de portada: hero/ (respetando index.json), luego hotel/, luego demo/.
    """
    storage = storage or default_storage
    order = _read_json_list(storage, "hero/index.json") or []
    for name in order:
        if _ext(name) in IMAGE_EXTS:
            return storage.url(f"hero/{name}")

    for folder in ("hero", "hotel", "demo"):
        for name in _list_files(storage, folder):
            if _ext(name) in IMAGE_EXTS:
                return storage.url(f"{folder}/{name}")
    return ""
