"""Studio settings merged over built-in defaults."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Optional

from dress_studio.db.storage import Storage
from dress_studio.logging_config import get_logger
from dress_studio.repositories.settings_repo import SettingsRepo
from dress_studio.services.errors import NotFoundError, ValidationError

RETURN_TEMPLATE_KEY = "whatsapp_return_template"
FITTING_TEMPLATE_KEY = "whatsapp_fitting_template"
PICKUP_TEMPLATE_KEY = "whatsapp_pickup_template"
THANKYOU_TEMPLATE_KEY = "whatsapp_thankyou_template"

DEFAULT_SETTINGS: dict[str, str] = {
    "studio_name": "Rachel",
    "studio_subtitle": "השכרת שמלות יוקרה",
    RETURN_TEMPLATE_KEY: (
        "שלום {customer_name},\n"
        'תזכורת: מחר ({date}) מתוכננת החזרת השמלה "{dress_name}".\n'
        "נשמח לראותך!\n\n"
        "רחל - השכרת שמלות"
    ),
    FITTING_TEMPLATE_KEY: (
        "שלום {customer_name},\n"
        "תזכורת: מחר ({date}){time} יש לך מדידה בסטודיו.\n"
        "מחכים לך!\n\n"
        "רחל - השכרת שמלות"
    ),
    PICKUP_TEMPLATE_KEY: (
        "שלום {customer_name},\n"
        'תזכורת: מחר ({date}) מתוכנן איסוף השמלה "{dress_name}".\n'
        "נשמח לראותך!\n\n"
        "רחל - השכרת שמלות"
    ),
    THANKYOU_TEMPLATE_KEY: (
        "שלום {customer_name},\n"
        "תודה שבחרת ברחל!\n"
        "נשמח לראותך שוב.\n\n"
        "רחל - השכרת שמלות"
    ),
}


class SettingsService:
    """Key/value settings; stored values win over defaults."""

    def __init__(self, storage: Storage) -> None:
        self._storage = storage
        self._repo = SettingsRepo(storage)
        self._logger = get_logger(self.__class__.__name__)

    def get_all(self) -> dict[str, Optional[str]]:
        settings: dict[str, Optional[str]] = dict(DEFAULT_SETTINGS)
        settings.update(self._repo.get_all())
        return settings

    def get(self, key: str) -> Optional[str]:
        if self._repo.has(key):
            return self._repo.get(key)
        if key in DEFAULT_SETTINGS:
            return DEFAULT_SETTINGS[key]
        raise NotFoundError(f"Setting {key} not found")

    def template(self, key: str) -> str:
        return self.get(key) or DEFAULT_SETTINGS.get(key, "")

    def set(self, key: str, value: Optional[str]) -> Optional[str]:
        key = key.strip()
        if not key:
            raise ValidationError("Setting key is required")
        self._repo.upsert(key, value)
        self._logger.info("Setting saved key=%s", key)
        return value

    def set_many(self, values: Mapping[str, Optional[str]]) -> None:
        with self._storage.transaction():
            for key, value in values.items():
                self.set(key, value)
