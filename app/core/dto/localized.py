from pydantic import BaseModel, ConfigDict, field_validator

from app.utils.enums import LocaleEnum


class LocalizedText(BaseModel):
    """Per-locale string. A missing locale is empty, never a copy of another locale."""
    model_config = ConfigDict(extra="forbid")

    en: str = ""
    fa: str = ""

    @field_validator("en", "fa", mode="before")
    @classmethod
    def none_to_empty(cls, value):
        if value is None:
            return ""
        return value

    def resolve(self, locale: LocaleEnum) -> str:
        return getattr(self, locale.value)

    def is_empty(self) -> bool:
        return not (self.en.strip() or self.fa.strip())

    def missing_locales(self) -> list[LocaleEnum]:
        return [locale for locale in LocaleEnum if not self.resolve(locale).strip()]


class LocalizedList(BaseModel):
    """Per-locale ordered list of strings, used for feature and application bullets."""
    model_config = ConfigDict(extra="forbid")

    en: list[str] = []
    fa: list[str] = []

    @field_validator("en", "fa", mode="before")
    @classmethod
    def none_to_empty(cls, value):
        if value is None:
            return []
        return value

    def resolve(self, locale: LocaleEnum) -> list[str]:
        return list(getattr(self, locale.value))
