from enum import Enum


class QuoteStatusEnum(str, Enum):
    PENDING = "pending"
    IN_PROGRESS = "in_progress"
    QUOTED = "quoted"
    APPROVED = "approved"
    REJECTED = "rejected"
    CANCELLED = "cancelled"

    @property
    def is_terminal(self) -> bool:
        return self in TERMINAL_QUOTE_STATUSES

    @property
    def has_amount(self) -> bool:
        return self in AMOUNT_QUOTE_STATUSES

    @classmethod
    def parse(cls, value: str) -> "QuoteStatusEnum | None":
        try:
            return cls(value)
        except ValueError:
            return None


TERMINAL_QUOTE_STATUSES = frozenset({
    QuoteStatusEnum.APPROVED,
    QuoteStatusEnum.REJECTED,
    QuoteStatusEnum.CANCELLED,
})

# quote_amount is only meaningful in these states
AMOUNT_QUOTE_STATUSES = frozenset({
    QuoteStatusEnum.QUOTED,
    QuoteStatusEnum.APPROVED,
})


class ContactStatusEnum(str, Enum):
    NEW = "new"
    IN_PROGRESS = "in_progress"
    RESOLVED = "resolved"
    CLOSED = "closed"


class ContactSourceEnum(str, Enum):
    CONTACT_FORM = "contact_form"
    QUOTE_FORM = "quote_form"


class ApplicationAreaEnum(str, Enum):
    INDUSTRIAL_PROCESS = "industrial_process"
    MUNICIPAL_WATER = "municipal_water"
    WASTEWATER_TREATMENT = "wastewater_treatment"
    FOOD_BEVERAGE = "food_beverage"
    PHARMACEUTICAL = "pharmaceutical"
    POWER_GENERATION = "power_generation"
    MINING = "mining"
    OTHER = "other"


class ProductStatusEnum(str, Enum):
    ACTIVE = "active"
    INACTIVE = "inactive"
    DRAFT = "draft"


class UserRoleEnum(str, Enum):
    ADMIN = "admin"
    EDITOR = "editor"


class LocaleEnum(str, Enum):
    EN = "en"
    FA = "fa"


class SortOrderEnum(str, Enum):
    ASC = "ASC"
    DESC = "DESC"
