"""Domain models and value objects."""

from __future__ import annotations

from dataclasses import dataclass, field, fields, replace
from decimal import Decimal, InvalidOperation
from types import MappingProxyType
from typing import Any, Mapping

MONTH_KEY_LENGTH = 7

LOADING_TYPES = ("fetch", "add", "update", "delete")

DEFAULT_APP_NAME = "GAS 家計簿"
DEFAULT_INCOME_ITEMS = "給料, ボーナス, 繰越"
DEFAULT_OUTGO_ITEMS = "食費, 趣味, 交通費, 買い物, 交際費, 生活費, 住宅, 通信, 車, 税金"
DEFAULT_TAG_ITEMS = "固定費, カード"


def month_key(date: str) -> str:
    """Return the YYYY-MM partition key for an ISO date string.

    Malformed dates are not validated; whatever prefix exists is the key.
    """
    return (date or "")[:MONTH_KEY_LENGTH]


def _to_amount(value: Any) -> Decimal | None:
    """Parse a monetary value from the remote payload."""
    if value is None or value == "":
        return None
    try:
        amount = value if isinstance(value, Decimal) else Decimal(str(value))
    except InvalidOperation as exc:
        raise ValueError(f"Invalid amount: {value!r}") from exc
    if not amount.is_finite():
        raise ValueError(f"Amount must be finite: {value!r}")
    return amount


def _amount_to_json(value: Decimal | None) -> int | float | None:
    if value is None:
        return None
    if value == value.to_integral_value():
        return int(value)
    return float(value)


@dataclass(frozen=True)
class LedgerEntry:
    """A single income or outgo record of the household ledger."""
    id: str
    date: str
    title: str = ""
    category: str = ""
    tags: str = ""
    income: Decimal | None = None
    outgo: Decimal | None = None
    memo: str = ""

    def __post_init__(self) -> None:
        object.__setattr__(self, "income", _to_amount(self.income))
        object.__setattr__(self, "outgo", _to_amount(self.outgo))

    @property
    def month_key(self) -> str:
        return month_key(self.date)

    @classmethod
    def from_dict(cls, payload: Mapping[str, Any]) -> "LedgerEntry":
        """Build an entry from the remote JSON shape."""
        return cls(
            id=str(payload.get("id", "")),
            date=str(payload.get("date", "")),
            title=str(payload.get("title") or ""),
            category=str(payload.get("category") or ""),
            tags=str(payload.get("tags") or ""),
            income=payload.get("income"),
            outgo=payload.get("outgo"),
            memo=str(payload.get("memo") or ""),
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "date": self.date,
            "title": self.title,
            "category": self.category,
            "tags": self.tags,
            "income": _amount_to_json(self.income),
            "outgo": _amount_to_json(self.outgo),
            "memo": self.memo,
        }


@dataclass(frozen=True)
class LedgerError:
    """Most recent error recorded by the store.

    Attributes:
        kind: Where the error happened, e.g. ``remote_fetch``
        message: Displayable message
    """
    kind: str
    message: str

    @classmethod
    def from_exception(cls, kind: str, exc: BaseException) -> "LedgerError":
        message = getattr(exc, "message", None) or str(exc) or exc.__class__.__name__
        return cls(kind=kind, message=message)


@dataclass
class LoadingState:
    """Independent in-flight flags, one per store operation."""
    fetch: bool = False
    add: bool = False
    update: bool = False
    delete: bool = False

    def set(self, operation: str, value: bool) -> None:
        if operation not in LOADING_TYPES:
            raise ValueError(f"Unknown loading type: {operation}")
        setattr(self, operation, value)

    def as_dict(self) -> dict[str, bool]:
        return {operation: getattr(self, operation) for operation in LOADING_TYPES}


# Storage keys keep the camelCase names used by the web client
SETTINGS_KEYS = {
    "app_name": "appName",
    "api_url": "apiUrl",
    "auth_token": "authToken",
    "str_income_items": "strIncomeItems",
    "str_outgo_items": "strOutgoItems",
    "str_tag_items": "strTagItems",
}


@dataclass(frozen=True)
class Settings:
    """User configuration for the ledger client."""
    app_name: str = DEFAULT_APP_NAME
    api_url: str = ""
    auth_token: str = ""
    str_income_items: str = DEFAULT_INCOME_ITEMS
    str_outgo_items: str = DEFAULT_OUTGO_ITEMS
    str_tag_items: str = DEFAULT_TAG_ITEMS

    def merged(self, overrides: Mapping[str, Any]) -> "Settings":
        """Return a copy with the fields present in ``overrides`` replaced.

        Accepts both field names and storage keys. Unknown keys and ``None``
        values are ignored so absent fields keep their current value.
        """
        changes: dict[str, str] = {}
        for name, storage_key in SETTINGS_KEYS.items():
            for key in (name, storage_key):
                if key in overrides and overrides[key] is not None:
                    changes[name] = str(overrides[key])
        return replace(self, **changes)

    def to_dict(self) -> dict[str, str]:
        return {SETTINGS_KEYS[item.name]: getattr(self, item.name) for item in fields(self)}

    @classmethod
    def from_dict(cls, payload: Mapping[str, Any]) -> "Settings":
        return cls().merged(payload)


@dataclass(frozen=True)
class MonthSummary:
    """Income and outgo totals for one fetched month."""
    month: str
    income: Decimal = Decimal("0")
    outgo: Decimal = Decimal("0")
    count: int = 0
    by_category: Mapping[str, Decimal] = field(default_factory=lambda: MappingProxyType({}))

    @property
    def balance(self) -> Decimal:
        return self.income - self.outgo

    @classmethod
    def from_entries(cls, month: str, entries: list[LedgerEntry] | tuple[LedgerEntry, ...]) -> "MonthSummary":
        income = Decimal("0")
        outgo = Decimal("0")
        by_category: dict[str, Decimal] = {}
        for entry in entries:
            amount = Decimal("0")
            if entry.income is not None:
                income += entry.income
                amount = entry.income
            if entry.outgo is not None:
                outgo += entry.outgo
                amount = entry.outgo
            by_category[entry.category] = by_category.get(entry.category, Decimal("0")) + amount
        return cls(
            month=month,
            income=income,
            outgo=outgo,
            count=len(entries),
            by_category=MappingProxyType(by_category),
        )
