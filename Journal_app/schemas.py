# Journal_app/schemas.py
"""
Request schemas for the REST API.

Bodies arrive in camelCase (tradeType, entryPrice, ...) from the web client;
snake_case keys are accepted as well. Validated payloads are handed to storage
as snake_case dicts via ``to_fields``.
"""

from datetime import datetime
from typing import List, Literal, Optional

from pydantic import BaseModel, ConfigDict, EmailStr, Field, ValidationError, field_validator, model_validator
from pydantic.alias_generators import to_camel

from .utils import to_naive_utc

MIN_PASSWORD_LENGTH = 6

TradeType = Literal['long', 'short']
Mood = Literal['positive', 'neutral', 'negative']


class _Schema(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        str_strip_whitespace=True,
        extra='ignore',
    )

    def to_fields(self, partial=False) -> dict:
        return self.model_dump(exclude_unset=partial, by_alias=False)


def _normalize_datetime(value):
    if isinstance(value, datetime):
        return to_naive_utc(value)
    return value


def _lower(value):
    return value.strip().lower() if isinstance(value, str) else value


def _email_or_none(value):
    if isinstance(value, str):
        value = value.strip()
        if not value:
            return None
        if len(value) > 120:
            raise ValueError("email must be at most 120 characters")
    return value


def _drop_blank_tags(value):
    if value is None:
        return []
    if isinstance(value, str):
        value = value.split(',')
    return [str(tag).strip() for tag in value if str(tag).strip()]


# ---------------------------------------------------------------- auth

class RegisterRequest(_Schema):
    username: str = Field(..., min_length=3, max_length=80)
    password: str = Field(..., min_length=MIN_PASSWORD_LENGTH, max_length=128)
    name: Optional[str] = Field(None, max_length=120)
    email: Optional[EmailStr] = None

    @field_validator('email', mode='before')
    @classmethod
    def blank_email(cls, value):
        return _email_or_none(value)


class LoginRequest(_Schema):
    username: str = Field(..., min_length=1)
    password: str = Field(..., min_length=1)


class ProfileUpdate(_Schema):
    name: Optional[str] = Field(None, max_length=120)
    email: Optional[EmailStr] = None

    @field_validator('email', mode='before')
    @classmethod
    def blank_email(cls, value):
        return _email_or_none(value)


class PasswordChange(_Schema):
    current_password: str = Field(..., min_length=1)
    new_password: str = Field(..., min_length=MIN_PASSWORD_LENGTH, max_length=128)
    confirm_password: str = Field(..., min_length=MIN_PASSWORD_LENGTH, max_length=128)

    @model_validator(mode='after')
    def passwords_match(self):
        if self.new_password != self.confirm_password:
            raise ValueError("Passwords do not match")
        return self


# ---------------------------------------------------------------- trades

class TradeCreate(_Schema):
    symbol: str = Field(..., min_length=1, max_length=50)
    trade_type: TradeType
    entry_price: float = Field(..., gt=0)
    exit_price: float = Field(..., gt=0)
    position_size: float = Field(..., gt=0)
    entry_date: datetime
    exit_date: datetime
    profit_loss: Optional[float] = None
    fees: float = Field(0.0, ge=0)
    instrument_type: str = Field(..., min_length=1, max_length=30)
    setup: Optional[str] = Field(None, max_length=100)
    risk_reward_ratio: Optional[str] = Field(None, max_length=20)
    tags: List[str] = Field(default_factory=list)
    notes: Optional[str] = None
    screenshots: List[str] = Field(default_factory=list)

    @field_validator('trade_type', mode='before')
    @classmethod
    def lower_trade_type(cls, value):
        return _lower(value)

    @field_validator('entry_date', 'exit_date', mode='after')
    @classmethod
    def utc_dates(cls, value):
        return _normalize_datetime(value)

    @field_validator('tags', 'screenshots', mode='before')
    @classmethod
    def clean_lists(cls, value):
        return _drop_blank_tags(value)

    @field_validator('symbol', mode='after')
    @classmethod
    def upper_symbol(cls, value):
        return value.upper()

    @field_validator('fees', mode='before')
    @classmethod
    def null_fees(cls, value):
        return 0.0 if value is None else value

    @model_validator(mode='after')
    def exit_after_entry(self):
        if self.exit_date < self.entry_date:
            raise ValueError("exitDate must not be before entryDate")
        return self


class TradeUpdate(_Schema):
    symbol: Optional[str] = Field(None, min_length=1, max_length=50)
    trade_type: Optional[TradeType] = None
    entry_price: Optional[float] = Field(None, gt=0)
    exit_price: Optional[float] = Field(None, gt=0)
    position_size: Optional[float] = Field(None, gt=0)
    entry_date: Optional[datetime] = None
    exit_date: Optional[datetime] = None
    profit_loss: Optional[float] = None
    fees: Optional[float] = Field(None, ge=0)
    instrument_type: Optional[str] = Field(None, min_length=1, max_length=30)
    setup: Optional[str] = Field(None, max_length=100)
    risk_reward_ratio: Optional[str] = Field(None, max_length=20)
    tags: Optional[List[str]] = None
    notes: Optional[str] = None
    screenshots: Optional[List[str]] = None

    @field_validator('trade_type', mode='before')
    @classmethod
    def lower_trade_type(cls, value):
        return _lower(value)

    @field_validator('entry_date', 'exit_date', mode='after')
    @classmethod
    def utc_dates(cls, value):
        return _normalize_datetime(value)

    @field_validator('tags', 'screenshots', mode='before')
    @classmethod
    def clean_lists(cls, value):
        return _drop_blank_tags(value)

    @field_validator('symbol', mode='after')
    @classmethod
    def upper_symbol(cls, value):
        return value.upper() if value else value

    def to_fields(self, partial=True) -> dict:
        fields = super().to_fields(partial=partial)
        # required columns can't be nulled out by a partial update
        for name in ('symbol', 'trade_type', 'entry_price', 'exit_price', 'position_size',
                     'entry_date', 'exit_date', 'instrument_type'):
            if name in fields and fields[name] is None:
                del fields[name]
        if fields.get('fees', 0.0) is None:
            fields['fees'] = 0.0
        return fields


# ---------------------------------------------------------------- journal

class JournalEntryCreate(_Schema):
    title: str = Field(..., min_length=1, max_length=200)
    content: str = Field(..., min_length=1)
    date: datetime
    mood: Optional[Mood] = None
    tags: List[str] = Field(default_factory=list)

    @field_validator('mood', mode='before')
    @classmethod
    def lower_mood(cls, value):
        return _lower(value) or None

    @field_validator('date', mode='after')
    @classmethod
    def utc_date(cls, value):
        return _normalize_datetime(value)

    @field_validator('tags', mode='before')
    @classmethod
    def clean_tags(cls, value):
        return _drop_blank_tags(value)


class JournalEntryUpdate(_Schema):
    title: Optional[str] = Field(None, min_length=1, max_length=200)
    content: Optional[str] = Field(None, min_length=1)
    date: Optional[datetime] = None
    mood: Optional[Mood] = None
    tags: Optional[List[str]] = None

    @field_validator('mood', mode='before')
    @classmethod
    def lower_mood(cls, value):
        return _lower(value) or None

    @field_validator('date', mode='after')
    @classmethod
    def utc_date(cls, value):
        return _normalize_datetime(value)

    @field_validator('tags', mode='before')
    @classmethod
    def clean_tags(cls, value):
        return _drop_blank_tags(value)

    def to_fields(self, partial=True) -> dict:
        fields = super().to_fields(partial=partial)
        for name in ('title', 'content', 'date'):
            if name in fields and fields[name] is None:
                del fields[name]
        return fields


def format_validation_error(err: ValidationError) -> str:
    """Flatten pydantic errors into one readable line"""
    parts = []
    for error in err.errors():
        loc = '.'.join(str(part) for part in error.get('loc', ()) if part != '__root__')
        msg = error.get('msg', 'invalid value')
        if msg.startswith('Value error, '):
            msg = msg[len('Value error, '):]
        parts.append(f"{loc}: {msg}" if loc else msg)
    return "Validation error: " + '; '.join(parts)
