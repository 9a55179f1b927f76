# potion_server/schemas.py

from enum import Enum
from pydantic import BaseModel, ConfigDict, field_validator
from pydantic_core import PydanticCustomError
from potion_server.core.sanitize import clean_text


# -------------------------------
# Potions
# -------------------------------

POTION_EXAMPLE = {
    "name": "Potion de vie",
    "price": 50,
    "vendor": "60d5ec9a8f4a2a001f2e3d4a",
    "category": "Soins",
    "strength": 7.5,
    "flavor": 5.0,
    "score": 8.2,
}


class PotionCreate(BaseModel):
    """
    Request body for creating a potion. Only type checks apply;
    the vendor is an opaque identifier.
    """
    model_config = ConfigDict(allow_inf_nan=False, json_schema_extra={"examples": [POTION_EXAMPLE]})

    name: str
    price: float | None = None
    vendor: str | None = None
    category: str | None = None
    strength: float | None = None
    flavor: float | None = None
    score: float | None = None


class PotionUpdate(BaseModel):
    """
    Request body for updating a potion. Only the fields that are sent
    get merged into the stored record.
    """
    model_config = ConfigDict(
        allow_inf_nan=False,
        json_schema_extra={"examples": [{"price": 45, "score": 9.1}]},
    )

    name: str | None = None
    price: float | None = None
    vendor: str | None = None
    category: str | None = None
    strength: float | None = None
    flavor: float | None = None
    score: float | None = None

    @field_validator("name")
    @classmethod
    def name_not_null(cls, value):
        if value is None:
            raise PydanticCustomError("name_null", "Name cannot be null.")
        return value


class PotionOut(PotionCreate):
    model_config = ConfigDict(from_attributes=True)

    id: int


class DistinctCategories(BaseModel):
    total_categories: int


# -------------------------------
# Analytics allow-lists
# -------------------------------

class GroupField(str, Enum):
    vendor = "vendor"
    category = "category"


class Metric(str, Enum):
    avg = "avg"
    sum = "sum"
    count = "count"
    min = "min"
    max = "max"


class MetricField(str, Enum):
    score = "score"
    price = "price"
    strength = "strength"
    flavor = "flavor"


# -------------------------------
# Auth
# -------------------------------

class Credentials(BaseModel):
    model_config = ConfigDict(
        json_schema_extra={"examples": [{"name": "harry", "password": "patronus123"}]}
    )

    name: str
    password: str

    @field_validator("name", "password", mode="before")
    @classmethod
    def sanitize(cls, value):
        if isinstance(value, str):
            return clean_text(value)
        return value


class RegisterRequest(Credentials):
    @field_validator("name")
    @classmethod
    def check_name(cls, value: str) -> str:
        if not value:
            raise PydanticCustomError("name_required", "Name is required.")
        if not 3 <= len(value) <= 30:
            raise PydanticCustomError("name_length", "Name must be between 3 and 30 characters.")
        return value

    @field_validator("password")
    @classmethod
    def check_password(cls, value: str) -> str:
        if not value:
            raise PydanticCustomError("password_required", "Password is required.")
        if len(value) < 6:
            raise PydanticCustomError("password_length", "Password must be at least 6 characters.")
        return value


class LoginRequest(Credentials):
    pass


class Principal(BaseModel):
    user_id: int
    user_name: str


class Message(BaseModel):
    message: str
