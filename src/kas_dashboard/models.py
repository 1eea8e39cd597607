from __future__ import annotations

from datetime import date, datetime, timezone
from decimal import Decimal
from enum import Enum
from typing import Generic, List, Optional, TypeVar, Union

from pydantic import BaseModel, ConfigDict, Field

T = TypeVar("T")

RawNumber = Union[int, float, str, None]


class Role(str, Enum):
    OWNER = "owner"
    KASIR = "kasir"


class ChannelId(str, Enum):
    KARANGSARI = "karangsari"
    FASTPAY = "fastpay"
    MMBC = "mmbc"
    PAYFAZZ = "payfazz"
    POSFIN = "posfin"
    BUKU_AGEN = "buku_agen"
    MODAL_KAS = "modal_kas"


class ChartPeriod(str, Enum):
    HARIAN = "harian"
    MINGGUAN = "mingguan"
    BULANAN = "bulanan"


class TransferStatus(str, Enum):
    PENDING = "pending"
    LUNAS = "lunas"


class AuthUser(BaseModel):
    model_config = ConfigDict(extra="allow")

    id: int
    role: str
    username: str | None = None

    @property
    def is_owner(self) -> bool:
        return self.role == Role.OWNER.value


class SessionData(BaseModel):
    access_token: str | None = None
    user: Optional[AuthUser] = None
    env_name: str | None = None


class UserSummary(BaseModel):
    model_config = ConfigDict(extra="allow")

    id: int
    username: str | None = None
    role: str | None = None


class BalanceRecord(BaseModel):
    model_config = ConfigDict(extra="allow")

    id: int
    modal_type: str
    user_id: int | None = None
    nominal: Decimal = Decimal("0")
    created_at: datetime


class TransferRecord(BaseModel):
    model_config = ConfigDict(extra="allow")

    id: int
    tanggal: Union[datetime, date]
    bank_tujuan: str | None = None
    nomor_rekening: str | None = None
    nama_pemilik: str | None = None
    nominal: Decimal = Decimal("0")
    biaya: Decimal = Decimal("0")
    keterangan: str | None = None
    status: str | None = None
    cashier_id: int | None = None

    @property
    def total(self) -> Decimal:
        return self.nominal + self.biaya

    @property
    def transfer_date(self) -> date:
        """Calendar date of the transfer, read in UTC when the server sent a timestamp."""
        value = self.tanggal
        if isinstance(value, datetime):
            if value.tzinfo is not None:
                value = value.astimezone(timezone.utc)
            return value.date()
        return value

    @property
    def is_pending(self) -> bool:
        return (self.status or "").strip().lower() == TransferStatus.PENDING.value

    @property
    def status_label(self) -> str:
        return self.status or "Pending"


class FavoriteRecipient(BaseModel):
    model_config = ConfigDict(extra="allow")

    bank_tujuan: str
    nomor_rekening: str
    nama_pemilik: str


class ChartSeriesPoint(BaseModel):
    model_config = ConfigDict(extra="allow")

    tanggal: str | None = None
    total: RawNumber = None
    total_nominal: RawNumber = None
    total_biaya: RawNumber = None
    total_all: RawNumber = None


class PaginationMeta(BaseModel):
    model_config = ConfigDict(extra="allow", populate_by_name=True)

    page: int = 1
    limit: int = 10
    total: int = 0
    total_pages: int | None = Field(default=None, alias="totalPages")


class ListPage(BaseModel, Generic[T]):
    """Rows of one list fetch; ``pagination`` is None when the server sent a bare array."""

    rows: List[T] = Field(default_factory=list)
    pagination: PaginationMeta | None = None


class TransferPayload(BaseModel):
    tanggal: date
    bank_tujuan: str
    nomor_rekening: str
    nama_pemilik: str
    nominal: Decimal
    biaya: Decimal
    keterangan: str = ""
