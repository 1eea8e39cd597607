from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal

from .models import ChannelId, Role
from .validation import MODAL_KAS_ZERO_MESSAGE


@dataclass(frozen=True)
class Channel:
    id: ChannelId
    name: str
    label: str
    owner_only: bool = False


CHANNELS: tuple[Channel, ...] = (
    Channel(ChannelId.KARANGSARI, "Aplikasi-1 / KARANGSARI", "KARANGSARI"),
    Channel(ChannelId.FASTPAY, "Aplikasi-2 / FASTPAY", "FASTPAY"),
    Channel(ChannelId.MMBC, "Aplikasi-3 / MMBC", "MMBC"),
    Channel(ChannelId.PAYFAZZ, "Aplikasi-4 / PAYFAZZ", "PAYFAZZ"),
    Channel(ChannelId.POSFIN, "Aplikasi-5 / POSFIN", "POSFIN"),
    Channel(ChannelId.BUKU_AGEN, "Aplikasi-6 / BUKU AGEN/BUKU WARUNG", "BUKU AGEN/BUKU WARUNG"),
    Channel(ChannelId.MODAL_KAS, "Aplikasi-7 / MODAL KAS", "MODAL KAS", owner_only=True),
)

_BY_ID = {channel.id.value: channel for channel in CHANNELS}


def visible_channels(role: str | None) -> list[ChannelId]:
    is_owner = role == Role.OWNER.value
    return [channel.id for channel in CHANNELS if is_owner or not channel.owner_only]


def channel_info(channel_id: ChannelId | str) -> Channel | None:
    key = channel_id.value if isinstance(channel_id, ChannelId) else channel_id
    return _BY_ID.get(key)


def channel_label(channel_id: ChannelId | str) -> str:
    channel = channel_info(channel_id)
    if channel is not None:
        return channel.label
    return (channel_id.value if isinstance(channel_id, ChannelId) else str(channel_id)).upper()


def reject_zero_modal_kas(channel_id: ChannelId | str, nominal: Decimal) -> str | None:
    key = channel_id.value if isinstance(channel_id, ChannelId) else channel_id
    if key == ChannelId.MODAL_KAS.value and nominal == 0:
        return MODAL_KAS_ZERO_MESSAGE
    return None
