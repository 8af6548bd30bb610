"""Telegram codec for z21codec.

This module provides the telegram decoder and the outbound command builders.
"""

from __future__ import annotations

from .constants import DEFAULT_BROADCAST_FLAGS, BroadcastFlag, LanHeader, XHeader
from .decoder import decode_telegram
from .encoder import COMMANDS, build_telegram, build_xbus_telegram

__all__ = [
    "decode_telegram",
    "build_telegram",
    "build_xbus_telegram",
    "COMMANDS",
    "BroadcastFlag",
    "DEFAULT_BROADCAST_FLAGS",
    "LanHeader",
    "XHeader",
]
