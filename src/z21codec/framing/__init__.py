"""Telegram framing for z21codec.

This module splits received datagrams into length-prefixed telegrams.
"""

from __future__ import annotations

from .telegram import MIN_TELEGRAM_LENGTH, FramedDatagram, iter_telegrams, split_datagram

__all__ = [
    "MIN_TELEGRAM_LENGTH",
    "FramedDatagram",
    "iter_telegrams",
    "split_datagram",
]
