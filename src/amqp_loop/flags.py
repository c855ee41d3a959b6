"""AmqpFlag — bit flags accepted by exchange and queue operations."""

from __future__ import annotations

import enum


class AmqpFlag(enum.IntFlag):
    """Flag bitmask passed through ``publish``, ``ack``, ``nack`` and ``reject``."""

    NOPARAM = 0
    AUTOACK = 128
    MANDATORY = 1024
    IMMEDIATE = 2048
    MULTIPLE = 4096
    REQUEUE = 16384
