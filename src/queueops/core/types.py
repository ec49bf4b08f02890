"""Type aliases used across queueops."""

from __future__ import annotations

from typing import Any, Callable

# Raw message body -> structure handed to the message handler
BodyDecoder = Callable[[str], Any]
