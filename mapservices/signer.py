"""HMAC-SHA1 signing of request URLs."""

from __future__ import annotations

import base64
import hashlib
import hmac
from typing import Mapping, Sequence, Union
from urllib.parse import quote_plus

QueryValues = Mapping[str, Union[str, Sequence[str]]]


def generate_signature(key: bytes, message: str) -> str:
    """Return the URL-safe base64 HMAC-SHA1 of ``message`` under ``key``."""
    digest = hmac.new(key, message.encode("utf-8"), hashlib.sha1).digest()
    return base64.urlsafe_b64encode(digest).decode("ascii")


def encode_query(values: QueryValues) -> str:
    """Encode query values as ``k=v`` pairs joined by ``&``, sorted by key."""
    pairs = []
    for name in sorted(values):
        items = values[name]
        if isinstance(items, str):
            items = [items]
        escaped_name = quote_plus(name, safe="")
        pairs.extend(f"{escaped_name}={quote_plus(item, safe='')}" for item in items)
    return "&".join(pairs)


def sign_url(path: str, signature: bytes, values: QueryValues) -> str:
    """Return the encoded query of ``values`` with a ``signature`` parameter appended."""
    encoded = encode_query(values)
    signed = generate_signature(signature, f"{path}?{encoded}")
    return f"{encoded}&signature={signed}"