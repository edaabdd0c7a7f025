# compression/negotiation.py
"""Accept-Encoding negotiation."""
from typing import List, Optional, Sequence, Tuple
import logging

from .encodings import Encoding, OFFERED_ENCODINGS

logger = logging.getLogger("squash.compression.negotiation")


def parse_accept_encoding(header: Optional[str]) -> List[Tuple[str, float]]:
    """
    Parse an Accept-Encoding header into (coding, quality) pairs.

    Codings are lower-cased and kept in client order. A missing or malformed
    quality value counts as 1 and 0 respectively.
    """
    entries = []
    if not header:
        return entries

    for part in header.split(","):
        params = part.strip().split(";")
        coding = params[0].strip().lower()
        if not coding:
            continue

        quality = 1.0
        for param in params[1:]:
            key, _, value = param.partition("=")
            if key.strip().lower() != "q":
                continue
            try:
                quality = float(value.strip())
            except ValueError:
                logger.debug(f"Malformed quality value in Accept-Encoding: {part!r}")
                quality = 0.0
        entries.append((coding, quality))
    return entries


def negotiate_encoding(
    accept_encoding: Optional[str],
    offered: Sequence[Encoding] = OFFERED_ENCODINGS
) -> Encoding:
    """
    Pick the best offered encoding the client accepts.

    Ranking is by quality, then exact match over ``*``, then the client's
    order, then the offered order. Returns ``Encoding.IDENTITY`` when the
    client accepts none of the offered encodings.
    """
    entries = parse_accept_encoding(accept_encoding)
    candidates = []

    for offered_index, encoding in enumerate(offered):
        match = None
        for client_index, (coding, quality) in enumerate(entries):
            if coding == encoding.value:
                match = (quality, 1, client_index)
                break
            if coding == "*" and match is None:
                match = (quality, 0, client_index)
        if match is None or match[0] <= 0:
            continue
        quality, specificity, client_index = match
        candidates.append((-quality, -specificity, client_index, offered_index, encoding))

    if not candidates:
        return Encoding.IDENTITY
    return min(candidates)[-1]
