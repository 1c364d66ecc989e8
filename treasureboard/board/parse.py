"""
Parsing of whitespace-delimited decimal tokens.

Creators type bombs + salt and later the solution as space separated numbers;
players type a game id and a slot. Failures are typed errors (`ParseError`,
`InvalidSolutionByte`). Substituting the token's own position for a bad
token is available only as an explicit, opt-in policy and is always logged.
"""

from __future__ import annotations

import logging
import re
from enum import Enum
from typing import List, Optional

from treasureboard.constants import MAX_BYTE
from treasureboard.errors import InvalidSolutionByte, ParseError

log = logging.getLogger(__name__)

_DECIMAL_RE = re.compile(r"^[+-]?\d+$")


class IndexFallback(Enum):
    """What to do with a token that is not a valid value."""
    STRICT = "strict"      # raise
    POSITION = "position"  # substitute the token's position and warn


def parse_int(token: str, *, field: Optional[str] = None) -> int:
    """Parse one decimal integer token; raise ParseError otherwise."""
    s = token.strip() if isinstance(token, str) else ""
    if not _DECIMAL_RE.match(s):
        raise ParseError(str(token), field=field)
    return int(s, 10)


def split_tokens(text: str) -> List[str]:
    return text.split()


def parse_byte_tokens(
    text: str,
    *,
    fallback: IndexFallback = IndexFallback.STRICT,
) -> List[int]:
    """
    Parse "1 3 5 112 119" into [1, 3, 5, 112, 119].

    Each token must be a decimal integer in [0, 255]. With the default STRICT
    policy a non-decimal token raises ParseError and an out-of-range one
    raises InvalidSolutionByte. With IndexFallback.POSITION both are replaced
    by their position in the list, with a warning per substitution, as long
    as that position is itself a valid byte.
    """
    out: List[int] = []
    for i, tok in enumerate(split_tokens(text)):
        try:
            value = parse_int(tok)
            if not 0 <= value <= MAX_BYTE:
                raise InvalidSolutionByte(i, value)
        except (ParseError, InvalidSolutionByte) as e:
            if fallback is IndexFallback.STRICT or i > MAX_BYTE:
                if isinstance(e, ParseError):
                    raise ParseError(tok, position=i, field="byte") from None
                raise
            log.warning("invalid byte token %r at position %d; substituting %d", tok, i, i)
            value = i
        out.append(value)
    return out


__all__ = ["IndexFallback", "parse_int", "split_tokens", "parse_byte_tokens"]
