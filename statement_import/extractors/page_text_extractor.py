"""Turn a page's raw text fragments into positioned tokens."""
import logging
import math
from typing import Iterable, List, Optional, Tuple

from ..models import PositionedToken

logger = logging.getLogger(__name__)


def _fragment_text(fragment) -> str:
    if isinstance(fragment, dict):
        raw = fragment.get('text', fragment.get('str'))
    else:
        raw = getattr(fragment, 'text', None)
        if raw is None:
            raw = getattr(fragment, 'str', None)
    return '' if raw is None else str(raw)


def _fragment_position(fragment) -> Tuple[float, float]:
    if isinstance(fragment, dict):
        transform = fragment.get('transform')
    else:
        transform = getattr(fragment, 'transform', None)

    if not isinstance(transform, (list, tuple)) or len(transform) != 6:
        return 0.0, 0.0

    try:
        x = float(transform[4])
        y = float(transform[5])
    except (TypeError, ValueError):
        return 0.0, 0.0

    if not (math.isfinite(x) and math.isfinite(y)):
        return 0.0, 0.0
    return x, y


def extract_tokens(fragments: Optional[Iterable]) -> List[PositionedToken]:
    """
    Normalize one page's text fragments into tokens.

    Non-breaking spaces become spaces, text is trimmed and fragments that end
    up empty are dropped. Position comes from the translation part of the
    fragment's affine transform; fragments without a valid transform are
    placed at (0, 0). Order is preserved as given.

    Args:
        fragments: Mappings or objects with ``text`` (or ``str``) and ``transform``

    Returns:
        List of PositionedToken
    """
    tokens = []
    for fragment in fragments or []:
        text = _fragment_text(fragment).replace('\u00a0', ' ').strip()
        if not text:
            continue
        x, y = _fragment_position(fragment)
        tokens.append(PositionedToken(text=text, x=x, y=y))

    logger.debug(f"Extracted {len(tokens)} tokens")
    return tokens
