from __future__ import annotations
from typing import Iterable

def render_map(length: int, positions: Iterable[int], width: int=80) -> str:
    """One line per sequence: 'x' where anything in the bin is removed, '.' otherwise."""
    if length <= 0:
        return ''
    width=min(width, length)
    buf=['.']*width
    for p in positions:
        buf[min(width-1, p*width//length)]='x'
    return ''.join(buf)
