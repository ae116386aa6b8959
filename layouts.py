"""Keyboard layout model: four physical rows, shifted and unshifted."""

from dataclasses import dataclass
from enum import Enum
from typing import Mapping, Optional


class Row(Enum):
    """Physical key rows in canonical build order."""
    NUMBER = 'number'
    TOP = 'top'
    MIDDLE = 'middle'
    BOTTOM = 'bottom'


@dataclass(frozen=True)
class KeyPosition:
    row: Row
    slot: int
    shifted: bool
    alt: bool = False


# JSON key of each row in layout files: (unshifted, shifted)
_ROW_KEYS = {
    Row.NUMBER: ('numberRow', 'numberRowShifted'),
    Row.TOP: ('topRow', 'topRowShifted'),
    Row.MIDDLE: ('middleRow', 'middleRowShifted'),
    Row.BOTTOM: ('bottomRow', 'bottomRowShifted'),
}


def _parse_row(data: dict, key: str) -> tuple[str, ...]:
    value = data.get(key)
    if value is None:
        return ()
    if not isinstance(value, list):
        raise ValueError(f'{key} must be a list, got {type(value).__name__}')
    row = []
    for i, ch in enumerate(value):
        if ch is None:
            ch = ''
        if not isinstance(ch, str):
            raise ValueError(f'{key}[{i}] must be a string, got {ch!r}')
        row.append(ch)
    return tuple(row)


def _parse_alt(data: dict) -> Optional[dict[str, str]]:
    value = data.get('altCombinations')
    if value is None:
        return None
    if not isinstance(value, dict):
        raise ValueError('altCombinations must be an object')
    for base, alt in value.items():
        if not isinstance(alt, str) or len(base) != 1 or len(alt) != 1:
            raise ValueError(
                f'altCombinations must map single characters, got {base!r}: {alt!r}')
    return dict(value)


@dataclass(frozen=True)
class LayoutDict:
    """Character placement of one physical keyboard layout.

    Slot ``i`` of a row denotes the same physical key in every layout, so two
    layouts can be compared position by position. Empty strings mark slots
    with no character.

    ``alt_combinations`` maps a base character, located in the reference
    (English QWERTY) layout, to the character produced by AltGr on that key.
    """
    number_row: tuple[str, ...] = ()
    number_row_shifted: tuple[str, ...] = ()
    top_row: tuple[str, ...] = ()
    top_row_shifted: tuple[str, ...] = ()
    middle_row: tuple[str, ...] = ()
    middle_row_shifted: tuple[str, ...] = ()
    bottom_row: tuple[str, ...] = ()
    bottom_row_shifted: tuple[str, ...] = ()
    alt_combinations: Optional[Mapping[str, str]] = None
    name: str = ''

    @classmethod
    def from_dict(cls, data: dict, name: str = '') -> 'LayoutDict':
        """Build a layout from a parsed layout file.

        Missing rows are treated as empty. Raises ValueError when a value has
        the wrong shape.
        """
        if not isinstance(data, dict):
            raise ValueError(f'layout must be an object, got {type(data).__name__}')
        rows = {}
        for row, (plain_key, shifted_key) in _ROW_KEYS.items():
            rows[f'{row.value}_row'] = _parse_row(data, plain_key)
            rows[f'{row.value}_row_shifted'] = _parse_row(data, shifted_key)
        return cls(alt_combinations=_parse_alt(data), name=name, **rows)

    def row(self, row: Row, shifted: bool = False) -> tuple[str, ...]:
        suffix = '_shifted' if shifted else ''
        return getattr(self, f'{row.value}_row{suffix}')

    def char_at(self, row: Row, slot: int, shifted: bool = False) -> str:
        """Character at a physical slot, or '' if the slot is empty or absent."""
        chars = self.row(row, shifted)
        if 0 <= slot < len(chars):
            return chars[slot]
        return ''
