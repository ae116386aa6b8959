"""Character -> physical key index and position-preserving remapping."""

from typing import Optional

from layouts import KeyPosition, LayoutDict, Row

KeyIndex = dict[str, KeyPosition]


def build_index(layout: LayoutDict, reference: LayoutDict,
                include_alt: bool = True) -> KeyIndex:
    """Index every character of a layout by its physical key.

    Rows are walked number -> top -> middle -> bottom, unshifted before
    shifted; a character found in several slots keeps the last one.

    Alt combinations are placed on the key where their base character sits in
    the ``reference`` layout and overwrite row entries of the same character.

    Args:
        layout: Layout to index.
        reference: Layout that alt combination base characters refer to.
        include_alt: Also index ``layout.alt_combinations``.

    Returns:
        Mapping of character to KeyPosition.
    """
    index: KeyIndex = {}
    for row in Row:
        for shifted in (False, True):
            for slot, ch in enumerate(layout.row(row, shifted)):
                if ch:
                    index[ch] = KeyPosition(row, slot, shifted)

    if include_alt and layout.alt_combinations:
        # The reference never resolves its own alt table here
        reference_index = build_index(reference, reference, include_alt=False)
        for base, alt_char in layout.alt_combinations.items():
            pos = reference_index.get(base)
            if pos is not None:
                index[alt_char] = KeyPosition(pos.row, pos.slot, pos.shifted, alt=True)
    return index


def _is_upper(ch: str) -> bool:
    return ch == ch.upper() and ch != ch.lower()


def _alt_base(layout: LayoutDict, ch: str, lower: str) -> Optional[str]:
    """Base character whose alt combination in ``layout`` produces ``ch``."""
    for base, alt_char in (layout.alt_combinations or {}).items():
        if alt_char == ch or alt_char == lower:
            return base
    return None


def remap_char(ch: str, from_layout: LayoutDict, to_layout: LayoutDict,
               from_index: KeyIndex) -> str:
    """Remap a single character. Characters without a mapping are kept as-is."""
    is_upper = _is_upper(ch)
    lower = ch.lower()

    pos = from_index.get(lower) or from_index.get(ch)
    if pos is None:
        return ch

    if pos.alt and to_layout.alt_combinations:
        base = _alt_base(from_layout, ch, lower)
        if base is not None:
            target = to_layout.alt_combinations.get(base)
            if target:
                return target.upper() if is_upper else target

    # Alt characters fall back to their key; plain keys never become alt
    # characters on the way back.
    mapped = to_layout.char_at(pos.row, pos.slot, is_upper or pos.shifted)
    if not mapped:
        return ch
    return mapped.upper() if is_upper else mapped


def remap(text: str, from_layout: LayoutDict, to_layout: LayoutDict,
          from_index: KeyIndex) -> str:
    """Retype text on the same physical keys under another layout.

    Args:
        text: Text typed under ``from_layout``.
        from_layout: Layout the text was typed in.
        to_layout: Layout the keys should be read with.
        from_index: ``build_index(from_layout, ...)``.

    Returns:
        Remapped text, same number of characters modulo case expansion.
        Characters without mapping are kept as-is.
    """
    return ''.join(remap_char(ch, from_layout, to_layout, from_index)
                   for ch in text)
