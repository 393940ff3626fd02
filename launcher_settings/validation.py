"""Integrity checks over a complete settings dataset.

All checks are pure and stop at the first violation, raising a typed
:class:`~launcher_settings.errors.ValidationError` whose message names the
offending entity and the missing target.
"""
from __future__ import annotations

from typing import Callable, Dict, Iterable, Optional, Set, Union

from .components import Components
from .errors import DanglingReferenceError, DuplicateNameError, MissingIconError, NoBoardsError
from .model import EntityKind, SettingsData
from .references import ReferenceSite, iter_reference_sites
from .resources import Resources

_DESCRIPTIONS: Dict[EntityKind, str] = {
    EntityKind.COLOR_SCHEME: "Color scheme",
    EntityKind.TEXT_STYLE: "Text style",
    EntityKind.PADSET: "Pad set",
    EntityKind.BOARD: "Board",
}


def _names(data: Union[SettingsData, Components], kind: EntityKind) -> Iterable[str]:
    collection = {
        EntityKind.COLOR_SCHEME: data.color_schemes,
        EntityKind.TEXT_STYLE: data.text_styles,
        EntityKind.BOARD: data.boards,
        EntityKind.PADSET: data.padsets,
    }[kind]
    return (entity.name for entity in collection)


def pad_label(site: ReferenceSite) -> str:
    if site.pad is not None and site.pad.header:
        return site.pad.header
    return f"#{(site.slot or 0) + 1}"


def describe_owner(site: ReferenceSite) -> str:
    if site.in_pad and site.padset is not None:
        return f"pad '{pad_label(site)}' in padset '{site.padset.name}'"
    if site.board is not None:
        return f"board '{site.board.name}'"
    return "settings"


def validate_unique_names(data: Union[SettingsData, Components]) -> None:
    """Each entity kind must use every name at most once."""

    for kind in (EntityKind.COLOR_SCHEME, EntityKind.TEXT_STYLE, EntityKind.BOARD, EntityKind.PADSET):
        seen: Set[str] = set()
        for name in _names(data, kind):
            if name in seen:
                raise DuplicateNameError(f"Duplicate '{kind.label}' name found: {name}", kind.label, name)
            seen.add(name)


def _dangling_message(site: ReferenceSite, target: str) -> str:
    board = site.board.name if site.board is not None else ""
    if site.in_pad:
        padset = site.padset.name if site.padset is not None else ""
        if site.kind is EntityKind.BOARD:
            return f"Cross board validation failed: Invalid board reference '{target}' in pad '{pad_label(site)}' of padset '{padset}'"
        return (
            f"Cross board validation failed: {_DESCRIPTIONS[site.kind]} '{target}' not found "
            f"for pad '{pad_label(site)}' in padset '{padset}'"
        )
    if site.kind is EntityKind.COLOR_SCHEME:
        return f"Color scheme validation failed: Color scheme '{target}' for board '{board}' not found in settings"
    if site.kind is EntityKind.TEXT_STYLE:
        return f"Text style validation failed: Text style '{target}' for board '{board}' not found in settings"
    if site.modifier is not None:
        return (
            f"Pad reference validation failed: Modifier pad set '{target}' not found "
            f"for board '{board}' with modifier '{site.modifier}'"
        )
    return f"Pad reference validation failed: Base pad set '{target}' not found for board '{board}'"


def _check_sites(data: SettingsData, accept: Callable[[ReferenceSite], bool]) -> None:
    known = {kind: set(_names(data, kind)) for kind in EntityKind}
    for site in iter_reference_sites(data):
        if not accept(site):
            continue
        target = site.get()
        if target is None or target in known[site.kind]:
            continue
        raise DanglingReferenceError(_dangling_message(site, target), site.kind.label, target, describe_owner(site))


def validate_data_integrity(data: SettingsData) -> None:
    """Require at least one board and that every named reference resolves.

    Board scheme references are checked first, then board style references,
    board pad set references (base and modifiers) and finally every pad's
    board, scheme and style references.
    """

    if not data.boards:
        raise NoBoardsError("No boards defined in settings")
    _check_sites(data, lambda site: not site.in_pad and site.kind is EntityKind.COLOR_SCHEME)
    _check_sites(data, lambda site: not site.in_pad and site.kind is EntityKind.TEXT_STYLE)
    _check_sites(data, lambda site: not site.in_pad and site.kind is EntityKind.PADSET)
    _check_sites(data, lambda site: site.in_pad)


def validate_icons_availability(data: SettingsData, resources: Resources) -> None:
    """Every icon named by a board or pad must exist in the resource store."""

    for board in data.boards:
        if board.icon and resources.icon(board.icon) is None:
            raise MissingIconError(f"Icon '{board.icon}' not found for board '{board.name}'", board.icon, board.name)
    for padset in data.padsets:
        for slot, pad in enumerate(padset.items):
            if pad.icon and resources.icon(pad.icon) is None:
                label = pad.header or f"#{slot + 1}"
                owner = f"pad '{label}' in padset '{padset.name}'"
                raise MissingIconError(f"Icon '{pad.icon}' not found for {owner}", pad.icon, owner)


def first_problem(data: SettingsData) -> Optional[str]:
    """Return the first integrity problem as text, or None when the data is valid."""

    try:
        validate_unique_names(data)
        validate_data_integrity(data)
    except (DuplicateNameError, DanglingReferenceError, NoBoardsError) as exc:
        return str(exc)
    return None
