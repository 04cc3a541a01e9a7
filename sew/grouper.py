"""Split a flat argument list into per-action groups."""

from typing import Iterable, Iterator, List

SEPARATOR = "^"


def group_actions(tokens: Iterable[str]) -> Iterator[List[str]]:
    """
    Yield action groups separated by the "^" token.

    The separator itself is dropped and empty groups (leading or doubled
    separators) are skipped. Trailing tokens without a closing separator
    still form a final group.

    Args:
        tokens: Arguments following the program name

    Yields:
        List[str]: Non-empty group; the first token names the action
    """
    group: List[str] = []
    for token in tokens:
        if token == SEPARATOR:
            if group:
                yield group
                group = []
            continue
        group.append(token)

    if group:
        yield group
