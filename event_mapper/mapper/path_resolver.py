from collections.abc import Mapping
from typing import Any, Optional, Sequence


def resolve(root: Mapping, path: Sequence[str]) -> Optional[Any]:
    """
    Follow `path` key by key through nested mappings.

    Returns the value found at the last key, or None when the field is
    absent. A key holding None counts as absent, as does any key that has
    to be looked up in something other than a mapping.
    """
    current = root
    for key in path:
        if not isinstance(current, Mapping):
            return None

        current = current.get(key)

        if current is None:
            return None

    return current
