"""Selection of the representation to render from a MIME bundle."""

from collections.abc import Iterable, Mapping
from typing import Any, Optional


def merge_data_renderers(
    builtin: Mapping[str, Any],
    user: Optional[Mapping[str, Any]] = None,
) -> dict[str, Any]:
    """Merge user-supplied media-type renderers with the built-in ones.

    User renderers replace built-ins registered for the same media type. The
    keys of the result are ordered with the user's types first (in the given
    order) followed by the remaining built-ins, so the default priority order
    prefers the user's renderers.

    Args:
        builtin: Built-in renderers in their default priority order
        user: Renderers supplied by the user

    Returns:
        dict: Merged renderers keyed by media type
    """
    user = user or {}
    return {**user, **builtin, **user}


def resolve_data_type(
    bundle: Mapping[str, Any],
    priority: Iterable[str],
    renderers: Mapping[str, Any],
) -> Optional[str]:
    """Find the media type of the representation to render.

    Args:
        bundle: Representations of one output keyed by media type
        priority: Media types in the priority order
        renderers: Registered renderers keyed by media type

    Returns:
        Optional[str]: The first type in priority order that has a non-empty
        representation in the bundle and a registered renderer, or None
    """
    for mime_type in priority:
        if bundle.get(mime_type) and mime_type in renderers:
            return mime_type
    return None
