"""Classification of YouTube channel URLs into channel references."""

from urllib.parse import urlsplit

from .schemas import ChannelReference, ReferenceKind

USERNAME_PREFIXES = ("user", "c")


def classify(url: str) -> ChannelReference | None:
    """Classify a channel URL by the shape of its path.

    Supported shapes:
        /channel/<ID>       -> ID reference
        /@<handle>          -> handle reference (the "@" is kept)
        /user/<name>, /c/<name> -> legacy username reference

    Args:
        url: Full channel URL including scheme and host.

    Returns:
        ChannelReference for a recognized shape, otherwise None.

    Examples:
        >>> classify("https://www.youtube.com/@veritasium")
        ChannelReference(kind=<ReferenceKind.HANDLE: 'handle'>, value='@veritasium')
        >>> classify("not a url") is None
        True
    """
    try:
        parts = urlsplit(url.strip())
    except ValueError:
        return None

    if not parts.scheme or not parts.netloc:
        return None

    segments = [segment for segment in parts.path.split("/") if segment]
    if not segments:
        return None

    first, rest = segments[0], segments[1:]

    if first == "channel":
        kind = ReferenceKind.ID
    elif first.startswith("@"):
        return ChannelReference(kind=ReferenceKind.HANDLE, value=first)
    elif first in USERNAME_PREFIXES:
        kind = ReferenceKind.USERNAME
    else:
        return None

    # /channel and /user without a second segment point nowhere
    if not rest:
        return None
    return ChannelReference(kind=kind, value=rest[0])
