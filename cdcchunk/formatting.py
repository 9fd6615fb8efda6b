"""Number formatting helpers."""


def format_under(n: int) -> str:
    """Render ``n`` in decimal with ``_`` between groups of three characters.

    Grouping counts from the right over the whole decimal string, sign included.
    """
    text = str(int(n))
    if len(text) <= 3:
        return text
    head = len(text) % 3 or 3
    groups = [text[:head]]
    groups.extend(text[i:i + 3] for i in range(head, len(text), 3))
    return "_".join(groups)