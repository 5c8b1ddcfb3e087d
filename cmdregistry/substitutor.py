"""Placeholder substitution for command template bodies."""

DEFAULT_PLACEHOLDER = "$ARGUMENTS"


def substitute(body: str, argument: str, placeholder: str = DEFAULT_PLACEHOLDER) -> str:
    """Replace every occurrence of ``placeholder`` in ``body`` with ``argument``.

    The replacement is literal and single-pass: placeholder text carried in by
    ``argument`` is not expanded again. A body without the placeholder comes
    back unchanged.
    """
    if not placeholder:
        raise ValueError("placeholder must be a non-empty string")
    return body.replace(placeholder, argument)
