from ._exceptions import DTInvalidNameError

SEP = "/"


def split_path(path: str) -> tuple[bool, list[str]]:
    """Split *path* into ``(is_absolute, segments)``.

    Backslashes are accepted as separators. Empty and ``"."`` segments are
    kept; the resolver treats them as no-ops.
    """
    converted = path.replace("\\", SEP)
    is_absolute = converted.startswith(SEP)
    if is_absolute:
        converted = converted[1:]
    return is_absolute, converted.split(SEP)


def validate_name(name: str) -> str:
    if not name or name.isspace():
        raise DTInvalidNameError(name, "name is blank")
    if SEP in name or "\\" in name:
        raise DTInvalidNameError(name, "name contains a path separator")
    if any(ord(ch) < 0x20 or ord(ch) == 0x7F for ch in name):
        raise DTInvalidNameError(name, "name contains a control character")
    if name in (".", ".."):
        raise DTInvalidNameError(name, "name is reserved for navigation")
    return name
