"""Human-readable formatting of sizes and durations."""

BYTE_UNITS = ("B", "KB", "MB", "GB")


def format_bytes(size_bytes: int) -> str:
    """Format a byte count with binary units.

    Values below 1024 are printed as whole bytes; larger values are scaled
    by 1024 until they fit, up to GB, with two decimal places.

    Examples:
        >>> format_bytes(500)
        '500 B'
        >>> format_bytes(2048)
        '2.00 KB'
    """
    size = float(size_bytes)
    unit_index = 0
    while size >= 1024.0 and unit_index < len(BYTE_UNITS) - 1:
        size /= 1024.0
        unit_index += 1

    if unit_index == 0:
        return f"{size_bytes} {BYTE_UNITS[0]}"
    return f"{size:.2f} {BYTE_UNITS[unit_index]}"


def format_duration(seconds: float) -> str:
    """Format an elapsed time.

    Under one second the value is shown in whole milliseconds, otherwise in
    seconds with two decimals. Exactly one second is shown as ``1.00s``.
    """
    if seconds < 1.0:
        return f"{int(seconds * 1000)}ms"
    return f"{seconds:.2f}s"
