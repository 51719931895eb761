from typing import Union


def hex_to_bytes(hex_str: Union[str, bytes]) -> bytes:
    """
    Convert a hex string to bytes.

    Args:
        hex_str: Hex digits, optionally wrapped in PDF ``<`` ``>`` delimiters
            and interspersed with whitespace.

    Returns:
        The decoded bytes

    Raises:
        ValueError: If a character is not a hex digit.
    """
    if isinstance(hex_str, bytes):
        hex_str = hex_str.decode("latin-1")
    hex_str = "".join(hex_str.split())
    if hex_str.startswith("<") and hex_str.endswith(">"):
        hex_str = hex_str[1:-1]

    # If odd number of digits, assume last digit is 0
    if len(hex_str) % 2 == 1:
        hex_str += "0"
    return bytes.fromhex(hex_str)


def bytes_to_hex(data: bytes) -> str:
    """Convert bytes to a lowercase hex string without delimiters."""
    return bytes(data).hex()
