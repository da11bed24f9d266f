HASH_SIZE = 32


def check_hash(value: bytes) -> bytes:
    if not isinstance(value, bytes) or len(value) != HASH_SIZE:
        raise ValueError(f"Claim values must be {HASH_SIZE}-bytes hashes.")
    return value


def hash_from_hex(s: str) -> bytes:
    """Converts a hex string, with or without the 0x prefix, to a 32-byte hash, left-padding it with zeros."""

    if s.startswith(("0x", "0X")):
        s = s[2:]
    if len(s) % 2 == 1:
        s = "0" + s

    raw = bytes.fromhex(s)
    if len(raw) > HASH_SIZE:
        raise ValueError(f"Hex string is longer than {HASH_SIZE} bytes")
    return raw.rjust(HASH_SIZE, b'\x00')


def hash_from_int(n: int) -> bytes:
    return n.to_bytes(HASH_SIZE, byteorder='big')


def format_hash(value: bytes) -> str:
    return "0x" + value.hex()
