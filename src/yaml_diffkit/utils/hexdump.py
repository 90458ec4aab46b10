def _printable(byte):
    return chr(byte) if 0x20 <= byte <= 0x7E else "."


def hex_dump(data: bytes) -> str:
    """
    Canonical hex dump, 16 bytes per line:
    00000000  48 65 6c 6c 6f 2c 20 77  6f 72 6c 64 0a           |Hello, world.|
    """
    lines = []
    for offset in range(0, len(data), 16):
        chunk = data[offset:offset + 16]
        left = " ".join(f"{b:02x}" for b in chunk[:8])
        right = " ".join(f"{b:02x}" for b in chunk[8:])
        gutter = "".join(_printable(b) for b in chunk)
        lines.append(f"{offset:08x}  {left:<23}  {right:<23}  |{gutter}|\n")
    return "".join(lines)
