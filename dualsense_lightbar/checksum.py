"""CRC-32 (IEEE 802.3) used to sign Bluetooth output reports.

Same polynomial, seed and final inversion as zlib/PNG; the controller firmware
drops any Bluetooth report whose trailer does not match.
"""

CRC32_POLYNOMIAL = 0xEDB88320  # reflected form of 0x04C11DB7


def _build_table() -> tuple[int, ...]:
    """Build the 256-entry lookup table for byte-wise reduction."""
    table = []
    for i in range(256):
        crc = i
        for _ in range(8):
            if crc & 1:
                crc = (crc >> 1) ^ CRC32_POLYNOMIAL
            else:
                crc >>= 1
        table.append(crc)
    return tuple(table)


_TABLE = _build_table()


def crc32(data: bytes | bytearray | memoryview) -> int:
    """Compute the CRC-32 of a byte sequence as an unsigned 32-bit integer."""
    crc = 0xFFFFFFFF
    for byte in bytes(data):
        crc = (crc >> 8) ^ _TABLE[(crc ^ byte) & 0xFF]
    return crc ^ 0xFFFFFFFF
