"""Yggdrasil address derivation.

An address is ``0x02`` (the network prefix), then the count of leading one
bits of the identity's ID, then the bits that follow the first zero bit,
packed into the remaining 14 bytes. More leading ones means a shorter
common prefix with other nodes, which is why that count is the strength.
"""

from ipaddress import IPv6Address

ADDRESS_PREFIX = 0x02
_ADDRESS_LEN = 16


def invert(buf: bytes) -> bytes:
    return bytes(b ^ 0xFF for b in buf)


def leading_ones(buf: bytes) -> int:
    count = 0
    for byte in buf:
        if byte == 0xFF:
            count += 8
            continue
        count += 8 - (byte ^ 0xFF).bit_length()
        break
    return count


def leading_zeros(buf: bytes) -> int:
    count = 0
    for byte in buf:
        if byte == 0:
            count += 8
            continue
        count += 8 - byte.bit_length()
        break
    return count


def address_for_id(node_id: bytes) -> IPv6Address:
    """Pack ``node_id`` into an address. Only whole bytes of the tail are used."""
    total_bits = len(node_id) * 8
    ones = leading_ones(node_id)
    tail_bits = max(total_bits - ones - 1, 0)
    tail_bytes = tail_bits // 8

    value = int.from_bytes(node_id, "big") & ((1 << tail_bits) - 1)
    packed = (value >> (tail_bits - tail_bytes * 8)).to_bytes(tail_bytes, "big")

    raw = bytes([ADDRESS_PREFIX, min(ones, 0xFF)]) + packed
    raw = raw[:_ADDRESS_LEN].ljust(_ADDRESS_LEN, b"\x00")
    return IPv6Address(raw)
