"""Instruction word decoding."""

from chex import dataclass


@dataclass(frozen=True)
class DecodedInstruction:
    """Instruction word split into its operand fields."""
    raw: int
    x: int       # bits 8-11, VX register
    y: int       # bits 4-7, VY register
    n: int       # bits 0-3, nibble immediate
    k: int       # low byte immediate
    addr: int    # low 12 bits, address


def decode(instruction: int) -> DecodedInstruction:
    """Decode a 16-bit instruction word."""
    instruction = int(instruction) & 0xFFFF
    return DecodedInstruction(
        raw=instruction,
        x=(instruction & 0x0F00) >> 8,
        y=(instruction & 0x00F0) >> 4,
        n=instruction & 0x000F,
        k=instruction & 0x00FF,
        addr=instruction & 0x0FFF,
    )


def join_word(high: int, low: int) -> int:
    """Big-endian pair of bytes to a 16-bit word."""
    return ((int(high) & 0xFF) << 8) | (int(low) & 0xFF)
