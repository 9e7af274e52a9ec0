"""
Line Codes.

Manchester (IEEE 802.3: 0 -> '01', 1 -> '10'), differential and NRZI
encodings with their inverses.
"""

from bitscope.validation import AlignmentError, InvalidParameterError, validate_bits


def manchester_encode(bits: str) -> str:
    validate_bits(bits)
    return ''.join('01' if b == '0' else '10' for b in bits)


def manchester_decode(bits: str) -> str:
    validate_bits(bits)
    if len(bits) % 2:
        raise AlignmentError('manchester_decode', len(bits), 2)
    out = []
    for i in range(0, len(bits), 2):
        pair = bits[i:i + 2]
        if pair == '01':
            out.append('0')
        elif pair == '10':
            out.append('1')
        else:
            raise InvalidParameterError('bits', pair, f'invalid Manchester symbol at index {i}')
    return ''.join(out)


def differential_encode(bits: str) -> str:
    """First bit kept; each later bit is 1 where the input changed."""
    validate_bits(bits)
    if not bits:
        return ''
    return bits[0] + ''.join('0' if a == b else '1' for a, b in zip(bits, bits[1:]))


def differential_decode(bits: str) -> str:
    validate_bits(bits)
    if not bits:
        return ''
    out = [bits[0]]
    for b in bits[1:]:
        out.append(out[-1] if b == '0' else ('1' if out[-1] == '0' else '0'))
    return ''.join(out)


def nrzi_encode(bits: str) -> str:
    """A '1' toggles the line level (initially '0'); a '0' holds it."""
    validate_bits(bits)
    level = '0'
    out = []
    for b in bits:
        if b == '1':
            level = '1' if level == '0' else '0'
        out.append(level)
    return ''.join(out)


def nrzi_decode(bits: str) -> str:
    validate_bits(bits)
    prev = '0'
    out = []
    for b in bits:
        out.append('0' if b == prev else '1')
        prev = b
    return ''.join(out)
