import base64

import mmh3

LINE_WIDTH = 76


def canonical_base64(raw):
    """
    Standard base64 wrapped at 76 characters per line.

    A newline follows every 76th character and one more is always appended,
    so an encoding of exactly 76 characters ends with two newlines. Favicon
    hash indexes were built against this exact layout.
    """
    encoded = base64.b64encode(raw)
    buffer = bytearray()
    for i in range(len(encoded)):
        buffer.append(encoded[i])
        if (i + 1) % LINE_WIDTH == 0:
            buffer += b"\n"
    buffer += b"\n"
    return bytes(buffer)


def mmh3_hash32(data):
    # mmh3.hash is x86_32 with seed 0 and already returns a signed int
    return str(mmh3.hash(data))


def favicon_hash(raw):
    return mmh3_hash32(canonical_base64(raw))
