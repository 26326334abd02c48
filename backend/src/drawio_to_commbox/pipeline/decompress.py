"""draw.io diagram payload codec: base64 + raw deflate + URI component encoding.

draw.io stores the graph model as ``base64(deflateRaw(encodeURIComponent(xml)))``.
Decoding follows ``decodeURIComponent`` strictly: malformed escapes are errors,
``+`` stays a plus sign.
"""

from __future__ import annotations

import base64
import binascii
import re
import urllib.parse
import zlib

from .. import config
from ..errors import DecodeError, DecodeFailure

# Raw deflate: no zlib header, no checksum
_RAW_DEFLATE_WBITS = -15

# Characters encodeURIComponent leaves untouched besides ASCII letters and digits
_URI_COMPONENT_SAFE = "-_.!~*'()"

_WHITESPACE_RE = re.compile(r"\s+")
_BAD_PERCENT_RE = re.compile(r"%(?![0-9A-Fa-f]{2})")


def decompress_diagram(payload: str, max_output: int | None = None) -> str:
    """Recover the mxGraphModel markup from a compressed <diagram> payload.

    Inflation stops at max_output bytes (default config.MAX_MODEL_BYTES); a
    payload that would expand further is rejected.
    """
    compact = _WHITESPACE_RE.sub("", payload or "")
    try:
        raw = base64.b64decode(compact, validate=True)
    except (binascii.Error, ValueError) as e:
        raise DecodeError(DecodeFailure.INVALID_BASE64, f"Diagram payload is not valid base64: {e}") from e

    limit = config.MAX_MODEL_BYTES if max_output is None else max_output
    inflater = zlib.decompressobj(wbits=_RAW_DEFLATE_WBITS)
    try:
        inflated = inflater.decompress(raw, limit)
    except zlib.error as e:
        raise DecodeError(
            DecodeFailure.INFLATE_FAILURE, f"Failed to decompress Draw.io file: {e}"
        ) from e
    if not inflater.eof:
        if len(inflated) >= limit:
            raise DecodeError(DecodeFailure.INFLATE_FAILURE, f"Decompressed diagram exceeds {limit} bytes")
        raise DecodeError(
            DecodeFailure.INFLATE_FAILURE, "Failed to decompress Draw.io file: truncated stream"
        )

    try:
        text = inflated.decode("utf-8")
    except UnicodeDecodeError as e:
        raise DecodeError(DecodeFailure.INVALID_ENCODING, "Decompressed payload is not UTF-8 text") from e
    return decode_uri_component(text)


def decode_uri_component(text: str) -> str:
    """Percent-decode like JavaScript's decodeURIComponent (strict UTF-8, no '+' handling)."""
    bad = _BAD_PERCENT_RE.search(text)
    if bad:
        raise DecodeError(
            DecodeFailure.INVALID_ENCODING,
            f"Malformed percent escape at offset {bad.start()}",
        )
    try:
        return urllib.parse.unquote_to_bytes(text).decode("utf-8")
    except UnicodeDecodeError as e:
        raise DecodeError(
            DecodeFailure.INVALID_ENCODING, "Percent escapes do not form valid UTF-8"
        ) from e


def compress_diagram(markup: str) -> str:
    """Encode markup the way draw.io does; inverse of decompress_diagram."""
    encoded = urllib.parse.quote(markup, safe=_URI_COMPONENT_SAFE)
    compressor = zlib.compressobj(9, zlib.DEFLATED, _RAW_DEFLATE_WBITS)
    deflated = compressor.compress(encoded.encode("ascii")) + compressor.flush()
    return base64.b64encode(deflated).decode("ascii")
