"""
Loading DE binary files.

A DE file is a sequence of fixed-size records: the header record, the
constants record, then one record per interval from start_date to end_date.
The whole file is read into memory in a single pass.
"""

import time
from io import BytesIO
from typing import BinaryIO, Dict

import numpy as np

from ..errors import FormatError
from ..logging import get_logger
from .byte_order import HEADER_BLOCK_SIZE, MAX_CONSTANT_NAMES, detect_byte_order
from .ephemeris import DEEphemeris
from .header import EphemerisHeader, parse_header

logger = get_logger(__name__)


def _read_exactly(stream: BinaryIO, size: int, what: str) -> bytes:
    """Read exactly size bytes or fail with FormatError."""
    chunks = []
    remaining = size
    while remaining > 0:
        chunk = stream.read(remaining)
        if not chunk:
            break
        chunks.append(chunk)
        remaining -= len(chunk)

    data = b"".join(chunks)
    if len(data) != size:
        raise FormatError(f"Stream truncated in {what}: expected {size} bytes, got {len(data)}")
    return data


def _read_constants(stream: BinaryIO, header: EphemerisHeader) -> Dict[str, float]:
    raw = _read_exactly(stream, header.record_size, "constants record")

    if header.constant_count > header.record_word_count:
        raise FormatError(
            f"{header.constant_count} constants do not fit in a "
            f"{header.record_word_count}-word record"
        )
    if header.constant_count > MAX_CONSTANT_NAMES:
        logger.warning(
            f"File declares {header.constant_count} constants; only the first "
            f"{MAX_CONSTANT_NAMES} have names in the header and the rest are ignored"
        )

    values = np.frombuffer(
        raw, dtype=header.byte_order.numpy_dtype, count=len(header.constant_names)
    )
    return {name: float(value) for name, value in zip(header.constant_names, values)}


def load(stream: BinaryIO) -> DEEphemeris:
    """
    Load a DE ephemeris from a binary stream.

    Args:
        stream: Binary stream positioned at the start of the header record

    Returns:
        The loaded ephemeris

    Raises:
        FormatError: If the stream is truncated, the header is implausible or
            inconsistent, the records are not contiguous, or unexpected data
            follows the last record
    """
    raw_header = _read_exactly(stream, HEADER_BLOCK_SIZE, "header")
    byte_order = detect_byte_order(raw_header)
    header = parse_header(raw_header, byte_order)

    logger.debug(
        f"DE{header.de_number}: {byte_order.value}-endian, "
        f"{header.record_word_count} words per record, "
        f"{header.interval_count} intervals of {header.days_per_interval} days "
        f"from {header.start_date} to {header.end_date}"
    )

    # Rest of the header record is padding
    _read_exactly(stream, header.record_size - HEADER_BLOCK_SIZE, "header record")
    constants = _read_constants(stream, header)

    interval_count = header.interval_count
    try:
        raw_records = _read_exactly(
            stream, interval_count * header.record_size, "interval records"
        )
    except FormatError as e:
        raise FormatError(
            f"Stream ends before all {interval_count} interval records: {e}"
        ) from e

    # File-order view; DEEphemeris makes the single native copy
    data = np.frombuffer(raw_records, dtype=byte_order.numpy_dtype).reshape(
        interval_count, header.record_word_count
    )

    trailing = stream.read()
    if trailing and any(trailing):
        raise FormatError(
            f"{len(trailing)} bytes of trailing data after the last interval record"
        )
    if trailing:
        logger.debug(f"Ignoring {len(trailing)} bytes of zero padding")

    return DEEphemeris(header, data, constants)


def load_bytes(data: bytes) -> DEEphemeris:
    """Load a DE ephemeris from an in-memory buffer."""
    return load(BytesIO(data))


def load_file(file_path: str) -> DEEphemeris:
    """
    Load a DE ephemeris file.

    Args:
        file_path: Path to the DE binary file

    Returns:
        The loaded ephemeris
    """
    start_time = time.time()
    with open(file_path, "rb") as f:
        data = f.read()
    read_time = time.time()

    ephemeris = load_bytes(data)
    parse_time = time.time()

    logger.info(
        f"File load timing: {read_time - start_time:.3f}s to read, "
        f"{parse_time - read_time:.3f}s to parse, "
        f"total {parse_time - start_time:.3f}s"
    )
    return ephemeris
