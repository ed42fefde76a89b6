"""glyf table decoding.

Resolves a glyph id to its byte range through the loca offsets and decodes
those bytes into simple, compound or empty glyph data.

Simple glyph layout (after the 10-byte header):

    endPtsOfContours   uint16[numberOfContours]
    instructionLength  uint16
    instructions       uint8[instructionLength]
    flags              uint8[]   run-length compressed
    xCoordinates       deltas, 1 or 2 bytes each, selected by flag bits
    yCoordinates       deltas, same scheme

Compound glyph layout is a chain of component records terminated by a
record whose MORE_COMPONENTS flag is clear.
"""

import struct

from glyphkit.domain.contour import Point
from glyphkit.domain.glyph import (
    ARG_1_AND_2_ARE_WORDS,
    ARGS_ARE_XY_VALUES,
    MORE_COMPONENTS,
    WE_HAVE_A_SCALE,
    WE_HAVE_A_TWO_BY_TWO,
    WE_HAVE_AN_X_AND_Y_SCALE,
    WE_HAVE_INSTRUCTIONS,
    Component,
    ComponentTransform,
    CompoundGlyphData,
    EmptyGlyphData,
    GlyphData,
    GlyphDescription,
    SimpleGlyphData,
)
from glyphkit.exceptions import (
    CompoundCycleError,
    InvalidGlyphIndexError,
    MalformedGlyphError,
    MalformedTableError,
    TruncatedBufferError,
    UnsupportedCompoundEncodingError,
)
from glyphkit.io.cursor import ByteCursor

# Simple glyph point flags
ON_CURVE_POINT = 0x01
X_SHORT_VECTOR = 0x02
Y_SHORT_VECTOR = 0x04
REPEAT_FLAG = 0x08
X_IS_SAME_OR_POSITIVE = 0x10
Y_IS_SAME_OR_POSITIVE = 0x20

COMPOUND_CONTOUR_COUNT = -1


def glyph_bytes(loca: tuple[int, ...], glyf: bytes, glyph_id: int) -> bytes:
    """Slice one glyph's record out of the glyf table.

    Args:
        loca: numGlyphs + 1 absolute offsets into glyf
        glyf: Raw glyf table
        glyph_id: Glyph to resolve

    Returns:
        The glyph's bytes; empty for zero-length entries

    Raises:
        InvalidGlyphIndexError: If glyph_id is not below numGlyphs
        MalformedTableError: If the loca offsets decrease
        TruncatedBufferError: If the range runs past the glyf table
    """
    num_glyphs = len(loca) - 1
    if not 0 <= glyph_id < num_glyphs:
        raise InvalidGlyphIndexError(glyph_id, num_glyphs)

    start, end = loca[glyph_id], loca[glyph_id + 1]
    if start > end:
        raise MalformedTableError(
            "loca", f"offsets decrease at glyph {glyph_id} ({start} > {end})"
        )
    if end > len(glyf):
        raise TruncatedBufferError("glyf", offset=start, needed=end - start, available=len(glyf) - start)
    return glyf[start:end]


def decode_glyph(data: bytes, glyph_id: int) -> tuple[GlyphDescription, GlyphData]:
    """Decode a glyph record.

    Args:
        data: The glyph's bytes as returned by glyph_bytes
        glyph_id: Id of the glyph, used for self-reference checks and errors

    Returns:
        Tuple of (bounding box, glyph data)

    Raises:
        MalformedGlyphError: On a structural violation
        UnsupportedCompoundEncodingError: On point-matched components
        TruncatedBufferError: If the record is cut short
    """
    if not data:
        return GlyphDescription.EMPTY, EmptyGlyphData()

    cursor = ByteCursor(data, table="glyf")
    number_of_contours = cursor.i16()
    description = GlyphDescription(
        x_min=cursor.i16(),
        y_min=cursor.i16(),
        x_max=cursor.i16(),
        y_max=cursor.i16(),
    )

    if number_of_contours >= 0:
        return description, _decode_simple(cursor, glyph_id, number_of_contours)
    if number_of_contours == COMPOUND_CONTOUR_COUNT:
        return description, _decode_compound(cursor, glyph_id)
    raise MalformedGlyphError(glyph_id, f"numberOfContours {number_of_contours} is invalid")


def _decode_simple(cursor: ByteCursor, glyph_id: int, number_of_contours: int) -> SimpleGlyphData:
    end_points = cursor.array_u16(number_of_contours)
    for prev, cur in zip(end_points, end_points[1:]):
        if cur <= prev:
            raise MalformedGlyphError(
                glyph_id, f"contour end points not strictly increasing ({prev}, {cur})"
            )

    instructions = cursor.read(cursor.u16())
    num_points = end_points[-1] + 1 if end_points else 0

    flags = _decode_flags(cursor, glyph_id, num_points)
    xs = _decode_coordinates(cursor, flags, X_SHORT_VECTOR, X_IS_SAME_OR_POSITIVE)
    ys = _decode_coordinates(cursor, flags, Y_SHORT_VECTOR, Y_IS_SAME_OR_POSITIVE)

    coordinates = tuple(
        Point(x, y, bool(flag & ON_CURVE_POINT)) for x, y, flag in zip(xs, ys, flags)
    )
    return SimpleGlyphData(
        end_points_of_contours=end_points,
        coordinates=coordinates,
        instructions=instructions,
    )


def _decode_flags(cursor: ByteCursor, glyph_id: int, num_points: int) -> list[int]:
    flags: list[int] = []
    while len(flags) < num_points:
        flag = cursor.u8()
        flags.append(flag)
        if flag & REPEAT_FLAG:
            count = cursor.u8()
            if len(flags) + count > num_points:
                raise MalformedGlyphError(
                    glyph_id, f"flag repeat overruns {num_points} points"
                )
            flags.extend([flag] * count)
    return flags


def _decode_coordinates(
    cursor: ByteCursor, flags: list[int], short_bit: int, same_bit: int
) -> list[int]:
    """Accumulate one axis of deltas into absolute coordinates."""
    values = []
    value = 0
    for flag in flags:
        if flag & short_bit:
            delta = cursor.u8()
            value += delta if flag & same_bit else -delta
        elif not flag & same_bit:
            value += cursor.i16()
        values.append(value)
    return values


def _decode_compound(cursor: ByteCursor, glyph_id: int) -> CompoundGlyphData:
    components = []
    flags = MORE_COMPONENTS
    while flags & MORE_COMPONENTS:
        flags = cursor.u16()
        component_id = cursor.u16()
        if component_id == glyph_id:
            raise CompoundCycleError(glyph_id, (glyph_id,))

        if flags & ARG_1_AND_2_ARE_WORDS:
            arg1, arg2 = cursor.i16(), cursor.i16()
        else:
            arg1, arg2 = cursor.i8(), cursor.i8()
        if not flags & ARGS_ARE_XY_VALUES:
            raise UnsupportedCompoundEncodingError(glyph_id)

        transform = None
        if flags & WE_HAVE_A_SCALE:
            scale = cursor.f2dot14()
            transform = ComponentTransform(xx=scale, yy=scale)
        elif flags & WE_HAVE_AN_X_AND_Y_SCALE:
            transform = ComponentTransform(xx=cursor.f2dot14(), yy=cursor.f2dot14())
        elif flags & WE_HAVE_A_TWO_BY_TWO:
            transform = ComponentTransform(
                xx=cursor.f2dot14(),
                xy=cursor.f2dot14(),
                yx=cursor.f2dot14(),
                yy=cursor.f2dot14(),
            )

        components.append(
            Component(glyph_id=component_id, dx=arg1, dy=arg2, transform=transform, flags=flags)
        )

    instructions = b""
    if flags & WE_HAVE_INSTRUCTIONS:
        instructions = cursor.read(cursor.u16())
    return CompoundGlyphData(components=tuple(components), instructions=instructions)


def encode_deltas(values: list[int], short_bit: int, same_bit: int) -> tuple[list[int], bytes]:
    """Encode absolute coordinates of one axis as flag bits plus a delta stream.

    Zero deltas use the "same" form, magnitudes up to 255 the one-byte form
    and everything else a signed 16-bit word.

    Returns:
        Tuple of (per-point axis flag bits, encoded delta bytes)
    """
    flags = []
    stream = bytearray()
    previous = 0
    for value in values:
        delta = value - previous
        previous = value
        if delta == 0:
            flags.append(same_bit)
        elif -255 <= delta <= 255:
            flags.append(short_bit | (same_bit if delta > 0 else 0))
            stream.append(abs(delta))
        else:
            flags.append(0)
            stream += struct.pack(">h", delta)
    return flags, bytes(stream)


def encode_flags(flags: list[int]) -> bytes:
    """Run-length compress point flags; runs of three or more use REPEAT_FLAG."""
    out = bytearray()
    i = 0
    while i < len(flags):
        flag = flags[i]
        run = 1
        while i + run < len(flags) and flags[i + run] == flag and run < 256:
            run += 1
        if run >= 3:
            out += bytes((flag | REPEAT_FLAG, run - 1))
        else:
            out += bytes([flag] * run)
        i += run
    return bytes(out)


def encode_simple_glyph(data: SimpleGlyphData, description: GlyphDescription | None = None) -> bytes:
    """Encode simple glyph data as a glyf record.

    The bounding box is computed from the coordinates when no description
    is given.
    """
    points = data.coordinates
    if description is None:
        if points:
            description = GlyphDescription(
                x_min=int(min(p.x for p in points)),
                y_min=int(min(p.y for p in points)),
                x_max=int(max(p.x for p in points)),
                y_max=int(max(p.y for p in points)),
            )
        else:
            description = GlyphDescription.EMPTY

    x_flags, x_stream = encode_deltas([int(p.x) for p in points], X_SHORT_VECTOR, X_IS_SAME_OR_POSITIVE)
    y_flags, y_stream = encode_deltas([int(p.y) for p in points], Y_SHORT_VECTOR, Y_IS_SAME_OR_POSITIVE)
    flags = [
        (ON_CURVE_POINT if p.on_curve else 0) | xf | yf
        for p, xf, yf in zip(points, x_flags, y_flags)
    ]

    n = data.number_of_contours
    header = struct.pack(
        ">hhhhh",
        n,
        description.x_min,
        description.y_min,
        description.x_max,
        description.y_max,
    )
    return b"".join(
        [
            header,
            struct.pack(f">{n}H", *data.end_points_of_contours),
            struct.pack(">H", len(data.instructions)),
            data.instructions,
            encode_flags(flags),
            x_stream,
            y_stream,
        ]
    )
