"""Exception hierarchy for glyphkit."""


class GlyphkitError(Exception):
    """Base exception for all glyphkit errors."""

    pass


class FontLoadError(GlyphkitError):
    """Error loading a font file."""

    def __init__(self, path: str, reason: str) -> None:
        self.path = path
        self.reason = reason
        super().__init__(f"Failed to load font '{path}': {reason}")


class FormatError(GlyphkitError):
    """The font binary does not follow the TrueType layout."""

    pass


class BadMagicError(FormatError):
    """Unrecognized sfnt version tag."""

    def __init__(self, version: int) -> None:
        self.version = version
        super().__init__(f"Unrecognized sfnt version 0x{version:08X}")


class MissingTableError(FormatError):
    """A required table is absent from the table directory."""

    def __init__(self, tag: str) -> None:
        self.tag = tag
        super().__init__(f"Required table '{tag}' is missing")


class TruncatedBufferError(FormatError):
    """A read or a declared table range runs past the end of its buffer."""

    def __init__(
        self,
        table: str,
        offset: int = 0,
        needed: int = 0,
        available: int = 0,
    ) -> None:
        self.table = table
        self.offset = offset
        self.needed = needed
        self.available = available
        super().__init__(
            f"Truncated '{table}' data: need {needed} bytes at offset {offset}, "
            f"{available} available"
        )


class ChecksumMismatchError(FormatError):
    """One or more tables failed checksum verification."""

    def __init__(self, tags: list[str]) -> None:
        self.tags = tags
        super().__init__(f"Checksum mismatch in tables: {', '.join(tags)}")


class InvalidGlyphIndexError(FormatError):
    """Glyph id outside 0..numGlyphs-1."""

    def __init__(self, glyph_id: int, num_glyphs: int) -> None:
        self.glyph_id = glyph_id
        self.num_glyphs = num_glyphs
        super().__init__(f"Glyph id {glyph_id} out of range (font has {num_glyphs} glyphs)")


class MalformedTableError(FormatError):
    """A table violates a structural invariant."""

    def __init__(self, tag: str, reason: str) -> None:
        self.tag = tag
        self.reason = reason
        super().__init__(f"Malformed '{tag}' table: {reason}")


class MalformedGlyphError(FormatError):
    """A glyph record violates a structural invariant."""

    def __init__(self, glyph_id: int, reason: str) -> None:
        self.glyph_id = glyph_id
        self.reason = reason
        super().__init__(f"Malformed glyph {glyph_id}: {reason}")


class CompoundCycleError(MalformedGlyphError):
    """A compound glyph references itself, directly or through other glyphs."""

    def __init__(self, glyph_id: int, chain: tuple[int, ...]) -> None:
        self.chain = chain
        path = " -> ".join(str(g) for g in (*chain, glyph_id))
        super().__init__(glyph_id, f"component reference cycle ({path})")


class CompoundDepthError(MalformedGlyphError):
    """Compound glyph nesting exceeds the configured maximum depth."""

    def __init__(self, glyph_id: int, depth: int) -> None:
        self.depth = depth
        super().__init__(glyph_id, f"component nesting exceeds depth {depth}")


class UnsupportedCompoundEncodingError(FormatError):
    """Compound component placed by point matching rather than by offsets."""

    def __init__(self, glyph_id: int) -> None:
        self.glyph_id = glyph_id
        super().__init__(
            f"Glyph {glyph_id} positions a component by point matching, which is not supported"
        )


class CompoundOutlineError(GlyphkitError):
    """Outline of a compound glyph requested without a font to resolve components."""

    def __init__(self, glyph_id: int) -> None:
        self.glyph_id = glyph_id
        super().__init__(
            f"Glyph {glyph_id} is compound; pass the owning font to resolve its components"
        )
