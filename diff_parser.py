"""Zero-copy views over unified diff text: Diff -> File -> Chunk."""

from dataclasses import dataclass, field
from typing import Dict, Iterator, List, Tuple, Union

from boundary_scanner import Span, find_spans, first_line
from log_setup import get_logger

logger = get_logger(__name__)

FILE_MARKER = "+++ "
CHUNK_MARKER = "@@ "


class PatchError(Exception):
    """Base class for errors raised while reading patches."""


class MalformedHeaderError(PatchError):
    """A file section whose first line cannot carry a file name."""

    def __init__(self, line: str, offset: int):
        self.line = line
        self.offset = offset
        if line:
            message = f"header line at offset {offset} is shorter than {len(FILE_MARKER)} characters: {line!r}"
        else:
            message = f"file section at offset {offset} has no header line"
        super().__init__(message)


@dataclass(frozen=True)
class Chunk:
    """One hunk of a file section, from its "@@ " line to the next one."""
    source: str = field(repr=False)
    start: int
    end: int

    @property
    def span(self) -> Span:
        """(start, end) character offsets into ``source``."""
        return self.start, self.end

    @property
    def content(self) -> str:
        """Raw hunk text, header line included."""
        return self.source[self.start:self.end]

    @property
    def header(self) -> str:
        return first_line(self.source, self.start, self.end)


@dataclass(frozen=True)
class File:
    """One file section of a patch, from its "+++ " line to the next one."""
    source: str = field(repr=False)
    start: int
    end: int
    chunks: Tuple[Chunk, ...] = ()

    @classmethod
    def from_span(cls, source: str, start: int, end: int) -> "File":
        """
        Build a File over ``source[start:end]`` and locate its chunks.

        Args:
            source: The full patch text shared by every view
            start: Offset of the section's "+++ " line
            end: Offset where the next section (or the text) ends

        Returns:
            File whose chunks are ordered as they appear in the section
        """
        spans = find_spans(source, CHUNK_MARKER, start, end)
        if not spans:
            logger.debug("no_chunks", start=start, end=end)
        chunks = tuple(Chunk(source, chunk_start, chunk_end) for chunk_start, chunk_end in spans)
        return cls(source, start, end, chunks)

    @property
    def span(self) -> Span:
        """
        (start, end) offsets into ``source``.

        Offsets count characters of the str, not encoded bytes; the two only
        differ for non-ASCII patches.
        """
        return self.start, self.end

    @property
    def content(self) -> str:
        """Raw section text, including its "+++ " line and every hunk."""
        return self.source[self.start:self.end]

    @property
    def name(self) -> str:
        """
        File name taken from the header line.

        The first 4 characters (the "+++ " marker) are stripped and nothing
        else is touched, so trailing metadata such as timestamps stays.

        Raises:
            MalformedHeaderError: If the section is empty or its first line
                is shorter than the marker
        """
        line = first_line(self.source, self.start, self.end)
        if len(line) < len(FILE_MARKER):
            raise MalformedHeaderError(line, self.start)
        return line[len(FILE_MARKER):]

    def __len__(self) -> int:
        return len(self.chunks)

    def __bool__(self) -> bool:
        # A section without hunks is still a section
        return True

    def __iter__(self) -> Iterator[Chunk]:
        return iter(self.chunks)


@dataclass(frozen=True)
class Diff:
    """A whole patch: the input text and its file sections in order."""
    source: str = field(repr=False)
    files: Tuple[File, ...] = ()

    @classmethod
    def parse(cls, text: str) -> "Diff":
        """
        Parse patch text into file sections and chunks.

        Every view keeps a reference to ``text`` plus offsets into it; no
        section text is copied while parsing.

        Args:
            text: Raw unified diff text

        Returns:
            Diff with one File per "+++ " line (none if there are no such lines)
        """
        if not isinstance(text, str):
            raise TypeError(f"patch text must be str, not {type(text).__name__}")

        spans = find_spans(text, FILE_MARKER)
        if not spans:
            logger.debug("no_file_sections", length=len(text))
            return cls(text)

        files = tuple(File.from_span(text, start, end) for start, end in spans)
        logger.debug("files_parsed", files=len(files), chunks=sum(len(f.chunks) for f in files))
        return cls(text, files)

    @property
    def content(self) -> str:
        return self.source

    @property
    def preamble(self) -> str:
        """Text before the first file section (the whole text when there is none)."""
        if not self.files:
            return self.source
        return self.source[:self.files[0].start]

    def file(self, name: str) -> File:
        """Return the first file section called ``name``."""
        for patched_file in self.files:
            if patched_file.name == name:
                return patched_file
        raise KeyError(name)

    def summary(self) -> List[Dict[str, Union[str, int]]]:
        """Name, chunk count and character offsets of every file section."""
        return [
            {
                "name": patched_file.name,
                "chunks": len(patched_file.chunks),
                "start": patched_file.start,
                "end": patched_file.end,
            }
            for patched_file in self.files
        ]

    def __len__(self) -> int:
        return len(self.files)

    def __iter__(self) -> Iterator[File]:
        return iter(self.files)
