"""Abstract base formatter and output container.

WHY: Practice chunks are exported for several consumers: the web client
loads JSON, video tools import SRT, instructors print a numbered list. Every
exporter consumes the same ChunkedTranscript, so a shared interface lets
the CLI and HTTP API work with any of them generically.

HOW: BaseFormatter is an ABC with a ``name`` property and a ``format()``
method. FormatterOutput bundles a file suffix with its content and MIME
type.

RULES:
- Subclasses MUST implement ``name`` and ``format()``
- ``format()`` returns a list; single-file formatters return one item
- ``suffix`` starts with a hyphen, e.g. ``"-chunks.json"``
- The caller is responsible for prepending the source filename stem
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass

from segment_aligner.core.ir import ChunkedTranscript


@dataclass
class FormatterOutput:
    """One output file produced by a formatter.

    Attributes:
        suffix: File suffix appended to the source stem,
                e.g. ``"-chunks.srt"`` → ``"episode-01-chunks.srt"``.
        content: The file content.
        media_type: MIME type for the content.
    """

    suffix: str
    content: str
    media_type: str


class BaseFormatter(ABC):
    """Abstract base for all chunk exporters.

    A new exporter implements ``name``, ``suffix`` and ``format()`` in its
    own module under formatters/ and gets a key in ``FORMATTERS``. The CLI
    and the /exports endpoint pick it up from there.
    """

    @property
    @abstractmethod
    def name(self) -> str:
        """Human-readable format name, e.g. 'Chunk SRT'."""

    @property
    @abstractmethod
    def suffix(self) -> str:
        """File suffix of the (first) output file."""

    @abstractmethod
    def format(self, transcript: ChunkedTranscript) -> list[FormatterOutput]:
        """Convert chunks into one or more output files.

        Args:
            transcript: Chunks of one content item plus its source name.

        Returns:
            List of FormatterOutput objects.
        """
