"""
Diagnostics emitted by lossy schema conversions.

Some simplification rules cannot preserve the meaning of a node (a record is
collapsed to an empty object, an unsupported kind becomes a string). These
conversions still succeed, but they report what was lost through a
diagnostics sink: any callable accepting a Diagnostic.

The default sink logs each diagnostic at WARNING level. Callers that want to
inspect diagnostics pass a DiagnosticCollector instead:

    ```python
    from schema_simplify.schema import simplify
    from schema_simplify.schema.diagnostics import DiagnosticCollector
    from schema_simplify.schema.types import NumberSchema, RecordSchema

    collector = DiagnosticCollector()
    simplify(RecordSchema(NumberSchema()), diagnostics=collector)

    for diagnostic in collector:
        print(diagnostic.path, diagnostic.message)
    ```
"""

import logging
from dataclasses import dataclass
from typing import Callable, Iterator, List, Optional

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Diagnostic:
    """
    A single lossy-conversion report.

    Attributes:
        kind: Name of the node kind that was converted (e.g. "RecordSchema")
        message: Human-readable explanation
        path: Location of the node in the input tree (e.g. "$.address.tags[]")
    """

    kind: str
    message: str
    path: str = "$"

    def __str__(self) -> str:
        return f"{self.path}: {self.message}"


DiagnosticSink = Callable[[Diagnostic], None]


def log_diagnostic(diagnostic: Diagnostic) -> None:
    """Default sink: log the diagnostic as a warning."""
    logger.warning(f"{diagnostic.message} (at {diagnostic.path})")


class DiagnosticCollector:
    """
    Sink that records diagnostics in emission order.

    Attributes:
        diagnostics: Diagnostics received so far
        forward_to: Optional sink that also receives every diagnostic
    """

    def __init__(self, forward_to: Optional[DiagnosticSink] = None):
        self.diagnostics: List[Diagnostic] = []
        self.forward_to = forward_to

    def __call__(self, diagnostic: Diagnostic) -> None:
        self.diagnostics.append(diagnostic)
        if self.forward_to is not None:
            self.forward_to(diagnostic)

    def __iter__(self) -> Iterator[Diagnostic]:
        return iter(self.diagnostics)

    def __len__(self) -> int:
        return len(self.diagnostics)

    @property
    def messages(self) -> List[str]:
        """Messages of all recorded diagnostics."""
        return [d.message for d in self.diagnostics]

    def clear(self) -> None:
        """Forget all recorded diagnostics."""
        self.diagnostics.clear()
