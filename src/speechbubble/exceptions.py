"""Exception hierarchy for Speechbubble."""


class SpeechBubbleError(Exception):
    """Base exception for all Speechbubble errors."""

    pass


class FontError(SpeechBubbleError):
    """Errors related to font loading for text measurement."""

    pass


class FontLoadError(FontError):
    """Error loading a font file."""

    def __init__(self, path: str, reason: str) -> None:
        self.path = path
        self.reason = reason
        super().__init__(f"Failed to load font '{path}': {reason}")


class GeometryError(SpeechBubbleError):
    """Errors in geometric calculations."""

    pass


class DegenerateGeometryError(GeometryError):
    """Input geometry cannot produce a finite result.

    Raised for zero-length vectors that would need normalizing, collinear
    edges during polygon inset, zero-area bubble bodies and empty point sets.
    """

    def __init__(self, reason: str) -> None:
        self.reason = reason
        super().__init__(f"Degenerate geometry: {reason}")


class BubbleError(SpeechBubbleError):
    """Errors related to rendering a bubble."""

    pass


class BubbleRenderError(BubbleError):
    """Error rendering a specific bubble."""

    def __init__(self, bubble_id: str, reason: str) -> None:
        self.bubble_id = bubble_id
        self.reason = reason
        super().__init__(f"Error rendering bubble '{bubble_id}': {reason}")


class RenderSaveError(BubbleError):
    """Error saving rendered bubbles to a document."""

    def __init__(self, path: str, reason: str) -> None:
        self.path = path
        self.reason = reason
        super().__init__(f"Failed to save '{path}': {reason}")
