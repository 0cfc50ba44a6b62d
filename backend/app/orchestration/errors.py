"""Search pipeline exception types.

Terminal errors propagate out of the search call. Tool-level errors
(UnknownToolError, ToolArgumentDecodingError) are caught by the orchestration
loop and fed back to the model as failed tool responses.
"""


class SearchError(Exception):
    """Base class for search pipeline failures."""

    pass


class TransportError(SearchError):
    """Model call failed or timed out."""

    pass


class DecodingError(SearchError):
    """A payload could not be mapped onto its declared shape."""

    pass


class ToolArgumentDecodingError(DecodingError):
    """Tool argument payload does not match the tool's declared input."""

    def __init__(self, tool_name: str, message: str) -> None:
        super().__init__(f"Invalid arguments for tool {tool_name}: {message}")
        self.tool_name = tool_name


class OutputDecodingError(DecodingError):
    """Final model text could not be decoded into a user list."""

    def __init__(self, message: str, raw_text: str) -> None:
        super().__init__(f"{message}. Raw text: {raw_text!r}")
        self.raw_text = raw_text


class UnknownToolError(SearchError):
    """Model requested a tool that is not in the registry."""

    def __init__(self, tool_name: str) -> None:
        super().__init__(f"Unknown tool: {tool_name}")
        self.tool_name = tool_name


class RoundLimitExceededError(SearchError):
    """Model did not produce a final answer within the round budget."""

    def __init__(self, max_rounds: int) -> None:
        super().__init__(f"No final answer after {max_rounds} model round(s)")
        self.max_rounds = max_rounds


class SearchCancelledError(SearchError):
    """Search session was cancelled before completion."""

    pass
