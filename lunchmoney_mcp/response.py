"""
Response shaping for tool results.

Every list-style tool hands its upstream payload to ``OutputFormatter``,
which picks the serialization (compact JSON or TOON) and the delivery mode
(inline text, or a temp file plus a short summary so large result sets do
not flood the model's context window).
"""

import json
import logging
import time
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Annotated, Any, Dict, Optional, Union

from pydantic import Field
from toon_format import encode as toon_encode

logger = logging.getLogger(__name__)

DEFAULT_SUMMARY = "Data written to file"


class ResponseFormat(str, Enum):
    JSON = "json"
    TOON = "toon"


class ResponseMode(str, Enum):
    INLINE = "inline"
    FILE = "file"


# Annotated field types shared by the input models of list tools.
ResponseFormatField = Annotated[
    ResponseFormat,
    Field(description=(
        "Response format: 'json' (default) or 'toon' (Token-Oriented Object Notation). "
        "TOON reduces token usage by ~40% for uniform arrays."
    )),
]
ResponseModeField = Annotated[
    ResponseMode,
    Field(description=(
        "Response mode: 'inline' (default) returns data in the response. "
        "'file' writes data to a temp file and returns the path with a summary, "
        "keeping the context window small for large result sets."
    )),
]


@dataclass(frozen=True)
class FormatOptions:
    tool_name: str
    summary: Optional[str] = None


def serialize(data: Any, response_format: Union[ResponseFormat, str] = ResponseFormat.JSON) -> str:
    """Encode ``data`` as compact JSON or TOON. Pure, no side effects."""
    if ResponseFormat(response_format) == ResponseFormat.TOON:
        return toon_encode(data)
    return json.dumps(data, separators=(",", ":"), ensure_ascii=False)


class OutputFormatter:
    """Serializes tool payloads and delivers them inline or via a temp file.

    Args:
        root_dir: Directory that receives ``response_mode="file"`` output.
            Created on first use. Files are never cleaned up here.
    """

    def __init__(self, root_dir: Union[str, Path]):
        self.root_dir = Path(root_dir)
        self._last_stamp: Dict[str, int] = {}

    def _next_stamp(self, tool_name: str) -> int:
        # Epoch millis, bumped so one tool never reuses a stamp in this process.
        stamp = int(time.time() * 1000)
        last = self._last_stamp.get(tool_name)
        if last is not None and stamp <= last:
            stamp = last + 1
        self._last_stamp[tool_name] = stamp
        return stamp

    def format_response(
        self,
        data: Any,
        response_format: Union[ResponseFormat, str] = ResponseFormat.JSON,
        response_mode: Union[ResponseMode, str] = ResponseMode.INLINE,
        options: Optional[FormatOptions] = None,
    ) -> str:
        """Produce the text of the tool's single content item.

        Inline mode returns the serialized payload as-is. File mode writes it to
        ``{tool_name}-{epoch_millis}.{json|toon}`` under ``root_dir`` and returns
        four lines: summary, ``File:``, ``Format:`` and ``Size:`` (KB, UTF-8 bytes).

        Raises:
            OSError: if the directory cannot be created or the file written.
        """
        fmt = ResponseFormat(response_format)
        mode = ResponseMode(response_mode)
        text = serialize(data, fmt)

        if mode == ResponseMode.INLINE:
            return text

        if options is None:
            raise ValueError("options with a tool_name are required for file mode")

        self.root_dir.mkdir(parents=True, exist_ok=True)
        filename = f"{options.tool_name}-{self._next_stamp(options.tool_name)}.{fmt.value}"
        file_path = (self.root_dir / filename).resolve()
        file_path.write_text(text, encoding="utf-8")

        size_kb = len(text.encode("utf-8")) / 1024
        summary_line = options.summary if options.summary is not None else DEFAULT_SUMMARY
        logger.info("Wrote %s response to %s (%.1f KB)", fmt.value, file_path, size_kb)

        return "\n".join([
            summary_line,
            f"File: {file_path}",
            f"Format: {fmt.value}",
            f"Size: {size_kb:.1f} KB",
        ])
