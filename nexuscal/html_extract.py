# Public helper API: extract the nexuscal payload JSON from rendered HTML
from __future__ import annotations

import html as _html
import json
import re
from pathlib import Path
from typing import Any


class HtmlPayloadExtractError(RuntimeError):
    """Raised when no payload block can be found in an HTML page."""


_DATA_BLOCK_RE = re.compile(
    r'<script\b[^>]*\bid=["\']nx-data["\'][^>]*>(?P<body>.*?)</script>',
    flags=re.IGNORECASE | re.DOTALL,
)
_JSON_BLOCK_RE = re.compile(
    r'<script\b[^>]*\btype=["\']application/json(?:\s*;[^"\']*)?["\'][^>]*>(?P<body>.*?)</script>',
    flags=re.IGNORECASE | re.DOTALL,
)


def extract_payload_json_from_html_text(html_text: str) -> dict[str, Any]:
    """
    Extract the payload JSON from HTML.

    Supported embeddings:
      1) Preferred: <script id="nx-data"> ...json... </script>
      2) Also:      <script type="application/json[;...]" ...> ...json... </script>
    """
    for pat in (_DATA_BLOCK_RE, _JSON_BLOCK_RE):
        for m in pat.finditer(html_text):
            body = (m.group("body") or "").strip()
            if not body:
                continue
            try:
                payload = json.loads(_html.unescape(body))
            except ValueError:
                continue
            if isinstance(payload, dict):
                return payload
    raise HtmlPayloadExtractError("No <script type='application/json'> payload block found in HTML.")


def extract_payload_json_from_html_file(path: str | Path) -> dict[str, Any]:
    p = Path(path)
    return extract_payload_json_from_html_text(p.read_text(encoding="utf-8"))
