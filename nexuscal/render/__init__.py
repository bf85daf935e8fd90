"""HTML rendering: shell + CSS + JS, per-view markup and the inline payload."""
