"""
MealVibe - Prompt Logger.

Writes each LLM call to a markdown file for debugging.
Enabled via MEALVIBE_LOG_PROMPTS=1 or the --log-prompts CLI flag.
"""

import json
import os
from datetime import datetime
from pathlib import Path

LOG_PROMPTS = os.getenv("MEALVIBE_LOG_PROMPTS", "0") == "1"
LOG_DIR = Path("prompt_logs")

# Session tracking
_session_id: str | None = None
_call_counter: int = 0


def enable_prompt_logging(enabled: bool = True) -> None:
    """Enable or disable prompt logging."""
    global LOG_PROMPTS
    LOG_PROMPTS = enabled
    if enabled:
        LOG_DIR.mkdir(exist_ok=True)


def _get_session_dir() -> Path:
    global _session_id
    if _session_id is None:
        _session_id = datetime.now().strftime("%Y%m%d_%H%M%S")
    session_dir = LOG_DIR / _session_id
    session_dir.mkdir(parents=True, exist_ok=True)
    return session_dir


def _render_message(message: dict) -> str:
    """Render one chat message; image parts are summarized, not dumped."""
    content = message.get("content")
    if isinstance(content, str):
        return content
    parts = []
    for part in content or []:
        if part.get("type") == "text":
            parts.append(part.get("text", ""))
        elif part.get("type") == "image_url":
            url = part.get("image_url", {}).get("url", "")
            parts.append(f"[image: {len(url)} chars]")
        else:
            parts.append(json.dumps(part, default=str))
    return "\n".join(parts)


def log_prompt(
    *,
    name: str,
    model: str,
    messages: list[dict],
    response: str | None = None,
    error: str | None = None,
) -> Path | None:
    """
    Log a prompt and response to a file.

    Returns the file path, or None if logging is disabled.
    """
    if not LOG_PROMPTS:
        return None

    global _call_counter
    _call_counter += 1

    filepath = _get_session_dir() / f"{_call_counter:02d}_{name}.md"

    rendered = "\n\n".join(
        f"### {m.get('role', 'user')}\n\n```\n{_render_message(m)}\n```" for m in messages
    )

    content = f"""# LLM Call: {name}

**Time:** {datetime.now().isoformat()}
**Model:** {model}

---

## Messages

{rendered}

---

## Response

"""
    if error:
        content += f"**ERROR:** {error}\n"
    elif response:
        content += f"```\n{response}\n```\n"
    else:
        content += "(No response)\n"

    filepath.write_text(content, encoding="utf-8")
    return filepath


def reset_session() -> None:
    """Reset the session (for testing)."""
    global _session_id, _call_counter
    _session_id = None
    _call_counter = 0
