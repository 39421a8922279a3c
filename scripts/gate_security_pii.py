#!/usr/bin/env python3
"""Security & PII gate for the relay source tree.

Fails if:
- print( found in runtime code (src/**)
- A logger call mentions chat data or credentials without redaction
- Direct logging of payload/request/body without safe_log_context

Logger calls are checked as a whole, so an `extra=` argument on a later
line counts as redaction for the message on the first line.

Usage:
    python scripts/gate_security_pii.py
"""

import re
import sys
from pathlib import Path

# Keywords that must not appear in logger calls without redaction
SENSITIVE_KEYWORDS = (
    "payload",
    "request.body",
    "request.json",
    "webhook",
    "celular",
    "chat_number",
    "telefone",
    "texto_mensagem",
    "phone",
    "api_key",
    "admin_pass",
    "session_secret",
)

# Pattern for print statements
PRINT_PATTERN = re.compile(r"\bprint\s*\(")

# Pattern for logger calls: logger.info/debug/warning/error/critical(...)
LOGGER_CALL_PATTERN = re.compile(
    r"logger\.(debug|info|warning|error|critical|exception)\s*\("
)

# Patterns that indicate proper redaction usage
REDACTION_PATTERNS = (
    "safe_log_context",
    "redact_value",
    "redact_string",
    "mask_secret",
    "log_ctx",
)


def _code_part(line: str) -> str:
    return line.split("#")[0] if "#" in line else line


def _logger_call_text(lines: list[str], start: int) -> str:
    """Join the lines of the logger call opening at lines[start]."""
    depth = 0
    parts = []
    for line in lines[start:]:
        code = _code_part(line)
        parts.append(code)
        depth += code.count("(") - code.count(")")
        if depth <= 0:
            break
    return "\n".join(parts)


def check_file(filepath: Path) -> list[str]:
    """Check a single file for violations. Returns list of error messages."""
    errors = []
    try:
        content = filepath.read_text(encoding="utf-8")
    except UnicodeDecodeError:
        return []  # Skip binary files

    lines = content.splitlines()

    for index, line in enumerate(lines):
        lineno = index + 1
        stripped = line.lstrip()

        # Skip comments
        if stripped.startswith("#"):
            continue

        if PRINT_PATTERN.search(_code_part(line)):
            errors.append(f"{filepath}:{lineno}: print() not allowed in runtime code")

        if LOGGER_CALL_PATTERN.search(line):
            call = _logger_call_text(lines, index)
            call_lower = call.lower()
            has_redaction = any(rp in call for rp in REDACTION_PATTERNS)
            if has_redaction:
                continue
            for keyword in SENSITIVE_KEYWORDS:
                if keyword in call_lower:
                    errors.append(
                        f"{filepath}:{lineno}: logger call with '{keyword}' "
                        "must use redaction (safe_log_context/redact_value)"
                    )

    return errors


def main(src_dir: Path | None = None) -> int:
    """Run gate check on src directory."""
    if src_dir is None:
        src_dir = Path("src")
        if not src_dir.exists():
            # Try from project root
            src_dir = Path(__file__).parent.parent / "src"

    if not src_dir.exists():
        sys.stderr.write("Error: src directory not found\n")
        return 1

    all_errors: list[str] = []

    for pyfile in sorted(src_dir.rglob("*.py")):
        all_errors.extend(check_file(pyfile))

    if all_errors:
        sys.stderr.write("PII gate FAILED - Security/PII violations found:\n")
        for err in all_errors:
            sys.stderr.write(f"  {err}\n")
        return 1

    sys.stdout.write("PII gate PASSED - No security/PII violations found\n")
    return 0


if __name__ == "__main__":
    sys.exit(main())
