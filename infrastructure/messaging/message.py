"""FT message envelope."""

from dataclasses import dataclass, field

FT_MESSAGE_MARKER = "FTMSG/1.0"


@dataclass(frozen=True)
class FTMessage:
    """A stream message: string headers plus a raw body."""

    headers: dict[str, str] = field(default_factory=dict)
    body: str = ""

    def header(self, name: str, default: str = "") -> str:
        """Case-insensitive header lookup."""
        wanted = name.lower()
        for key, value in self.headers.items():
            if key.lower() == wanted:
                return value
        return default

    def build(self) -> str:
        """Render the native envelope (inverse of parse_ft_message)."""
        lines = [FT_MESSAGE_MARKER]
        lines.extend(f"{k}: {v}" for k, v in self.headers.items())
        return "\r\n".join(lines) + "\r\n\r\n" + self.body


def parse_ft_message(raw: str) -> FTMessage:
    """
    Parse the native FT envelope:

        FTMSG/1.0
        X-Request-Id: tid_abc
        Message-Type: concept-update

        {"@graph": [...]}

    Raw text without the FTMSG marker is returned as a bare body.
    """
    normalized = raw.replace("\r\n", "\n")
    if not normalized.startswith(FT_MESSAGE_MARKER):
        return FTMessage(headers={}, body=raw)

    head, sep, body = normalized.partition("\n\n")
    if not sep:
        body = ""

    headers: dict[str, str] = {}
    for line in head.split("\n")[1:]:
        if ":" not in line:
            continue
        key, value = line.split(":", 1)
        key = key.strip()
        if key:
            headers[key] = value.strip()
    return FTMessage(headers=headers, body=body)
