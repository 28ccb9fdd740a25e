"""FakeObjectCodec: keeps the Identifier inside a composite node's payload.

Composite ("fake") nodes stand in for content the editor cannot show
directly, e.g. an ``<iframe>`` rendered as a placeholder image.  The real
markup travels in an attribute as a URI-component encoded string::

    data-cke-realelement="%3Ciframe%20src%3D%22x%22%3E%3C%2Fiframe%3E"

The codec decodes that payload, parses the leading open tag into a small
structure (tag name plus attribute tokens, each remembering the whitespace
in front of it), edits the structure, and renders it back.  The Identifier
attribute is always rendered directly after the tag name::

    <iframe data-quail-id="7" src="x"></iframe>

Consumers parse this fragment positionally, so that slot is fixed.  Because
removal drops *every* token carrying the attribute name before insertion,
repeated tagging can never leave a stale or duplicated Identifier behind.
"""

from __future__ import annotations

import html
import re
from dataclasses import dataclass, field
from urllib.parse import quote, unquote

from a11y_checker.errors import PayloadFormatError

__all__ = [
    "FakeObjectCodec",
    "OpenTag",
    "decode_uri_component",
    "encode_uri_component",
]

# Characters encodeURIComponent leaves untouched besides alphanumerics.
_URI_SAFE = "-_.!~*'()"

_TAG_NAME = re.compile(r"<([A-Za-z][\w:-]*)")

# One attribute token: leading whitespace (optional after a quoted value), name,
# optional "=value".
_ATTRIBUTE = re.compile(
    r"""(?P<space>\s*)
        (?P<name>[^\s=/>"']+)
        (?:(?P<eq>\s*=\s*)(?P<value>"[^"]*"|'[^']*'|[^\s>"']+))?""",
    re.VERBOSE,
)


def encode_uri_component(value: str) -> str:
    """Percent-encode ``value`` the way JavaScript's ``encodeURIComponent`` does."""
    return quote(value, safe=_URI_SAFE)


def decode_uri_component(value: str) -> str:
    """Inverse of :func:`encode_uri_component`."""
    return unquote(value)


@dataclass(slots=True)
class _AttributeToken:
    space: str
    name: str
    eq: str = ""
    value: str = ""

    def render(self) -> str:
        return f"{self.space}{self.name}{self.eq}{self.value}"


@dataclass(slots=True)
class OpenTag:
    """Structured view of an HTML fragment's leading open tag.

    Attributes:
        name: Tag name token, exactly as written.
        attributes: Attribute tokens in source order.
        rest: Everything after the last attribute token, starting with the
            tag's closing ``>`` (or ``/>``) and any trailing whitespace.
    """

    name: str
    attributes: list[_AttributeToken] = field(default_factory=list)
    rest: str = ">"

    @classmethod
    def parse(cls, fragment: str) -> OpenTag:
        """Parse ``fragment``; raises PayloadFormatError if it has no open tag."""
        match = _TAG_NAME.match(fragment)
        if match is None:
            msg = f"composite payload does not start with an open tag: {fragment[:40]!r}"
            raise PayloadFormatError(msg)

        tag = cls(name=match.group(1))
        pos = match.end()
        while (token := _ATTRIBUTE.match(fragment, pos)) is not None:
            if not token.group("space") and fragment[pos - 1] not in "\"'":
                break
            tag.attributes.append(
                _AttributeToken(
                    space=token.group("space"),
                    name=token.group("name"),
                    eq=token.group("eq") or "",
                    value=token.group("value") or "",
                )
            )
            pos = token.end()

        tag.rest = fragment[pos:]
        if not tag.rest.lstrip().startswith(("/>", ">")):
            msg = f"unterminated open tag in composite payload: {fragment[:40]!r}"
            raise PayloadFormatError(msg)
        return tag

    def remove(self, name: str) -> bool:
        """Drop every attribute called ``name``; return True if any was present."""
        kept: list[_AttributeToken] = []
        orphaned_space = ""
        for attr in self.attributes:
            if attr.name == name:
                orphaned_space = orphaned_space or attr.space
                continue
            # A token glued to a removed quoted value needs its separator back.
            if orphaned_space and not attr.space:
                attr.space = orphaned_space
            orphaned_space = ""
            kept.append(attr)
        removed = len(kept) != len(self.attributes)
        self.attributes = kept
        return removed

    def insert_first(self, name: str, value: str) -> None:
        """Insert ``name="value"`` directly after the tag name."""
        quoted = '"' + html.escape(value, quote=True) + '"'
        self.attributes.insert(0, _AttributeToken(" ", name, "=", quoted))

    def render(self) -> str:
        attrs = "".join(attr.render() for attr in self.attributes)
        return f"<{self.name}{attrs}{self.rest}"


class FakeObjectCodec:
    """Encodes and strips the Identifier attribute in composite payloads.

    Stateless; a single instance may be shared freely.

    Example::

        codec = FakeObjectCodec()
        payload = encode_uri_component('<iframe src="x"></iframe>')
        tagged = codec.encode_identifier(payload, "data-quail-id", 3)
        decode_uri_component(tagged)   # '<iframe data-quail-id="3" src="x"></iframe>'
        codec.remove_identifier(tagged, "data-quail-id") == payload   # True
    """

    def encode_identifier(self, payload: str, attr_name: str, identifier: int) -> str:
        """Return ``payload`` with exactly one ``attr_name="identifier"`` after the tag name.

        Any earlier occurrence of ``attr_name`` is removed first, which makes
        the operation idempotent for a given identifier.

        Args:
            payload: URI-component encoded fragment starting with an open tag.
            attr_name: Fully qualified attribute name, e.g. ``data-quail-id``.
            identifier: The Identifier to embed.

        Returns:
            The re-encoded payload.

        Raises:
            PayloadFormatError: If the decoded payload has no open tag.
        """
        decoded = decode_uri_component(payload)
        tag, tail = self._split(decoded)
        tag.remove(attr_name)
        tag.insert_first(attr_name, str(identifier))
        return encode_uri_component(tag.render() + tail)

    def remove_identifier(self, payload: str, attr_name: str) -> str:
        """Return ``payload`` without any ``attr_name`` attribute on its open tag.

        A payload without the attribute comes back decoded and re-encoded but
        otherwise unchanged.

        Raises:
            PayloadFormatError: If the decoded payload has no open tag.
        """
        decoded = decode_uri_component(payload)
        tag, tail = self._split(decoded)
        tag.remove(attr_name)
        return encode_uri_component(tag.render() + tail)

    def read_identifier(self, payload: str, attr_name: str) -> str | None:
        """Return the raw value of ``attr_name`` in the payload, or None."""
        tag, _tail = self._split(decode_uri_component(payload))
        for attr in tag.attributes:
            if attr.name == attr_name:
                return html.unescape(attr.value.strip("\"'"))
        return None

    @staticmethod
    def _split(decoded: str) -> tuple[OpenTag, str]:
        """Split a decoded fragment into its open tag and the content after it."""
        tag = OpenTag.parse(decoded)
        # ``rest`` holds the closing bracket plus content; keep the bracket
        # (and any "/" or whitespace before it) on the tag.
        close = tag.rest.index(">") + 1
        tail = tag.rest[close:]
        tag.rest = tag.rest[:close]
        return tag, tail
