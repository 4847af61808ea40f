"""Character sets and scanners for O(1) classification.

All sets are frozensets for:
- O(1) membership testing (vs O(n) for strings)
- Immutability (thread-safe)
- Module-level caching (no per-call allocation)

Usage:
    from garabato.parsing.charsets import ASCII_PUNCTUATION

    if char in ASCII_PUNCTUATION:  # O(1) lookup
        ...
"""

from collections.abc import Callable

# ASCII punctuation characters; all of them can be backslash-escaped
ASCII_PUNCTUATION: frozenset[str] = frozenset("!\"#$%&'()*+,-./:;<=>?@[\\]^_`{|}~")

ASCII_ALNUM: frozenset[str] = frozenset(
    "abcdefghijklmnopqrstuvwxyzABCDEFGHIJKLMNOPQRSTUVWXYZ0123456789"
)

ASCII_LETTERS: frozenset[str] = frozenset(
    "abcdefghijklmnopqrstuvwxyzABCDEFGHIJKLMNOPQRSTUVWXYZ"
)

# Inline whitespace: what separates words and lines inside a block
WHITESPACE: frozenset[str] = frozenset(" \t\n\r")

DIGITS: frozenset[str] = frozenset("0123456789")

HEX_DIGITS: frozenset[str] = frozenset("0123456789abcdefABCDEF")

# Characters allowed in an HTML tag name besides ASCII alphanumerics
TAG_NAME_CHARS: frozenset[str] = ASCII_ALNUM | frozenset("?!")

# Trailing characters that end a sentence rather than a bare URI
URI_TRAILING_PUNCTUATION: frozenset[str] = frozenset(".;?!:,")


def is_escapable(char: str) -> bool:
    """Check if character can follow a backslash as an escape."""
    return char in ASCII_PUNCTUATION


def scan_while[S](
    text: str,
    pos: int,
    state: S,
    step: Callable[[S, str], S | None],
) -> int:
    """Advance while a stateful predicate holds.

    ``step`` receives the current state and character and returns the next
    state, or None to stop before that character.

    Returns:
        Position of the first rejected character (or len(text)).

    """
    text_len = len(text)
    while pos < text_len:
        next_state = step(state, text[pos])
        if next_state is None:
            break
        state = next_state
        pos += 1
    return pos


def uri_step(open_parens: int, char: str) -> int | None:
    """Scanner step for bare URIs; state is the open paren depth.

    Balanced parentheses stay inside the URI, so
    ``http://en.wikipedia.org/wiki/X_(Y)`` is captured whole while the
    closing paren of ``(http://example.com)`` is left out.
    """
    if char == "(":
        return open_parens + 1
    if char == ")":
        return open_parens - 1 if open_parens > 0 else None
    if char.isspace():
        return None
    return open_parens


# IANA registered URI schemes plus the unofficial coap, doi and javascript.
# See http://www.iana.org/assignments/uri-schemes.html
_UNOFFICIAL_SCHEMES = ("coap", "doi", "javascript")

_OFFICIAL_SCHEMES = (
    "aaa", "aaas", "about", "acap", "cap", "cid", "crid", "data", "dav",
    "dict", "dns", "file", "ftp", "geo", "go", "gopher", "h323", "http",
    "https", "iax", "icap", "im", "imap", "info", "ipp", "iris", "iris.beep",
    "iris.xpc", "iris.xpcs", "iris.lwz", "ldap", "mailto", "mid", "msrp",
    "msrps", "mtqp", "mupdate", "news", "nfs", "ni", "nih", "nntp",
    "opaquelocktoken", "pop", "pres", "rtsp", "service", "session", "shttp",
    "sieve", "sip", "sips", "sms", "snmp", "soap.beep", "soap.beeps", "tag",
    "tel", "telnet", "tftp", "thismessage", "tn3270", "tip", "tv", "urn",
    "vemmi", "ws", "wss", "xcon", "xcon-userid", "xmlrpc.beep",
    "xmlrpc.beeps", "xmpp", "z39.50r", "z39.50s",
)  # fmt: skip

_PROVISIONAL_SCHEMES = (
    "adiumxtra", "afp", "afs", "aim", "apt", "attachment", "aw", "beshare",
    "bitcoin", "bolo", "callto", "chrome", "chrome-extension",
    "com-eventbrite-attendee", "content", "cvs", "dlna-playsingle",
    "dlna-playcontainer", "dtn", "dvb", "ed2k", "facetime", "feed", "finger",
    "fish", "gg", "git", "gizmoproject", "gtalk", "hcp", "icon", "ipn", "irc",
    "irc6", "ircs", "itms", "jar", "jms", "keyparc", "lastfm", "ldaps",
    "magnet", "maps", "market", "message", "mms", "ms-help", "msnim",
    "mumble", "mvn", "notes", "oid", "palm", "paparazzi", "platform", "proxy",
    "psyc", "query", "res", "resource", "rmi", "rsync", "rtmp", "secondlife",
    "sftp", "sgn", "skype", "smb", "soldat", "spotify", "ssh", "steam", "svn",
    "teamspeak", "things", "udp", "unreal", "ut2004", "ventrilo",
    "view-source", "webcal", "wtai", "wyciwyg", "xfire", "xri", "ymsgr",
)  # fmt: skip

URI_SCHEMES: frozenset[str] = frozenset(
    _UNOFFICIAL_SCHEMES + _OFFICIAL_SCHEMES + _PROVISIONAL_SCHEMES
)


def is_uri_scheme(name: str) -> bool:
    """Check if name is a known URI scheme (case-insensitive)."""
    return name.lower() in URI_SCHEMES
