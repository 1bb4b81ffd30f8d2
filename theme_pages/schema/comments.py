r"""Strip JavaScript-style comments from JSON text.

Theme authors routinely annotate schema blocks and template JSON with ``//``
and ``/* */`` comments. A regular expression cannot tell a comment apart from
``//`` inside a string value such as ``"https://cdn.example/logo.png"``, so the
stripper below walks the text once and only recognises comment openers while
outside a double-quoted string literal.

Example
-------
>>> from theme_pages.schema.comments import strip_json_comments
>>> strip_json_comments('{"url": "https://x.test/a"} // trailing')
'{"url": "https://x.test/a"} '
"""

from __future__ import annotations


def strip_json_comments(text: str) -> str:
    """Return ``text`` with comments outside string literals removed.

    Parameters
    ----------
    text : str
        JSON (or JSON-with-comments) source.

    Returns
    -------
    str
        The source with ``// ...`` line comments and ``/* ... */`` block
        comments removed. Newlines ending a line comment are kept so line
        numbers in later JSON errors still match the input. An unterminated
        block comment swallows the remainder of the text.
    """
    out: list[str] = []
    length = len(text)
    index = 0
    in_string = False
    while index < length:
        char = text[index]
        if in_string:
            out.append(char)
            if char == "\\" and index + 1 < length:
                out.append(text[index + 1])
                index += 2
                continue
            if char == '"':
                in_string = False
            index += 1
            continue

        if char == '"':
            in_string = True
            out.append(char)
            index += 1
            continue

        nxt = text[index + 1] if index + 1 < length else ""
        if char == "/" and nxt == "/":
            end = text.find("\n", index + 2)
            index = length if end == -1 else end
            continue
        if char == "/" and nxt == "*":
            end = text.find("*/", index + 2)
            index = length if end == -1 else end + 2
            continue

        out.append(char)
        index += 1
    return "".join(out)


__all__ = ["strip_json_comments"]
