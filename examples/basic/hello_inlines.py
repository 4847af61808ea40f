"""Parse a line of inline Markdown into typed nodes with zero config and zero deps."""

from garabato import extract_text, parse_inlines

inlines = parse_inlines(None, "Hello **World**, see http://example.com.")
for node in inlines:
    print(node)
print(extract_text(inlines))
