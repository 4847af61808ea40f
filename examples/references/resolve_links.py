"""Reference links: resolve [label] forms against definitions from a block parser."""

from garabato import Image, Link, ReferenceMap, parse_inlines
from garabato.serialization import to_json

refs = ReferenceMap(
    {
        "Docs": ("https://example.com/docs", "Documentation"),
        "logo": ("/static/logo.png", ""),
    }
)

source = "Read the [manual][docs], or just [DOCS]. ![logo] [missing]"
inlines = parse_inlines(refs, source)

for node in inlines:
    match node:
        case Link(url=url, title=title):
            print(f"link  -> {url} ({title or 'no title'})")
        case Image(url=url):
            print(f"image -> {url}")

print(to_json(inlines, indent=2))
