"""Render untrusted comment bodies for direct injection into a page.

Shows the memoizing Renderer with entity decoding for content that arrives
pre-encoded from an upstream API, and what happens to hostile input.

Run::

    python examples/comments/render_comments.py

"""

from safemark import RenderConfig, Renderer

comments = [
    "Great post! See [the docs](https://example.com/docs) for **details**.",
    "> quoting you here\n> and here\n\nI disagree with ~~everything~~ most of it.",
    "* first\n* second\n* third",
    "[click me](javascript:alert(document.cookie))",
    "<script>alert('xss')</script>",
    "Upstream sent this &lt;b&gt;encoded&lt;/b&gt; &amp; escaped",
    "    def greet():\n        return 'hi'\nthat was code",
]

renderer = Renderer(config=RenderConfig(decode_entities=True))

for body in comments:
    print("=== Raw ===")
    print(body)
    print("=== HTML ===")
    print(renderer(body))
    print()

# Second pass hits the cache
rendered = renderer.render_many(comments)
print(f"Rendered {len(rendered)} comments again from cache")
