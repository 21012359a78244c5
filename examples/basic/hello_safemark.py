"""Render user text to safe HTML in 3 lines — zero config, zero deps."""

from safemark import render

html = render("Hello **World** and [a link](https://example.com)")
print(html)
