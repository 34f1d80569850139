"""
HTML-ish tags. `<li>` closes with `</li>` or with the end of its list.
"""


def html_rules():
    return [
        rule("<ul>", "</ul>"),
        rule("<ol>", "</ol>"),
        rule("<li>", "</li>", "</ul>", "</ol>"),
        rule("<p>", "</p>"),
        rule("<div>", "</div>"),
    ]
