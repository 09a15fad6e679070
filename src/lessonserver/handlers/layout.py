"""
=============================================================================
PAGE LAYOUT
=============================================================================

Every HTML page shares one frame:

    ┌─────────────────────────────────────────────────────────────────────┐
    │ <nav class="navbar">   site title · Home · Course · API · Health    │
    ├─────────────────────────────────────────────────────────────────────┤
    │ <main class="main-content">                                         │
    │     page content                                                    │
    │ </main>                                                             │
    ├─────────────────────────────────────────────────────────────────────┤
    │ <footer class="footer">                                             │
    └─────────────────────────────────────────────────────────────────────┘

Styles come from /css/style.css and the Prism theme; scripts from Prism
(syntax highlighting for code blocks) and /js/app.js.

=============================================================================
"""

PRISM_CDN = "https://cdnjs.cloudflare.com/ajax/libs/prism/1.29.0"


def render_page(title: str, content: str, site_title: str = "HTTP Server",
                course_href: str = "/course/fundamentals/introduction") -> str:
    """Wrap content in the site layout."""
    return (
        "<!DOCTYPE html>"
        '<html lang="en">'
        "<head>"
        '<meta charset="UTF-8">'
        '<meta name="viewport" content="width=device-width, initial-scale=1.0">'
        f"<title>{title}</title>"
        '<link rel="stylesheet" href="/css/style.css">'
        f'<link rel="stylesheet" href="{PRISM_CDN}/themes/prism.min.css">'
        "</head>"
        "<body>"
        '<nav class="navbar">'
        '<div class="nav-container">'
        f'<h1 class="nav-title">🚀 {site_title}</h1>'
        '<ul class="nav-menu">'
        '<li><a href="/">Home</a></li>'
        f'<li><a href="{course_href}">Course</a></li>'
        '<li><a href="/api/users">API</a></li>'
        '<li><a href="/health">Health</a></li>'
        "</ul>"
        "</div>"
        "</nav>"
        '<main class="main-content">'
        f"{content}"
        "</main>"
        '<footer class="footer">'
        f"<p>&copy; {site_title} Course.</p>"
        "</footer>"
        f'<script src="{PRISM_CDN}/components/prism-core.min.js"></script>'
        f'<script src="{PRISM_CDN}/plugins/autoloader/prism-autoloader.min.js"></script>'
        '<script src="/js/app.js"></script>'
        "</body>"
        "</html>"
    )
