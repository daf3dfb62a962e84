"""Printable page for a generated illustration.

The browser opens the returned HTML in a new window.  The page is sized to
A4 with a 20 mm margin, prints itself as soon as the image has loaded and
closes shortly after the print dialog returns.
"""

from html import escape

PRINT_TITLE = "Imprimir Desenho"
CLOSE_DELAY_MS = 100

_PRINT_TEMPLATE = """<!DOCTYPE html>
<html>
  <head>
    <meta charset="utf-8">
    <title>{title}</title>
    <style>
      @page {{ size: A4; margin: 20mm; }}
      body {{ margin: 0; padding: 0; display: flex; justify-content: center; align-items: center; height: 100vh; }}
      img {{ max-width: 100%; max-height: 100%; object-fit: contain; }}
    </style>
  </head>
  <body>
    <img src="{src}" alt="{title}" onload="window.print(); setTimeout(function(){{window.close();}}, {delay});" />
  </body>
</html>
"""


def build_print_page(image_url: str) -> str:
    """Return the HTML document that prints ``image_url``.

    Args:
        image_url: ``data:`` URI or URL of the image.  It is HTML-escaped.

    Raises:
        ValueError: If ``image_url`` is empty.
    """
    if not image_url or not image_url.strip():
        raise ValueError("image_url is required")
    return _PRINT_TEMPLATE.format(
        title=PRINT_TITLE,
        src=escape(image_url.strip(), quote=True),
        delay=CLOSE_DELAY_MS,
    )
